# stockpile_api/client/api.py
import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx answer from the API, carrying the server's ``error`` message."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return body.get("error") or body.get("message") or response.reason_phrase
    return response.reason_phrase


class ApiClient:
    def __init__(self, base_url: str = "http://localhost:3000", http: Optional[httpx.Client] = None, timeout: float = 10.0):
        # An existing client (e.g. a test client) can be injected
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)

    def request(self, method: str, path: str, *, token: Optional[str] = None, json: Any = None) -> Any:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        try:
            response = self.http.request(method, path, json=json, headers=headers)
        except httpx.RequestError as e:
            logger.error("API request %s %s failed: %s", method, path, e)
            raise

        if response.status_code >= 400:
            raise ApiError(response.status_code, _error_message(response))
        return response.json()

    def close(self) -> None:
        self.http.close()
