# stockpile_api/client/stockpiles.py
from typing import Any, Dict, List

from stockpile_api.client.api import ApiClient
from stockpile_api.client.auth import AuthService


class StockpileService:
    def __init__(self, api: ApiClient, auth: AuthService):
        self.api = api
        self.auth = auth

    def _call(self, method: str, path: str, json: Any = None) -> Any:
        return self.api.request(method, path, token=self.auth.token, json=json)

    def create_stockpile(self, stockpile_data: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("POST", "/stockpiles", json=stockpile_data)

    def get_all_stockpiles(self) -> List[Dict[str, Any]]:
        return self._call("GET", "/stockpiles")

    def get_stockpile(self, stockpile_id: int) -> Dict[str, Any]:
        return self._call("GET", f"/stockpiles/{stockpile_id}")

    def update_stockpile(self, stockpile_id: int, stockpile_data: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("PUT", f"/stockpiles/{stockpile_id}", json=stockpile_data)

    def delete_stockpile(self, stockpile_id: int) -> Dict[str, Any]:
        return self._call("DELETE", f"/stockpiles/{stockpile_id}")
