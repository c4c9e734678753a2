# stockpile_api/client/auth.py
import logging
from typing import Callable, List, Optional

from stockpile_api.client.api import ApiClient
from stockpile_api.schemas.user import UserPublic

logger = logging.getLogger(__name__)

Listener = Callable[[Optional[UserPublic]], None]


class AuthService:
    """Client-side holder of the logged-in user and its token.

    Subscribers are called with the new user (or ``None``) whenever the
    state changes; the last write wins.
    """

    def __init__(self, api: ApiClient):
        self.api = api
        self._token: Optional[str] = None
        self._current_user: Optional[UserPublic] = None
        self._listeners: List[Listener] = []

    @property
    def current_user_value(self) -> Optional[UserPublic]:
        return self._current_user

    @property
    def token(self) -> Optional[str]:
        return self._token

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set(self, token: Optional[str], user: Optional[UserPublic]) -> None:
        self._token = token
        self._current_user = user
        for listener in list(self._listeners):
            listener(user)

    def login(self, email: str, password: str) -> UserPublic:
        data = self.api.request("POST", "/auth/login", json={"email": email, "password": password})
        user = UserPublic.model_validate(data["user"])
        self._set(data["token"], user)
        return user

    def logout(self) -> None:
        # Local state is cleared even when the server call fails
        try:
            if self._token:
                self.api.request("POST", "/auth/logout", token=self._token)
        finally:
            self._set(None, None)

    def refresh(self) -> Optional[UserPublic]:
        """Reload the current user from ``/auth/me`` using the held token."""
        if not self._token:
            return None
        data = self.api.request("GET", "/auth/me", token=self._token)
        user = UserPublic.model_validate(data)
        self._set(self._token, user)
        return user


class AuthGuard:
    """Blocks navigation to protected views when nobody is logged in.

    Advisory only; the API enforces authentication on every request.
    """

    def __init__(self, auth_service: AuthService, navigate: Callable[[str], None], login_path: str = "/login"):
        self.auth_service = auth_service
        self.navigate = navigate
        self.login_path = login_path

    def can_activate(self) -> bool:
        if self.auth_service.current_user_value:
            return True
        logger.debug("No current user, redirecting to %s", self.login_path)
        self.navigate(self.login_path)
        return False
