"""Client-side authentication session.

``AuthSession`` is an explicit state machine::

    loading --start()/load_user() ok--> authenticated
    loading --no token / load fails---> unauthenticated
    *       --login()/register() ok---> authenticated
    *       --logout() / any 401-------> unauthenticated

Every request goes through :meth:`AuthSession.request`, which attaches the
stored bearer token and drops the session on a 401.
"""

import enum
import logging
from typing import Any, Callable

import httpx

from ucms.client.storage import MemoryStorage

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"


class AuthState(str, enum.Enum):
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


class ApiError(Exception):
    """A failed API call; ``message`` is what the server said, verbatim."""

    def __init__(self, status_code: int | None, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


def _error_message(data: Any, default: str) -> str:
    if isinstance(data, dict):
        for key in ("error", "message", "detail"):
            if data.get(key):
                return str(data[key])
    return default


class AuthSession:
    def __init__(
        self,
        http: httpx.Client,
        storage=None,
        api_prefix: str = "/api",
    ):
        self.http = http
        self.storage = storage if storage is not None else MemoryStorage()
        self.api_prefix = api_prefix.rstrip("/")
        self.state = AuthState.LOADING
        self.user: dict | None = None
        self._listeners: list[Callable[["AuthSession"], None]] = []

    # state

    @property
    def token(self) -> str | None:
        return self.storage.get(TOKEN_KEY)

    @property
    def is_authenticated(self) -> bool:
        return self.state is AuthState.AUTHENTICATED

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and bool(self.user) and self.user.get("role") == "admin"

    def subscribe(self, listener: Callable[["AuthSession"], None]) -> Callable[[], None]:
        """Call ``listener`` after every state change; returns an unsubscribe."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _transition(self, state: AuthState, user: dict | None) -> None:
        self.state = state
        self.user = user
        for listener in list(self._listeners):
            listener(self)

    def _authenticated(self, user: dict, token: str | None = None) -> None:
        if token:
            self.storage.set(TOKEN_KEY, token)
        self._transition(AuthState.AUTHENTICATED, user)

    def _unauthenticated(self) -> None:
        self.storage.remove(TOKEN_KEY)
        self._transition(AuthState.UNAUTHENTICATED, None)

    # transport

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        authenticate: bool = True,
        default_error: str = "Something went wrong",
    ) -> Any:
        headers = {"Content-Type": "application/json"}
        token = self.token
        if authenticate and token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = self.http.request(
                method, f"{self.api_prefix}{path}", json=json, headers=headers
            )
        except httpx.HTTPError as exc:
            raise ApiError(None, str(exc) or "Network error") from exc

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_error:
            if response.status_code == 401 and authenticate:
                self._unauthenticated()
            raise ApiError(
                response.status_code, _error_message(data, default_error)
            )

        return data

    # actions

    def start(self) -> AuthState:
        """Resolve the initial ``loading`` state from the stored token."""
        if not self.token:
            self._unauthenticated()
            return self.state

        try:
            self.load_user()
        except ApiError:
            pass
        return self.state

    def load_user(self) -> dict:
        try:
            data = self.request("GET", "/auth/me")
        except ApiError as exc:
            logger.warning("Error loading user: %s", exc.message)
            # a 401 has already dropped the session inside request()
            if self.state is not AuthState.UNAUTHENTICATED:
                self._unauthenticated()
            else:
                self.storage.remove(TOKEN_KEY)
            raise
        self._authenticated(data)
        return data

    def login(self, email: str, password: str) -> dict:
        return self._credentials(
            "/auth/login", {"email": email, "password": password}, "Login failed"
        )

    def register(self, name: str, email: str, password: str) -> dict:
        return self._credentials(
            "/auth/register",
            {"name": name, "email": email, "password": password},
            "Registration failed",
        )

    def _credentials(self, path: str, body: dict, failure: str) -> dict:
        try:
            data = self.request(
                "POST", path, json=body, authenticate=False, default_error=failure
            )
        except ApiError:
            self._unauthenticated()
            raise
        self._authenticated(data["user"], data["token"])
        return data

    def logout(self) -> None:
        self._unauthenticated()
