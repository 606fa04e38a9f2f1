import logging
from typing import Any

import httpx

from ..config import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    HEALTH_PATHS,
    LOGIN_FAILED_MESSAGE,
    LOGIN_PATH,
    LOGOUT_PATH,
    MIN_PASSWORD_LENGTH,
    NETWORK_MESSAGE,
    PREFERENCES_LOAD_FAILED_MESSAGE,
    PREFERENCES_PATH,
    PREFERENCES_SAVE_FAILED_MESSAGE,
    REGISTER_FAILED_MESSAGE,
    REGISTER_PATH,
)
from ..exceptions import (
    AuthenticationError,
    BackendConnectionError,
    BackendError,
    InvalidInputError,
    NotAuthenticatedError,
)
from ..transport.http import HttpChatTransport, json_object
from .models import Credentials, Preferences

logger = logging.getLogger(__name__)


def _error_text(data: dict[str, Any], *keys: str) -> str | None:
    """First non-empty string found under the given keys."""
    for key in keys:
        value = data.get(key)
        if isinstance(value, str) and value:
            return value
    return None


class BackendClient:
    """Async client for the meal-planning backend.

    Hidden design decisions:
    - One httpx client, so the bearer token returned at login (and any
      cookie the backend sets) is attached to every later request,
      including chat messages
    - Endpoint paths and payload shapes
    - Mapping of status codes to exceptions

    Supports async context manager protocol:
        async with BackendClient() as client:
            await client.login(Credentials(email=..., password=...))
            transport = client.chat_transport()
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        **client_kwargs: Any
    ):
        """Initialize the client.

        Args:
            base_url: Backend root URL
            timeout: Request timeout in seconds
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, **client_kwargs)

    @property
    def http(self) -> httpx.AsyncClient:
        return self._client

    @property
    def is_logged_in(self) -> bool:
        """Whether a bearer token is attached to outgoing requests."""
        return "Authorization" in self._client.headers

    def chat_transport(self) -> HttpChatTransport:
        """Chat transport sharing this client's connection and credentials."""
        return HttpChatTransport(client=self._client)

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s %s", method, path)
        try:
            return await self._client.request(method, path, **kwargs)
        except httpx.TransportError as e:
            logger.warning("%s %s failed without a response: %s", method, path, e)
            raise BackendConnectionError(NETWORK_MESSAGE) from e

    def _authorize(self, data: dict[str, Any], failure_message: str) -> None:
        """Attach the JWT from a login or register response to the client."""
        token = data.get("token")
        if not isinstance(token, str) or not token:
            raise AuthenticationError(f"{failure_message}: no token in response")
        self._client.headers["Authorization"] = f"Bearer {token}"

    async def login(self, credentials: Credentials) -> None:
        """Sign in and keep the returned token for later requests.

        Raises:
            AuthenticationError: If the backend rejects the credentials or returns no token
            BackendConnectionError: If the backend cannot be reached
        """
        response = await self._request("POST", LOGIN_PATH, json=credentials.model_dump())
        if not response.is_success:
            data = json_object(response)
            raise AuthenticationError(
                _error_text(data, "error", "message") or LOGIN_FAILED_MESSAGE,
                status_code=response.status_code,
            )
        self._authorize(json_object(response), LOGIN_FAILED_MESSAGE)
        logger.info("Logged in as %s", credentials.email)

    async def register(self, email: str, password: str, confirm_password: str) -> None:
        """Create an account. The backend logs the new user in.

        Args:
            email: Account email
            password: Chosen password
            confirm_password: Repeated password, must match

        Raises:
            InvalidInputError: If the password is too short or not confirmed
            AuthenticationError: If the backend refuses the registration or returns no token
            BackendConnectionError: If the backend cannot be reached
        """
        if len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidInputError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if password != confirm_password:
            raise InvalidInputError("Passwords do not match")

        credentials = Credentials(email=email, password=password)
        response = await self._request("POST", REGISTER_PATH, json=credentials.model_dump())
        if not response.is_success:
            data = json_object(response)
            raise AuthenticationError(
                _error_text(data, "error", "message") or REGISTER_FAILED_MESSAGE,
                status_code=response.status_code,
            )
        self._authorize(json_object(response), REGISTER_FAILED_MESSAGE)
        logger.info("Registered %s", email)

    async def logout(self) -> None:
        """End the session and drop the local credentials."""
        response = await self._request("POST", LOGOUT_PATH)
        if not response.is_success:
            raise BackendError(
                _error_text(json_object(response), "message") or "Logout failed",
                status_code=response.status_code,
            )
        self._client.headers.pop("Authorization", None)
        self._client.cookies.clear()

    async def get_preferences(self) -> Preferences:
        """Load the user's preferences.

        Raises:
            NotAuthenticatedError: If no session is active
            BackendError: On any other failure status
        """
        response = await self._request("GET", PREFERENCES_PATH)
        if response.status_code == 401:
            raise NotAuthenticatedError(
                _error_text(json_object(response), "message") or "Not logged in",
                status_code=401,
            )
        if not response.is_success:
            raise BackendError(PREFERENCES_LOAD_FAILED_MESSAGE, status_code=response.status_code)

        data = json_object(response)
        return Preferences(
            dietary_restrictions=data.get("dietary_restrictions") or "",
            max_cooking_time=data.get("max_cooking_time") or 0,
        )

    async def update_preferences(self, preferences: Preferences) -> Preferences:
        """Save the user's preferences.

        Returns:
            Preferences as echoed back by the backend

        Raises:
            NotAuthenticatedError: If no session is active
            BackendError: On any other failure status
        """
        response = await self._request("PUT", PREFERENCES_PATH, json=preferences.model_dump())
        data = json_object(response)
        if response.status_code == 401:
            raise NotAuthenticatedError(
                _error_text(data, "message") or "Not logged in",
                status_code=401,
            )
        if not response.is_success:
            raise BackendError(
                _error_text(data, "message") or PREFERENCES_SAVE_FAILED_MESSAGE,
                status_code=response.status_code,
            )
        return Preferences(
            dietary_restrictions=data.get("dietary_restrictions", preferences.dietary_restrictions),
            max_cooking_time=data.get("max_cooking_time", preferences.max_cooking_time),
        )

    async def health(self) -> dict[str, bool]:
        """Probe the backend's health endpoints.

        Returns:
            Mapping of check name ('server', 'database', 'llm') to status.
            An unreachable backend reports every check as False.
        """
        results: dict[str, bool] = {}
        for name, path in HEALTH_PATHS.items():
            try:
                response = await self._request("GET", path)
            except BackendConnectionError:
                results[name] = False
                continue
            results[name] = response.is_success
        return results

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "BackendClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
