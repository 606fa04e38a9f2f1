"""Pytest configuration and shared fixtures."""
import asyncio
import json
from collections.abc import Callable

import httpx
import pytest

from mealchat.transport import ChatOutcome, ChatTransport

BASE_URL = "http://example.org"


class FakeTransport(ChatTransport):
    """Scripted chat transport.

    Pops one outcome per message. An exception in the script is raised
    instead of returned. When a gate is given, every call waits for it.
    """

    def __init__(
        self,
        outcomes: list[ChatOutcome | Exception] | None = None,
        gate: asyncio.Event | None = None
    ):
        self.outcomes = list(outcomes or [])
        self.gate = gate
        self.sent: list[str] = []
        self.closed = False

    async def send_message(self, message: str) -> ChatOutcome:
        self.sent.append(message)
        if self.gate is not None:
            await self.gate.wait()
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_transport() -> type[FakeTransport]:
    """Return the scripted transport class."""
    return FakeTransport


@pytest.fixture
def mock_http() -> Callable[..., httpx.AsyncClient]:
    """Return a factory for httpx clients backed by a request handler."""
    def _make(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=BASE_URL,
            transport=httpx.MockTransport(handler),
            **kwargs
        )
    return _make


@pytest.fixture
def request_json() -> Callable[[httpx.Request], dict]:
    """Return a helper decoding a captured request body."""
    def _decode(request: httpx.Request) -> dict:
        return json.loads(request.content)
    return _decode


class FakeMealBackend:
    """In-memory stand-in for the meal-planning backend.

    Auth endpoints answer with the JWT in the JSON body; protected routes
    require an ``Authorization: Bearer <token>`` header and answer 401
    otherwise, as the real middleware does.
    """

    token = "jwt-value"

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.preferences = {"dietary_restrictions": "vegetarian", "max_cooking_time": 30}

    @staticmethod
    def _error(status: int, message: str) -> httpx.Response:
        return httpx.Response(status, json={"status": "error", "message": message})

    def _check_bearer(self, request: httpx.Request) -> httpx.Response | None:
        header = request.headers.get("authorization")
        if not header:
            return self._error(401, "Authorization header required")
        parts = header.split(" ")
        if len(parts) != 2 or parts[0] != "Bearer":
            return self._error(401, "Invalid authorization header format")
        if parts[1] != self.token:
            return self._error(401, "Invalid or expired token")
        return None

    def _signed_in(self, request: httpx.Request, message: str) -> httpx.Response:
        email = json.loads(request.content)["email"]
        return httpx.Response(200, json={
            "status": "ok",
            "message": message,
            "token": self.token,
            "user": {"id": 1, "email": email},
        })

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/auth/login":
            return self._signed_in(request, "Login successful")
        if path == "/auth/register":
            return self._signed_in(request, "User registered successfully")
        if path == "/auth/logout":
            return httpx.Response(200, json={"status": "ok", "message": "Logged out successfully"})
        if path.startswith("/health"):
            return httpx.Response(200, json={"status": "ok"})

        denied = self._check_bearer(request)
        if denied is not None:
            return denied

        if path == "/llm":
            return httpx.Response(200, json={
                "status": "ok",
                "response": "Try chicken fried rice",
                "usage": {"used": 1, "remaining": 9, "limit": 10},
            })
        if path == "/api/preferences" and request.method == "GET":
            return httpx.Response(200, json={"status": "ok", **self.preferences})
        if path == "/api/preferences" and request.method == "PUT":
            self.preferences = json.loads(request.content)
            return httpx.Response(200, json={
                "status": "ok",
                "message": "Preferences updated successfully",
                **self.preferences,
            })
        return self._error(404, "not found")


@pytest.fixture
def meal_backend() -> FakeMealBackend:
    """Return a fresh in-memory backend."""
    return FakeMealBackend()
