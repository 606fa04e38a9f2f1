import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import CHAT_PATH, DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from ..session.models import UsageSnapshot
from .base import ChatTransport
from .models import ChatOutcome, ChatSuccess, ServerFailure, TransportFailure

logger = logging.getLogger(__name__)


def json_object(response: httpx.Response) -> dict[str, Any]:
    """Decode the body as a JSON object; anything else decodes as empty."""
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def _parse_usage(data: dict[str, Any]) -> UsageSnapshot | None:
    raw = data.get("usage")
    if not isinstance(raw, dict):
        return None
    try:
        return UsageSnapshot.model_validate(raw)
    except ValidationError:
        logger.warning("Ignoring malformed usage object: %r", raw)
        return None


class HttpChatTransport(ChatTransport):
    """Chat transport over the backend's JSON HTTP API.

    Hidden design decisions:
    - Request body shape ({"message": ...})
    - Credentials travel in the shared client's default headers and cookie jar
    - Status code and body interpretation
    - httpx exception mapping
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        chat_path: str = CHAT_PATH,
    ):
        """Initialize the HTTP transport.

        Args:
            client: Existing client to share (its headers carry the login
                session). When omitted a private client is created and
                owned by this transport.
            base_url: Backend root URL, used only when creating a client
            timeout: Request timeout in seconds, used only when creating a client
            chat_path: Path of the chat endpoint
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._chat_path = chat_path

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def send_message(self, message: str) -> ChatOutcome:
        logger.debug("POST %s (%d chars)", self._chat_path, len(message))
        try:
            response = await self._client.post(self._chat_path, json={"message": message})
        except httpx.TransportError as e:
            logger.warning("Chat request failed without a response: %s", e)
            return TransportFailure(reason=str(e) or type(e).__name__)

        data = json_object(response)

        if not response.is_success:
            text = data.get("message")
            logger.warning("Chat request returned %d", response.status_code)
            return ServerFailure(
                status_code=response.status_code,
                message=text if isinstance(text, str) and text else None,
            )

        reply = data.get("response")
        if not isinstance(reply, str):
            logger.warning("Chat response %d carried no reply text", response.status_code)
            return ServerFailure(status_code=response.status_code, message=None)

        return ChatSuccess(reply=reply, usage=_parse_usage(data))

    async def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()
