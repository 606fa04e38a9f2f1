from typing import Any

from .base import ChatTransport
from .http import HttpChatTransport


def create_chat_transport(kind: str = "http", **config: Any) -> ChatTransport:
    """Create a chat transport instance.

    Args:
        kind: Transport type ('http')
        **config: Transport-specific configuration
            For HTTP:
                - client: httpx.AsyncClient | None (shared client carrying the login credentials)
                - base_url: str (default: 'http://localhost:8080')
                - timeout: float (default: 30.0)
                - chat_path: str (default: '/llm')

    Returns:
        Initialized chat transport

    Raises:
        ValueError: If transport type is not supported

    Examples:
        >>> transport = create_chat_transport("http", base_url="http://localhost:8080")
    """
    kind_lower = kind.lower()

    if kind_lower == "http":
        return HttpChatTransport(**config)

    raise ValueError(
        f"Unsupported transport: {kind}. "
        f"Supported transports: 'http'"
    )
