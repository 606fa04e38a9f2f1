from abc import ABC, abstractmethod
from typing import Any

from .models import ChatOutcome


class ChatTransport(ABC):
    """Abstract base class for chat transports.

    This module hides the design decision of how a user message reaches
    the assistant backend. Implementations must handle:
    - Wire format of the request and response
    - Attaching session credentials
    - Mapping every failure to an outcome instead of raising

    Supports async context manager protocol for proper resource cleanup:
        async with transport:
            outcome = await transport.send_message("I have rice")
    """

    @abstractmethod
    async def send_message(self, message: str) -> ChatOutcome:
        """Send one user message and wait for the backend's answer.

        Args:
            message: Trimmed, non-empty user text

        Returns:
            ChatSuccess, ServerFailure or TransportFailure. Network and
            server errors are reported through the outcome, never raised.
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "ChatTransport":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
