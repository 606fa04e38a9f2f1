"""
mealchat: client and terminal front-end for a meal-planning assistant.

The session module owns conversation state; transports and the backend
client hide how the assistant service is reached.
"""

__version__ = "0.1.0"

# Session must be imported before transport: transport outcomes reuse its models.
from .session import (
    Role,
    SessionController,
    SessionState,
    Turn,
    UsageSnapshot,
)
from .transport import (
    ChatOutcome,
    ChatSuccess,
    ChatTransport,
    HttpChatTransport,
    ServerFailure,
    TransportFailure,
    create_chat_transport,
)
from .client import BackendClient, Credentials, Preferences

__all__ = [
    "BackendClient",
    "ChatOutcome",
    "ChatSuccess",
    "ChatTransport",
    "Credentials",
    "HttpChatTransport",
    "Preferences",
    "Role",
    "ServerFailure",
    "SessionController",
    "SessionState",
    "TransportFailure",
    "Turn",
    "UsageSnapshot",
    "create_chat_transport",
]
