from .base import ChatTransport
from .factory import create_chat_transport
from .http import HttpChatTransport
from .models import ChatOutcome, ChatSuccess, ServerFailure, TransportFailure

__all__ = [
    "ChatTransport",
    "create_chat_transport",
    "HttpChatTransport",
    "ChatOutcome",
    "ChatSuccess",
    "ServerFailure",
    "TransportFailure",
]
