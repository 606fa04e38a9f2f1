from .backend import BackendClient
from .models import Credentials, Preferences

__all__ = [
    "BackendClient",
    "Credentials",
    "Preferences",
]
