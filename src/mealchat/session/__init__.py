"""Chat session module for mealchat.

Provides the in-memory conversation state and the controller that drives
one exchange at a time.
"""

from .models import Role, SessionState, Turn, UsageSnapshot
from .controller import SessionController, apply_outcome

__all__ = [
    "Role",
    "SessionController",
    "SessionState",
    "Turn",
    "UsageSnapshot",
    "apply_outcome",
]
