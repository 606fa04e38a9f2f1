"""Exception hierarchy for mealchat.

The session controller never raises these from a submission; failures there
are recorded in the session state. The backend client raises them for
account and preference operations.
"""


class MealChatError(Exception):
    """Base class for all mealchat errors."""


class BackendError(MealChatError):
    """The backend answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthenticationError(BackendError):
    """Login or registration was refused."""


class NotAuthenticatedError(BackendError):
    """The request needs a logged-in session."""


class BackendConnectionError(BackendError):
    """No response could be obtained from the backend."""


class InvalidInputError(MealChatError):
    """Input was rejected before any request was sent."""


class SessionBusyError(MealChatError):
    """The chat session has a submission in flight."""
