"""Chat session controller.

Owns the transcript, the pending flag, the last error and the latest usage
snapshot of one conversation, and drives exactly one transport call per
accepted submission.
"""

import logging
from collections.abc import Callable

from ..config import CHAT_FAILED_MESSAGE, CHAT_NETWORK_MESSAGE
from ..exceptions import SessionBusyError
from ..transport.base import ChatTransport
from ..transport.models import ChatOutcome, ChatSuccess, ServerFailure, TransportFailure
from .models import Role, SessionState, Turn

logger = logging.getLogger(__name__)

StateListener = Callable[[SessionState], None]


def apply_outcome(state: SessionState, outcome: ChatOutcome) -> SessionState:
    """Merge the result of one exchange into a session state.

    Args:
        state: State while the submission was pending
        outcome: Result reported by the transport

    Returns:
        New idle state. A success appends the assistant turn and replaces
        the usage snapshot when one was reported; a failure only records
        the error message.
    """
    if isinstance(outcome, ChatSuccess):
        reply = Turn(role=Role.ASSISTANT, content=outcome.reply)
        return state.model_copy(update={
            "transcript": state.transcript + (reply,),
            "usage": outcome.usage if outcome.usage is not None else state.usage,
            "pending": False,
        })

    if isinstance(outcome, ServerFailure):
        error = outcome.message or CHAT_FAILED_MESSAGE
    else:
        error = CHAT_NETWORK_MESSAGE

    return state.model_copy(update={"last_error": error, "pending": False})


class SessionController:
    """Controller for one chat session.

    At most one submission is in flight per instance. Admission is
    decided before the first await, so a second ``submit`` issued while
    the first is pending is dropped rather than queued.

    Usage:
        controller = SessionController(transport)
        state = await controller.submit("I have chicken and rice")
        print(state.transcript[-1].content)
    """

    def __init__(self, transport: ChatTransport, on_change: StateListener | None = None):
        """Initialize an empty session.

        Args:
            transport: Transport used to reach the assistant backend
            on_change: Optional callback invoked with every new state
        """
        self._transport = transport
        self._on_change = on_change
        self._state = SessionState()

    def get_state(self) -> SessionState:
        """Return an immutable snapshot of the current state."""
        return self._state

    def reset(self) -> None:
        """Discard the transcript, error and usage snapshot.

        Raises:
            SessionBusyError: If a submission is in flight
        """
        if self._state.pending:
            raise SessionBusyError("Cannot reset while a message is being sent")
        self._set_state(SessionState())

    async def submit(self, text: str) -> SessionState:
        """Send one user message.

        Blank input, or a call made while another submission is pending,
        is ignored. Otherwise the trimmed text is echoed into the
        transcript immediately and sent to the backend; the reply or the
        error is merged in once the call settles.

        Failures never propagate: they are recorded in ``last_error``.

        Args:
            text: Raw user input

        Returns:
            State after the submission settled (or the unchanged state if
            the submission was rejected)
        """
        message = text.strip()
        if not message:
            logger.debug("Ignoring blank submission")
            return self._state
        if self._state.pending:
            logger.debug("Ignoring submission while another is pending")
            return self._state

        self._set_state(self._state.model_copy(update={
            "transcript": self._state.transcript + (Turn(role=Role.USER, content=message),),
            "pending": True,
            "last_error": None,
        }))

        outcome: ChatOutcome | None = None
        try:
            outcome = await self._transport.send_message(message)
        except Exception as e:
            logger.exception("Chat transport raised instead of reporting an outcome")
            outcome = TransportFailure(reason=str(e) or type(e).__name__)
        finally:
            # Cancellation leaves outcome unset; the guard is still released.
            if outcome is None:
                self._set_state(self._state.model_copy(update={"pending": False}))
            else:
                self._log_outcome(outcome)
                self._set_state(apply_outcome(self._state, outcome))

        return self._state

    def _set_state(self, state: SessionState) -> None:
        self._state = state
        if self._on_change is None:
            return
        try:
            self._on_change(state)
        except Exception:
            logger.exception("Session state listener failed")

    @staticmethod
    def _log_outcome(outcome: ChatOutcome) -> None:
        if isinstance(outcome, ChatSuccess):
            logger.debug("Received reply (%d chars)", len(outcome.reply))
        elif isinstance(outcome, ServerFailure):
            logger.warning("Backend refused message: %s (%d)", outcome.message, outcome.status_code)
        else:
            logger.warning("Message not delivered: %s", outcome.reason)
