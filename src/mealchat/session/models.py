"""Data models for chat session state.

These models describe the observable state of one conversation,
independent of how it is rendered or transported.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Author of a turn."""

    USER = "user"
    ASSISTANT = "assistant"


class Turn(BaseModel):
    """One message unit in the transcript."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Who authored the turn")
    content: str = Field(description="Message text")


class UsageSnapshot(BaseModel):
    """Quota counters as last reported by the backend.

    The values are cached verbatim; ``used + remaining == limit`` is
    expected but never checked here.
    """

    model_config = ConfigDict(frozen=True)

    used: int = Field(ge=0, description="Requests consumed")
    remaining: int = Field(ge=0, description="Requests left")
    limit: int = Field(ge=1, description="Total allowance")

    def summary(self) -> str:
        """Render as ``used/limit (remaining remaining)``."""
        return f"{self.used}/{self.limit} ({self.remaining} remaining)"


class SessionState(BaseModel):
    """Complete observable state of a chat session.

    Instances are frozen and replaced as a whole on every change, so a
    reader always sees the four fields from the same point in time.
    """

    model_config = ConfigDict(frozen=True)

    transcript: tuple[Turn, ...] = Field(default=(), description="Ordered turns")
    pending: bool = Field(default=False, description="True while a submission is in flight")
    last_error: str | None = Field(default=None, description="Most recent failure message")
    usage: UsageSnapshot | None = Field(default=None, description="Latest quota snapshot")

    @property
    def last_turn(self) -> Turn | None:
        """Most recent turn, if any."""
        return self.transcript[-1] if self.transcript else None
