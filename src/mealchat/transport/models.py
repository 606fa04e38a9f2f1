"""Outcome models for a single chat exchange.

Every call to a chat transport resolves to exactly one of these, so the
session controller can branch on the result without catching exceptions.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..session.models import UsageSnapshot


class ChatSuccess(BaseModel):
    """The backend produced a reply."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    reply: str = Field(description="Assistant reply text")
    usage: UsageSnapshot | None = Field(
        default=None,
        description="Quota snapshot, when the backend reported one"
    )


class ServerFailure(BaseModel):
    """The backend answered with a non-success status."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["server_failure"] = "server_failure"
    status_code: int = Field(description="HTTP status code")
    message: str | None = Field(
        default=None,
        description="Human-readable message from the response body"
    )


class TransportFailure(BaseModel):
    """No response was obtained."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["transport_failure"] = "transport_failure"
    reason: str = Field(description="Description of the underlying error")


ChatOutcome = Annotated[
    ChatSuccess | ServerFailure | TransportFailure,
    Field(discriminator="kind"),
]
