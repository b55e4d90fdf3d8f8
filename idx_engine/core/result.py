"""Result types returned to the caller."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .response import IdxResponse


class NextStep(BaseModel):
    """What the caller must supply (or wait for) before the flow can advance."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field(..., description="Remediation name to resume with")
    inputs: List[Dict[str, Any]] = Field(
        default_factory=list, description="Caller-facing input descriptors"
    )
    type: Optional[str] = None
    authenticator: Optional[Dict[str, Any]] = None
    can_skip: bool = Field(default=False, alias="canSkip")
    can_resend: bool = Field(default=False, alias="canResend")

    # Poll steps
    poll_url: Optional[str] = Field(default=None, alias="pollUrl")
    state_handle: Optional[str] = Field(default=None, alias="stateHandle")
    refresh: Optional[int] = None

    # Redirect steps
    href: Optional[str] = None


@dataclass(frozen=True)
class RemediationResult:
    """Outcome of one ``remediate`` call.

    Exactly one shape is populated:

    - ``response`` only — flow finished or was short-circuited
    - ``response`` + ``terminal`` + ``messages`` — protocol terminal state
    - ``response`` + ``next_step`` (+ ``messages``) — more input needed
    - ``response`` + ``canceled`` — the cancel action ran
    - ``error`` — a submission failed without a protocol payload
    """

    response: Optional[IdxResponse] = None
    next_step: Optional[NextStep] = None
    terminal: bool = False
    canceled: bool = False
    messages: tuple = field(default_factory=tuple)
    error: Optional[Exception] = None

    def __post_init__(self) -> None:
        if not isinstance(self.messages, tuple):
            object.__setattr__(self, "messages", tuple(self.messages or ()))

    def replace(self, **changes: Any) -> "RemediationResult":
        """Return a new RemediationResult with the given fields replaced."""
        return dataclasses.replace(self, **changes)
