"""Poll remediators — steps the server completes out of band."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from ..core.result import NextStep
from .base import Remediator, current_authenticator


class EnrollPoll(Remediator):
    """Waits for an out-of-band enrollment (push, magic link, ...).

    Never self-satisfies: the engine always hands it back as the next step,
    with the poll target and state handle an external poller needs to call
    back into the flow.
    """

    remediation_name = "enroll-poll"

    def can_remediate(self, context: Optional[Mapping[str, Any]] = None) -> bool:
        return False

    def get_next_step(self, context: Optional[Mapping[str, Any]] = None) -> NextStep:
        authenticator = self.get_authenticator() or current_authenticator(context)
        return NextStep(
            name=self.get_name(),
            type=(authenticator or {}).get("type"),
            authenticator=authenticator,
            poll_url=self.remediation.href,
            state_handle=self.get_value("stateHandle"),
            refresh=self.remediation.refresh,
        )


class ChallengePoll(EnrollPoll):
    remediation_name = "challenge-poll"
