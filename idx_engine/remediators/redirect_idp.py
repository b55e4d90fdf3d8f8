"""RedirectIdp — hand the user off to an external identity provider."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from ..core.result import NextStep
from .base import Remediator


class RedirectIdp(Remediator):
    """Completed by a browser redirect, never by a submission."""

    remediation_name = "redirect-idp"

    def can_remediate(self, context: Optional[Mapping[str, Any]] = None) -> bool:
        return False

    def get_next_step(self, context: Optional[Mapping[str, Any]] = None) -> NextStep:
        extra = self.remediation.model_extra or {}
        return NextStep(
            name=self.get_name(),
            type=extra.get("type"),
            href=self.remediation.href,
            idp=extra.get("idp"),
        )
