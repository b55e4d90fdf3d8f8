"""Skip — decline an optional step."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from .base import Remediator


class Skip(Remediator):
    """Only proceeds when the caller asked to skip with ``values["skip"]``."""

    remediation_name = "skip"

    def can_remediate(self, context: Optional[Mapping[str, Any]] = None) -> bool:
        return bool(self.values.get("skip")) and super().can_remediate(context)

    def get_values_after_proceed(self, response=None):
        values = super().get_values_after_proceed(response)
        values.pop("skip", None)
        return values
