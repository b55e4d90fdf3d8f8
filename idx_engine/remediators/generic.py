"""GenericRemediator — built straight from the protocol schema."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from ..core.result import NextStep
from .base import Remediator, current_authenticator, relation_value

# Transport details that never reach the caller
_HIDDEN_KEYS = frozenset(
    {"name", "href", "method", "rel", "accepts", "produces", "value", "relatesTo", "refresh"}
)


class GenericRemediator(Remediator):
    """Handles any remediation the registry does not model.

    Values are matched to inputs by their schema names as-is — no aliases,
    no mapping hooks.  ``stateHandle`` is kept out of the caller-facing
    inputs but still submitted.
    """

    def get_inputs(self) -> List[Dict[str, Any]]:
        inputs = []
        for field in self.get_schema():
            if field.get("name") == "stateHandle":
                continue
            inputs.append({**field, "type": field.get("type") or "string"})
        return inputs

    def get_next_step(self, context: Optional[Mapping[str, Any]] = None) -> NextStep:
        rest = {
            k: v
            for k, v in self.remediation.model_dump(by_alias=True, exclude_none=True).items()
            if k not in _HIDDEN_KEYS
        }
        authenticator = relation_value(self.remediation.relates_to) or current_authenticator(context)
        if authenticator is not None:
            rest.setdefault("authenticator", authenticator)
            rest.setdefault("type", authenticator.get("type"))
        return NextStep(name=self.get_name(), inputs=self.get_inputs(), **rest)
