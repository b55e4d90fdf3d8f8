"""Remediator base class — one adapter per remediation type."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, Dict, List, Optional, Sequence

from ..core.options import FlowOptions
from ..core.response import IdxRemediation, IdxResponse
from ..core.result import NextStep
from ..normalize import unwrap_form_value
from ..validate import has_value, is_satisfied


def relation_value(relation: Any) -> Optional[Dict[str, Any]]:
    """Resolve a ``relatesTo`` entry to the related object.

    The server sends either the object itself or ``{"type": ..., "value": {...}}``.
    """
    if not isinstance(relation, Mapping):
        return None
    inner = relation.get("value")
    if isinstance(inner, Mapping):
        return dict(inner)
    return dict(relation)


def current_authenticator(context: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """Authenticator already in play for the flow, from the response context."""
    if not context:
        return None
    return relation_value(context.get("currentAuthenticator"))


class Remediator:
    """Adapter between caller values and one remediation's input schema.

    Subclasses set ``remediation_name`` and customise through three hooks:

    - ``aliases`` — caller value names accepted for a schema input
    - ``map_value(name, field)`` — build a schema input's value by hand
    - ``get_input(field)`` — replace a schema input with caller-facing inputs

    A Remediator is built fresh for every turn and never outlives it.
    """

    remediation_name: ClassVar[str] = ""
    aliases: ClassVar[Mapping[str, Sequence[str]]] = {}

    def __init__(
        self,
        remediation: IdxRemediation,
        values: Optional[Mapping[str, Any]] = None,
        options: Optional[FlowOptions] = None,
    ) -> None:
        self.remediation = remediation
        self.values: Dict[str, Any] = dict(values or {})
        self.options = options or FlowOptions()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get_name()!r})"

    def get_name(self) -> str:
        return self.remediation.name

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------

    def get_schema(self) -> List[Dict[str, Any]]:
        """Input schema nodes with their ``form``/``value`` wrapping collapsed."""
        return [unwrap_form_value(field) for field in self.remediation.value]

    def get_field(self, name: str) -> Optional[Dict[str, Any]]:
        return next((f for f in self.get_schema() if f.get("name") == name), None)

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def map_value(self, name: str, field: Dict[str, Any]) -> Any:
        """Return a value for schema input *name*, or None to fall through."""
        return None

    def get_input(self, field: Dict[str, Any]) -> Any:
        """Caller-facing input(s) for *field*, or None for the default."""
        return None

    # ------------------------------------------------------------------
    # Capability set
    # ------------------------------------------------------------------

    def can_remediate(self, context: Optional[Mapping[str, Any]] = None) -> bool:
        data = self.get_data()
        return all(is_satisfied(field, data) for field in self.get_schema())

    def get_value(self, name: str, field: Optional[Dict[str, Any]] = None) -> Any:
        field = field if field is not None else (self.get_field(name) or {})
        mapped = self.map_value(name, field)
        if has_value(mapped):
            return mapped
        for alias in self.aliases.get(name, ()):
            if has_value(self.values.get(alias)):
                return self.values[alias]
        if name in self.values:
            return self.values[name]
        # Immutable inputs arrive with their value preset by the server
        preset = field.get("value")
        if field.get("mutable") is False and preset is not None and not isinstance(preset, list):
            return preset
        return None

    def get_data(self, values: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Submission payload: one entry per schema input that has a value.

        Projects the held values unless *values* is given, in which case a
        fresh remediator of the same type projects those instead.
        """
        if values is not None:
            return type(self)(self.remediation, values, self.options).get_data()
        data: Dict[str, Any] = {}
        for field in self.get_schema():
            name = field.get("name")
            value = self.get_value(name, field)
            if value is not None:
                data[name] = value
        return data

    def get_authenticator(self) -> Optional[Dict[str, Any]]:
        authenticator = relation_value(self.remediation.relates_to)
        if authenticator is None:
            return None
        field = self.get_field("authenticator")
        if field and isinstance(field.get("value"), list):
            for sub in field["value"]:
                if sub.get("name") in ("id", "enrollmentId") and sub.get("value"):
                    authenticator[sub["name"]] = sub["value"]
        return authenticator

    def _alias_for(self, name: str) -> Optional[str]:
        aliases = list(self.aliases.get(name, ()))
        if len(aliases) == 1:
            return aliases[0]
        return next((a for a in aliases if a in self.values), None)

    def get_inputs(self) -> List[Dict[str, Any]]:
        """Inputs the caller is expected to supply for this step."""
        inputs: List[Dict[str, Any]] = []
        for field in self.get_schema():
            if field.get("visible") is False or field.get("mutable") is False:
                continue
            custom = self.get_input(field)
            if custom is None:
                alias = self._alias_for(field["name"]) if field.get("type") != "object" else None
                custom = {**field, "name": alias} if alias else field
            if isinstance(custom, list):
                inputs.extend(custom)
            else:
                inputs.append(custom)
        return inputs

    def get_next_step(self, context: Optional[Mapping[str, Any]] = None) -> NextStep:
        authenticator = self.get_authenticator() or current_authenticator(context)
        return NextStep(
            name=self.get_name(),
            inputs=self.get_inputs(),
            type=(authenticator or {}).get("type"),
            authenticator=authenticator,
        )

    def get_values_after_proceed(self, response: Optional[IdxResponse] = None) -> Dict[str, Any]:
        """Values for the next turn: everything this step did not consume."""
        consumed = {f.get("name") for f in self.get_schema()}
        consumed |= {i.get("name") for i in self.get_inputs()}
        for name in list(consumed):
            consumed |= set(self.aliases.get(name, ()))
        return {k: v for k, v in self.values.items() if k not in consumed}
