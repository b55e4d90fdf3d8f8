"""SelectAuthenticator* — pick one authenticator from the offered options."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from ..normalize import unwrap_form_value
from .base import Remediator, current_authenticator, relation_value


def _authenticator_key(candidate: Any) -> Optional[str]:
    if isinstance(candidate, str):
        return candidate
    if isinstance(candidate, Mapping):
        return candidate.get("key")
    return None


def _option_id(option: Mapping[str, Any]) -> Optional[str]:
    fields = unwrap_form_value(option).get("value")
    if not isinstance(fields, list):
        return None
    return next(
        (f.get("value") for f in fields if isinstance(f, Mapping) and f.get("name") == "id"),
        None,
    )


class SelectAuthenticator(Remediator):
    """Shared logic for the authenticate / enroll selection steps.

    The caller picks with ``values["authenticator"]`` — either an
    authenticator key (``"okta_email"``) or an ``{"id": ..., ...}`` mapping
    — or lists preferences in ``values["authenticators"]``; the first one the
    server offers wins.  ``methodType`` is forwarded when supplied.
    """

    def _options(self) -> List[Dict[str, Any]]:
        field = self.get_field("authenticator") or {}
        return list(field.get("options") or [])

    def _candidates(self) -> List[Any]:
        explicit = self.values.get("authenticator")
        if explicit:
            return [explicit]
        return list(self.values.get("authenticators") or [])

    def _matched_option(self) -> Optional[Dict[str, Any]]:
        options = self._options()
        for candidate in self._candidates():
            key = _authenticator_key(candidate)
            if not key:
                continue
            for option in options:
                related = relation_value(option.get("relatesTo")) or {}
                if related.get("key") == key:
                    return option
        return None

    def selected_authenticator(self) -> Optional[Dict[str, Any]]:
        explicit = self.values.get("authenticator")
        if isinstance(explicit, Mapping) and explicit.get("id"):
            return dict(explicit)
        option = self._matched_option()
        if option is None:
            return None
        return relation_value(option.get("relatesTo")) or {"id": _option_id(option)}

    def map_value(self, name: str, field: Dict[str, Any]) -> Any:
        if name != "authenticator":
            return None
        explicit = self.values.get("authenticator")
        if isinstance(explicit, Mapping) and explicit.get("id"):
            return dict(explicit)
        option = self._matched_option()
        if option is None:
            return None
        selection = {"id": _option_id(option)}
        if self.values.get("methodType"):
            selection["methodType"] = self.values["methodType"]
        return selection

    def can_remediate(self, context: Optional[Mapping[str, Any]] = None) -> bool:
        selected = self.selected_authenticator()
        if selected is None:
            return False
        current = current_authenticator(context)
        # Selecting the authenticator already in play would loop
        if current and current.get("id") and current.get("id") == selected.get("id"):
            return False
        return super().can_remediate(context)

    def get_input(self, field: Dict[str, Any]) -> Any:
        if field.get("name") != "authenticator":
            return None
        options = []
        for option in field.get("options") or []:
            related = relation_value(option.get("relatesTo")) or {}
            options.append({"label": option.get("label"), "value": related.get("key")})
        return {"name": "authenticator", "type": "string", "options": options}

    def get_values_after_proceed(self, response=None) -> Dict[str, Any]:
        values = super().get_values_after_proceed(response)
        if "authenticators" not in self.values:
            return values
        selected = self.selected_authenticator() or {}
        remaining = [
            a
            for a in self.values.get("authenticators") or []
            if not _same_authenticator(a, selected)
        ]
        values["authenticators"] = remaining
        return values


def _same_authenticator(candidate: Any, selected: Mapping[str, Any]) -> bool:
    if not selected:
        return False
    key = _authenticator_key(candidate)
    if key and key == selected.get("key"):
        return True
    return isinstance(candidate, Mapping) and bool(candidate.get("id")) and candidate.get("id") == selected.get("id")


class SelectAuthenticatorAuthenticate(SelectAuthenticator):
    remediation_name = "select-authenticator-authenticate"


class SelectAuthenticatorEnroll(SelectAuthenticator):
    remediation_name = "select-authenticator-enroll"
