"""Self-service registration remediators."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List

from .base import Remediator


class SelectEnrollProfile(Remediator):
    """Switches an authentication flow to registration; takes no input."""

    remediation_name = "select-enroll-profile"


class EnrollProfile(Remediator):
    """Collects ``userProfile`` attributes.

    Attributes may be passed flat (``values["email"]``) or nested under
    ``values["userProfile"]``; nested values win.
    """

    remediation_name = "enroll-profile"

    def _profile_fields(self, field: Dict[str, Any]) -> List[Dict[str, Any]]:
        return [f for f in field.get("value") or [] if isinstance(f, Mapping)]

    def map_value(self, name: str, field: Dict[str, Any]) -> Any:
        if name != "userProfile":
            return None
        nested = self.values.get("userProfile")
        nested = nested if isinstance(nested, Mapping) else {}
        profile = {}
        for attribute in self._profile_fields(field):
            key = attribute.get("name")
            value = nested.get(key, self.values.get(key))
            if value is not None:
                profile[key] = value
        return profile

    def get_input(self, field: Dict[str, Any]) -> Any:
        if field.get("name") != "userProfile":
            return None
        return [dict(attribute) for attribute in self._profile_fields(field)]
