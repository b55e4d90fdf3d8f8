"""Identify / IdentifyRecovery — who is signing in."""

from __future__ import annotations

from typing import Any, Dict

from .base import Remediator


class Identify(Remediator):
    remediation_name = "identify"

    aliases = {
        "identifier": ("username", "identifier"),
        "rememberMe": ("rememberMe",),
    }

    def map_value(self, name: str, field: Dict[str, Any]) -> Any:
        if name == "credentials":
            password = self.values.get("password")
            if password:
                return {"passcode": password}
        return None

    def get_input(self, field: Dict[str, Any]) -> Any:
        if field.get("name") == "credentials":
            return {
                "name": "password",
                "type": "string",
                "label": "Password",
                "required": bool(field.get("required")),
                "secret": True,
            }
        return None


class IdentifyRecovery(Identify):
    """Identify the account to recover; no credentials are collected."""

    remediation_name = "identify-recovery"
