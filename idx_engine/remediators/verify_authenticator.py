"""Remediators that submit authenticator credentials."""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Sequence

from .base import Remediator

# Caller value names accepted as the passcode, most specific first
PASSCODE_KEYS = ("verificationCode", "otp", "passcode", "password")


class VerifyAuthenticator(Remediator):
    """Collects ``credentials`` for the authenticator this step relates to.

    Security questions are answered with ``questionKey`` / ``question`` /
    ``answer``; everything else takes a passcode from one of
    ``passcode_keys``.
    """

    passcode_keys: ClassVar[Sequence[str]] = PASSCODE_KEYS

    def map_value(self, name: str, field: Dict[str, Any]) -> Any:
        if name != "credentials":
            return None
        if self.values.get("answer"):
            credentials = {
                "questionKey": self.values.get("questionKey") or "custom",
                "answer": self.values["answer"],
            }
            if self.values.get("question"):
                credentials["question"] = self.values["question"]
            return credentials
        for key in self.passcode_keys:
            if self.values.get(key):
                return {"passcode": self.values[key]}
        return None

    def get_input(self, field: Dict[str, Any]) -> Any:
        if field.get("name") != "credentials":
            return None
        authenticator = self.get_authenticator() or {}
        kind = authenticator.get("type")
        if kind == "security_question":
            return [
                {"name": "questionKey", "type": "string", "required": True},
                {"name": "answer", "type": "string", "required": True, "secret": True},
            ]
        if kind == "password" and "password" in self.passcode_keys:
            name = "password"
        else:
            name = self.passcode_keys[0]
        return {"name": name, "type": "string", "required": True, "secret": kind == "password"}

    def get_values_after_proceed(self, response=None) -> Dict[str, Any]:
        values = super().get_values_after_proceed(response)
        for key in (*self.passcode_keys, "questionKey", "question", "answer"):
            values.pop(key, None)
        return values


class ChallengeAuthenticator(VerifyAuthenticator):
    remediation_name = "challenge-authenticator"


class EnrollAuthenticator(VerifyAuthenticator):
    remediation_name = "enroll-authenticator"


class ResetAuthenticator(VerifyAuthenticator):
    """Sets a new password during recovery."""

    remediation_name = "reset-authenticator"
    passcode_keys = ("newPassword",)


class ReEnrollAuthenticator(ResetAuthenticator):
    remediation_name = "reenroll-authenticator"
