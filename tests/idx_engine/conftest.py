"""Shared fakes, fixtures and schema builders for remediation engine tests.

The fakes stand in for the transport layer (``proceed`` / actions), the
resolver and the error handler so each engine state can be driven directly.
"""

from __future__ import annotations

from typing import Any

import pytest

from idx_engine import IdxResponse, NextStep, RemediationResult

# ---------------------------------------------------------------------------
# Transport fakes
# ---------------------------------------------------------------------------


class RecordingCall:
    """Async callable that records its arguments and replays queued outcomes.

    Each queued outcome is either a response to return or an exception to
    raise.  The last outcome repeats once the queue runs dry.
    """

    def __init__(self, *outcomes: Any) -> None:
        self._outcomes = list(outcomes)
        self.calls: list[tuple] = []

    async def __call__(self, *args: Any) -> Any:
        self.calls.append(args)
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class StubRemediator:
    """Remediator with canned answers; records what the engine asked."""

    def __init__(
        self,
        name: str = "fubar",
        *,
        can_remediate: bool | list[bool] = False,
        data: dict | None = None,
        values_after: dict | None = None,
        next_step: NextStep | None = None,
    ) -> None:
        self.name = name
        self._can = list(can_remediate) if isinstance(can_remediate, list) else [can_remediate]
        self.data = data or {}
        self.values_after = values_after or {}
        self.next_step = next_step or NextStep(name=name)
        self.can_remediate_calls = 0
        self.after_proceed_responses: list = []

    def get_name(self) -> str:
        return self.name

    def can_remediate(self, context=None) -> bool:
        self.can_remediate_calls += 1
        return self._can.pop(0) if len(self._can) > 1 else self._can[0]

    def get_next_step(self, context=None) -> NextStep:
        return self.next_step

    def get_data(self, values=None) -> dict:
        return dict(self.data if values is None else values)

    def get_values_after_proceed(self, response=None) -> dict:
        self.after_proceed_responses.append(response)
        return dict(self.values_after)


class StubResolver:
    """Resolver replaying queued resolutions and recording every call."""

    def __init__(self, *resolutions: Any) -> None:
        self._resolutions = list(resolutions)
        self.calls: list[tuple] = []

    def resolve(self, response, values, options):
        self.calls.append((response, dict(values), options))
        if len(self._resolutions) > 1:
            return self._resolutions.pop(0)
        return self._resolutions[0] if self._resolutions else None


class RecordingErrorHandler:
    """Error handler returning a fixed result."""

    def __init__(self) -> None:
        self.result = RemediationResult(error=RuntimeError("handled"))
        self.calls: list[tuple] = []

    def __call__(self, client, error, *remediator):
        self.calls.append((client, error, *remediator))
        return self.result


# ---------------------------------------------------------------------------
# Schema builders (shapes as the server sends them)
# ---------------------------------------------------------------------------


def state_handle_field(value: str = "02handle") -> dict:
    return {"name": "stateHandle", "required": True, "value": value, "visible": False, "mutable": False}


def identify_remediation(with_password: bool = True) -> dict:
    fields = [
        {"name": "identifier", "label": "Username", "required": True},
    ]
    if with_password:
        fields.append(
            {
                "name": "credentials",
                "type": "object",
                "required": True,
                "form": {"value": [{"name": "passcode", "label": "Password", "secret": True}]},
            }
        )
    fields += [{"name": "rememberMe", "type": "boolean"}, state_handle_field()]
    return {"name": "identify", "href": "https://idp.test/idp/idx/identify", "method": "POST", "value": fields}


def authenticator_option(label: str, key: str, auth_id: str, method_required: bool = False) -> dict:
    sub_fields = [{"name": "id", "required": True, "value": auth_id, "mutable": False}]
    if method_required:
        sub_fields.append(
            {
                "name": "methodType",
                "required": True,
                "options": [{"label": "SMS", "value": "sms"}, {"label": "Voice", "value": "voice"}],
            }
        )
    return {
        "label": label,
        "value": {"form": {"value": sub_fields}},
        "relatesTo": {"id": auth_id, "key": key, "type": key.split("_")[-1], "displayName": label},
    }


def select_authenticator_remediation(name: str = "select-authenticator-authenticate") -> dict:
    return {
        "name": name,
        "href": "https://idp.test/idp/idx/challenge",
        "value": [
            {
                "name": "authenticator",
                "type": "object",
                "options": [
                    authenticator_option("Email", "okta_email", "aut-email"),
                    authenticator_option("Password", "okta_password", "aut-password"),
                    authenticator_option("Phone", "phone_number", "aut-phone", method_required=True),
                ],
            },
            state_handle_field(),
        ],
    }


def challenge_remediation(auth_type: str = "email", auth_id: str = "aut-email") -> dict:
    return {
        "name": "challenge-authenticator",
        "href": "https://idp.test/idp/idx/challenge/answer",
        "relatesTo": {"type": "object", "value": {"id": auth_id, "type": auth_type, "key": f"okta_{auth_type}"}},
        "value": [
            {
                "name": "credentials",
                "type": "object",
                "required": True,
                "form": {"value": [{"name": "passcode", "label": "Enter code"}]},
            },
            state_handle_field(),
        ],
    }


# ---------------------------------------------------------------------------
# Pytest fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def client():
    """Opaque auth client; the engine only passes it through."""
    return object()


@pytest.fixture
def error_handler():
    return RecordingErrorHandler()


@pytest.fixture
def pending_response():
    """A response offering a single remediation and nothing else."""
    return IdxResponse(
        proceed=RecordingCall(IdxResponse(interaction_code="done")),
        needed_to_proceed=[{"name": "some-remediation"}],
    )
