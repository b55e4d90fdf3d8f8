"""Remediation engine error types."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:
    from .core.response import IdxResponse


class AuthSdkError(Exception):
    """Base error for the remediation engine.

    ``error_summary`` is the human readable text; ``str(err)`` returns it.
    """

    def __init__(
        self,
        summary: str,
        *,
        error_code: str = "INTERNAL",
        error_causes: Sequence[Any] | None = None,
    ) -> None:
        self.error_summary = summary
        self.error_code = error_code
        self.error_causes = list(error_causes or [])
        super().__init__(summary)


class RemediationPolicyError(AuthSdkError):
    """No remediator or action matches the current flow.

    Raised synchronously by the engine when the flow is not ``"default"``.
    ``remediations`` holds the names the server offered.
    """

    def __init__(self, remediations: Sequence[str]) -> None:
        self.remediations = list(remediations)
        super().__init__(
            "No remediation can match current flow, check policy settings "
            f"in your org. Remediations: [{', '.join(self.remediations)}]"
        )


class InputSchemaError(AuthSdkError):
    """An input schema node has an ``options`` shape the validator cannot judge."""

    def __init__(self, summary: str, input: Any = None) -> None:
        self.input = input
        super().__init__(summary)


class IdxResponseError(AuthSdkError):
    """The server rejected a step but answered with a protocol payload.

    Transports raise this so the error handler can turn ``response`` (field
    messages, terminal state) into a result instead of a bare failure.
    """

    def __init__(self, response: "IdxResponse", summary: str = "") -> None:
        self.response = response
        super().__init__(summary or "The server rejected the submitted step.")
