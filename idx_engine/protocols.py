"""Public contracts — protocols for the engine's injected collaborators."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from .core.response import IdxResponse
from .core.result import NextStep, RemediationResult


@runtime_checkable
class RemediatorLike(Protocol):
    """The four-operation capability set every remediator satisfies.

    ``Remediator`` and its subclasses satisfy it; tests may pass any object
    with these methods.
    """

    def get_name(self) -> str: ...

    def can_remediate(self, context: Optional[Mapping[str, Any]] = None) -> bool: ...

    def get_next_step(self, context: Optional[Mapping[str, Any]] = None) -> NextStep: ...

    def get_data(self, values: Optional[Mapping[str, Any]] = None) -> dict: ...

    def get_values_after_proceed(self, response: Optional[IdxResponse] = None) -> dict: ...


@runtime_checkable
class ErrorHandlerLike(Protocol):
    """Turns a failed submission into a result the caller can act on."""

    def __call__(
        self, client: Any, error: Exception, remediator: Optional[RemediatorLike] = None
    ) -> RemediationResult: ...


@runtime_checkable
class TerminalDetectorLike(Protocol):
    def __call__(self, response: IdxResponse) -> bool: ...


@runtime_checkable
class MessageExtractorLike(Protocol):
    def __call__(self, response: IdxResponse) -> Sequence[Any]: ...
