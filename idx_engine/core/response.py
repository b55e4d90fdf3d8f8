"""Protocol response snapshot and the descriptors it carries."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

ProceedFunction = Callable[[str, Dict[str, Any]], Union["IdxResponse", Awaitable["IdxResponse"]]]
IdxActionFunction = Callable[..., Union["IdxResponse", Awaitable["IdxResponse"]]]


class IdxRemediation(BaseModel):
    """One entry of ``neededToProceed``: a named step and its input schema.

    ``value`` is the list of input schema nodes exactly as the server sent
    them (possibly still ``form``/``value`` wrapped).  Unmodelled protocol
    keys are kept as extras so the generic remediator can surface them.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    name: str = Field(..., description="Protocol identifier, e.g. 'identify'")
    value: List[Dict[str, Any]] = Field(
        default_factory=list, description="Input schema nodes for this step"
    )
    href: Optional[str] = None
    method: Optional[str] = None
    rel: Optional[List[str]] = None
    accepts: Optional[str] = None
    produces: Optional[str] = None
    relates_to: Optional[Any] = Field(default=None, alias="relatesTo")
    refresh: Optional[int] = None


class IdxMessage(BaseModel):
    """A server message (global or attached to a field)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    message: str = ""
    class_: Optional[str] = Field(default=None, alias="class")
    i18n: Optional[Dict[str, Any]] = None


def _readonly(mapping: Any) -> MappingProxyType:
    if isinstance(mapping, MappingProxyType):
        return mapping
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class IdxResponse:
    """Immutable snapshot of the flow state returned by the server.

    ``proceed`` and ``actions`` are the step-submission capability supplied by
    the transport layer; both may be sync or async and both return a *new*
    ``IdxResponse``.  Nothing here is ever mutated -- use ``.replace()``.
    """

    proceed: Optional[ProceedFunction] = None
    needed_to_proceed: tuple = field(default_factory=tuple)
    actions: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))
    interaction_code: Optional[str] = None
    raw_idx_state: MappingProxyType = field(
        default_factory=lambda: MappingProxyType({})
    )
    context: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))
    request_did_succeed: Optional[bool] = None

    def __post_init__(self) -> None:
        remediations = tuple(
            r if isinstance(r, IdxRemediation) else IdxRemediation.model_validate(r)
            for r in self.needed_to_proceed
        )
        object.__setattr__(self, "needed_to_proceed", remediations)
        object.__setattr__(self, "actions", _readonly(self.actions))
        object.__setattr__(self, "raw_idx_state", _readonly(self.raw_idx_state))
        object.__setattr__(self, "context", _readonly(self.context))

    def replace(self, **changes: Any) -> "IdxResponse":
        """Return a new IdxResponse with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def find_remediation(self, name: str) -> Optional[IdxRemediation]:
        """Return the offered remediation called *name*, if any."""
        return next((r for r in self.needed_to_proceed if r.name == name), None)

    @property
    def remediation_names(self) -> list[str]:
        return [r.name for r in self.needed_to_proceed]
