"""Caller intent for one remediation turn."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

DEFAULT_FLOW = "default"


@dataclass(frozen=True)
class ActionSpec:
    """One entry of ``FlowOptions.actions``.

    ``params is None`` means the entry was given as a bare name and the
    action is invoked without arguments.
    """

    name: str
    params: Optional[Mapping[str, Any]] = None

    @classmethod
    def coerce(cls, entry: Any) -> "ActionSpec":
        if isinstance(entry, ActionSpec):
            return entry
        if isinstance(entry, str):
            return cls(name=entry)
        if isinstance(entry, Mapping):
            return cls(
                name=entry["name"],
                params=MappingProxyType(dict(entry.get("params") or {})),
            )
        raise TypeError(f"Unsupported action entry: {entry!r}")


@dataclass(frozen=True)
class FlowOptions:
    """Frozen flow options forwarded from turn to turn.

    The engine never mutates options; consumed actions are dropped with
    :meth:`next_turn`, which returns a new instance.
    """

    step: Optional[str] = None
    actions: tuple = field(default_factory=tuple)
    flow: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "actions", tuple(ActionSpec.coerce(a) for a in self.actions or ())
        )

    @classmethod
    def coerce(cls, options: Any) -> "FlowOptions":
        """Accept ``None``, a plain mapping, or an existing FlowOptions."""
        if options is None:
            return cls()
        if isinstance(options, FlowOptions):
            return options
        return cls(
            step=options.get("step"),
            actions=tuple(options.get("actions") or ()),
            flow=options.get("flow"),
        )

    @property
    def is_default_flow(self) -> bool:
        return self.flow == DEFAULT_FLOW

    def replace(self, **changes: Any) -> "FlowOptions":
        """Return a new FlowOptions with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def next_turn(self) -> "FlowOptions":
        """Return a copy with the first action entry consumed."""
        return self.replace(actions=self.actions[1:])
