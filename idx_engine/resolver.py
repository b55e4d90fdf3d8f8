"""Remediator resolver — pick what to run for the current turn."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from .core.options import FlowOptions
from .core.response import IdxRemediation, IdxResponse
from .flows import get_remediators
from .remediators import GenericRemediator, Remediator

logger = logging.getLogger(__name__)

RESEND_FLAG = "resend"


@dataclass(frozen=True)
class ActionInvocation:
    """A resolved action, or a remediation named by an action entry.

    ``via_proceed`` is True when *name* is a remediation, submitted through
    ``response.proceed(name, params)``; otherwise ``response.actions[name]``
    is called, with ``params`` or with no arguments when ``params`` is None.

    ``values`` / ``options`` are what the next turn receives: the resend flag
    stripped and the consumed action entry removed.  ``remediator`` is handed
    to the error handler when the call fails.
    """

    name: str
    params: Optional[Mapping[str, Any]] = None
    via_proceed: bool = False
    remediator: Optional[Remediator] = None
    values: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    options: FlowOptions = field(default_factory=FlowOptions)


Resolution = Union[Remediator, ActionInvocation, None]


class RemediatorResolver:
    """Select the single Remediator or action to execute for a response.

    Resolution order, first match wins:

    1. ``values["resend"] is True`` and a ``*-resend`` action is offered
    2. the first ``options.actions`` entry — an action first, then a
       remediation with that name; anything else resolves to None
    3. ``options.step`` — the remediation with that name, with empty values
    4. the first registered remediator that can remediate, else the first
       registered one, else a ``GenericRemediator`` for the first remediation

    Never mutates the response.  ``None`` is a valid outcome.
    """

    def __init__(
        self,
        remediators: Optional[Mapping[str, type[Remediator]]] = None,
        *,
        use_generic_remediator: bool = True,
        resend_suffix: str = "-resend",
    ) -> None:
        self.remediators = remediators
        self.use_generic_remediator = use_generic_remediator
        self.resend_suffix = resend_suffix

    def registry(self, options: FlowOptions) -> Mapping[str, type[Remediator]]:
        if self.remediators is not None:
            return self.remediators
        return get_remediators(options.flow)

    def build(
        self,
        remediation: IdxRemediation,
        values: Mapping[str, Any],
        options: FlowOptions,
    ) -> Remediator:
        """Instantiate the registered variant for *remediation*, or the generic one."""
        cls = self.registry(options).get(remediation.name, GenericRemediator)
        return cls(remediation, values, options)

    def find_resend_action(self, response: IdxResponse) -> Optional[str]:
        if response.needed_to_proceed:
            exact = f"{response.needed_to_proceed[0].name}{self.resend_suffix}"
            if exact in response.actions:
                return exact
        return next((name for name in response.actions if self.resend_suffix in name), None)

    def resolve(
        self,
        response: IdxResponse,
        values: Mapping[str, Any],
        options: FlowOptions,
    ) -> Resolution:
        forwarded = {k: v for k, v in values.items() if k != RESEND_FLAG}

        if values.get(RESEND_FLAG) is True:
            name = self.find_resend_action(response)
            if name is not None:
                return ActionInvocation(
                    name=name,
                    remediator=self.resolve_default(response, forwarded, options),
                    values=forwarded,
                    options=options.next_turn(),
                )

        if options.actions:
            entry = options.actions[0]
            remaining = options.next_turn()
            if entry.name in response.actions:
                return ActionInvocation(
                    name=entry.name,
                    params=entry.params,
                    remediator=self.resolve_default(response, forwarded, options),
                    values=forwarded,
                    options=remaining,
                )
            remediation = response.find_remediation(entry.name)
            if remediation is not None:
                return ActionInvocation(
                    name=entry.name,
                    params=dict(entry.params or {}),
                    via_proceed=True,
                    remediator=self.build(remediation, forwarded, options),
                    values=forwarded,
                    options=remaining,
                )
            logger.warning(
                "action %r matched no action or remediation (offered: %s)",
                entry.name,
                response.remediation_names,
            )
            return None

        if options.step:
            remediation = response.find_remediation(options.step)
            if remediation is None:
                logger.warning("step %r did not match any remediations", options.step)
                return None
            return self.build(remediation, {}, options)

        return self.resolve_default(response, forwarded, options)

    def resolve_default(
        self,
        response: IdxResponse,
        values: Mapping[str, Any],
        options: FlowOptions,
    ) -> Optional[Remediator]:
        registry = self.registry(options)
        candidates = []
        for remediation in response.needed_to_proceed:
            cls = registry.get(remediation.name)
            if cls is None:
                continue
            remediator = cls(remediation, values, options)
            if remediator.can_remediate(response.context):
                return remediator
            candidates.append(remediator)
        if candidates:
            return candidates[0]
        if self.use_generic_remediator and response.needed_to_proceed:
            return GenericRemediator(response.needed_to_proceed[0], values, options)
        return None
