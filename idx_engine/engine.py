"""RemediationEngine — the recursive resolve → execute → recurse driver."""

from __future__ import annotations

import inspect
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Optional

from .config import RemediationConfig
from .core.options import FlowOptions
from .core.response import IdxResponse
from .core.result import RemediationResult
from .errors import RemediationPolicyError
from .helpers import (
    get_messages_from_response,
    get_next_step,
    handle_idx_error,
    is_terminal_response,
)
from .protocols import ErrorHandlerLike, MessageExtractorLike, TerminalDetectorLike
from .remediators import Remediator
from .resolver import ActionInvocation, RemediatorResolver, Resolution

logger = logging.getLogger(__name__)


class EngineState(Enum):
    """What one turn of the engine does with a response."""

    SHORT_CIRCUIT = "short_circuit"
    TERMINAL = "terminal"
    ACTION = "action"
    REMEDIATE = "remediate"
    UNRESOLVED = "unresolved"


async def _call(fn: Callable[..., Any], *args: Any) -> IdxResponse:
    """Invoke a transport callable that may be sync or async."""
    result = fn(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


class RemediationEngine:
    """Drives a server-described authentication flow to its next stop.

    Each turn classifies the response into an :class:`EngineState` and runs
    the single handler for that state::

        engine = RemediationEngine()
        result = await engine.remediate(client, response, {"username": "a"})

    Collaborators (resolver, error handler, terminal detector, message
    extractor) are fixed at construction; the engine keeps no other state,
    so one instance can serve any number of independent flows.
    """

    def __init__(
        self,
        config: Optional[RemediationConfig] = None,
        *,
        resolver: Optional[RemediatorResolver] = None,
        error_handler: Optional[ErrorHandlerLike] = None,
        terminal_detector: Optional[TerminalDetectorLike] = None,
        message_extractor: Optional[MessageExtractorLike] = None,
    ) -> None:
        self.config = config or RemediationConfig()
        self.resolver = resolver or RemediatorResolver(
            self.config.remediators,
            use_generic_remediator=self.config.use_generic_remediator,
            resend_suffix=self.config.resend_suffix,
        )
        self.error_handler = error_handler or handle_idx_error
        self.is_terminal = terminal_detector or is_terminal_response
        self.extract_messages = message_extractor or get_messages_from_response
        self._handlers: Mapping[EngineState, Callable[..., Awaitable[RemediationResult]]] = {
            EngineState.SHORT_CIRCUIT: self._short_circuit,
            EngineState.TERMINAL: self._terminal,
            EngineState.ACTION: self._run_action,
            EngineState.REMEDIATE: self._run_remediator,
            EngineState.UNRESOLVED: self._unresolved,
        }

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def classify_response(self, response: IdxResponse) -> Optional[EngineState]:
        """SHORT_CIRCUIT / TERMINAL, or None when the resolver must decide."""
        if response.interaction_code:
            return EngineState.SHORT_CIRCUIT
        if self.is_terminal(response):
            return EngineState.TERMINAL
        return None

    @staticmethod
    def classify_resolution(resolution: Resolution) -> EngineState:
        if isinstance(resolution, ActionInvocation):
            return EngineState.ACTION
        if resolution is None:
            return EngineState.UNRESOLVED
        return EngineState.REMEDIATE

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    async def remediate(
        self,
        client: Any,
        response: IdxResponse,
        values: Optional[Mapping[str, Any]] = None,
        options: Any = None,
    ) -> RemediationResult:
        """Advance the flow as far as *values* and *options* allow.

        Raises :class:`RemediationPolicyError` when nothing matches and the
        flow is not ``"default"``.  Submission failures never raise; they
        come back as whatever the error handler returns.
        """
        values = dict(values or {})
        options = FlowOptions.coerce(options)

        resolution: Resolution = None
        state = self.classify_response(response)
        if state is None:
            resolution = self.resolver.resolve(response, values, options)
            state = self.classify_resolution(resolution)
        logger.debug("remediate: state=%s remediations=%s", state.value, response.remediation_names)
        return await self._handlers[state](client, response, values, options, resolution)

    async def _handle_error(self, client: Any, error: Exception, *remediator: Any) -> RemediationResult:
        """Delegate a failed submission; the handler's result is returned as-is."""
        result = self.error_handler(client, error, *remediator)
        if inspect.isawaitable(result):
            result = await result
        return result

    # ------------------------------------------------------------------
    # State handlers
    # ------------------------------------------------------------------

    async def _short_circuit(self, client, response, values, options, resolution):
        return RemediationResult(response=response)

    async def _terminal(self, client, response, values, options, resolution):
        messages = self.extract_messages(response)
        return RemediationResult(response=response, terminal=True, messages=messages)

    async def _run_action(
        self,
        client: Any,
        response: IdxResponse,
        values: dict,
        options: FlowOptions,
        invocation: ActionInvocation,
    ) -> RemediationResult:
        try:
            if invocation.via_proceed:
                logger.debug("proceeding with remediation %r from actions", invocation.name)
                next_response = await _call(
                    response.proceed, invocation.name, dict(invocation.params or {})
                )
            elif invocation.params is None:
                logger.debug("invoking action %r", invocation.name)
                next_response = await _call(response.actions[invocation.name])
            else:
                logger.debug("invoking action %r with params", invocation.name)
                next_response = await _call(
                    response.actions[invocation.name], dict(invocation.params)
                )
        except Exception as exc:
            return await self._handle_error(client, exc, invocation.remediator)

        next_response = next_response.replace(request_did_succeed=True)
        if invocation.name == self.config.cancel_action:
            logger.info("flow canceled")
            return RemediationResult(response=next_response, canceled=True)
        return await self.remediate(client, next_response, invocation.values, invocation.options)

    async def _run_remediator(
        self,
        client: Any,
        response: IdxResponse,
        values: dict,
        options: FlowOptions,
        remediator: Remediator,
    ) -> RemediationResult:
        if options.step:
            # Single shot: submit the named step as-is, no chaining
            try:
                next_response = await _call(response.proceed, options.step, {})
            except Exception as exc:
                return await self._handle_error(client, exc)
            return RemediationResult(response=next_response.replace(request_did_succeed=True))

        if not remediator.can_remediate(response.context):
            return RemediationResult(
                response=response, next_step=get_next_step(remediator, response)
            )

        name = remediator.get_name()
        data = remediator.get_data()
        logger.debug("proceeding with remediation %r", name)
        try:
            next_response = await _call(response.proceed, name, data)
        except Exception as exc:
            return await self._handle_error(client, exc, remediator)

        next_response = next_response.replace(request_did_succeed=True)
        messages = ()
        if next_response.raw_idx_state.get("messages"):
            messages = tuple(self.extract_messages(next_response))

        next_values = remediator.get_values_after_proceed(next_response)
        result = await self.remediate(client, next_response, next_values, options)
        if (
            messages
            and isinstance(result, RemediationResult)
            and result.next_step is not None
            and not result.messages
        ):
            result = result.replace(messages=messages)
        return result

    async def _unresolved(self, client, response, values, options, resolution):
        if options.is_default_flow:
            return RemediationResult(response=response)
        raise RemediationPolicyError(response.remediation_names)


async def remediate(
    client: Any,
    response: IdxResponse,
    values: Optional[Mapping[str, Any]] = None,
    options: Any = None,
) -> RemediationResult:
    """Run one ``remediate`` call with a default :class:`RemediationEngine`."""
    return await RemediationEngine().remediate(client, response, values, options)
