"""Default collaborators: terminal detection, messages, next steps, errors."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, List, Optional

from .core.response import IdxMessage, IdxResponse
from .core.result import NextStep, RemediationResult
from .errors import IdxResponseError
from .protocols import RemediatorLike

logger = logging.getLogger(__name__)


def is_terminal_response(response: IdxResponse) -> bool:
    """A response with nothing left to do and no authorization artifact."""
    return not response.needed_to_proceed and not response.interaction_code


def _as_message(raw: Any) -> IdxMessage:
    if isinstance(raw, IdxMessage):
        return raw
    if isinstance(raw, Mapping):
        return IdxMessage.model_validate(dict(raw))
    return IdxMessage(message=str(raw))


def _message_values(container: Any) -> List[Any]:
    if isinstance(container, Mapping):
        return list(container.get("value") or [])
    return []


def _field_messages(fields: Any) -> List[Any]:
    """Messages attached to input fields, their forms and object options."""
    if not isinstance(fields, (list, tuple)):
        return []
    messages: List[Any] = []
    for field in fields:
        if not isinstance(field, Mapping):
            continue
        messages.extend(_message_values(field.get("messages")))
        form = field.get("form")
        if isinstance(form, Mapping):
            messages.extend(_field_messages(form.get("value")))
        option_values = [
            option["value"]
            for option in field.get("options") or []
            if isinstance(option, Mapping) and isinstance(option.get("value"), Mapping)
        ]
        messages.extend(_field_messages(option_values))
    return messages


def get_messages_from_response(response: IdxResponse) -> List[IdxMessage]:
    """Global and field-level messages, de-duplicated by ``i18n.key``."""
    raw: List[Any] = _message_values(response.raw_idx_state.get("messages"))
    for remediation in response.needed_to_proceed:
        raw.extend(_field_messages(remediation.value))

    seen: set = set()
    messages: List[IdxMessage] = []
    for message in map(_as_message, raw):
        key = (message.i18n or {}).get("key")
        if key:
            if key in seen:
                continue
            seen.add(key)
        messages.append(message)
    return messages


def can_skip(response: IdxResponse) -> bool:
    return any(r.name == "skip" for r in response.needed_to_proceed)


def can_resend(response: IdxResponse) -> bool:
    return any("resend" in name for name in response.actions)


def get_next_step(remediator: RemediatorLike, response: IdxResponse) -> NextStep:
    """The remediator's next step, decorated with skip/resend availability."""
    step = remediator.get_next_step(response.context)
    if step is None:
        step = NextStep(name=remediator.get_name())
    return step.model_copy(
        update={"can_skip": can_skip(response), "can_resend": can_resend(response)}
    )


def handle_idx_error(
    client: Any, error: Exception, remediator: Optional[RemediatorLike] = None
) -> RemediationResult:
    """Default error handler.

    An :class:`IdxResponseError` carries the server's answer to the failed
    step; it becomes a terminal result or a retry of the same step with the
    server's messages.  Any other failure is returned as ``error`` and the
    flow state is left untouched.
    """
    if not isinstance(error, IdxResponseError):
        logger.error("Step submission failed: %s", error)
        return RemediationResult(error=error)

    response = error.response.replace(request_did_succeed=False)
    messages = get_messages_from_response(response)
    if is_terminal_response(response):
        return RemediationResult(response=response, terminal=True, messages=messages)
    next_step = get_next_step(remediator, response) if remediator is not None else None
    return RemediationResult(response=response, next_step=next_step, messages=messages)
