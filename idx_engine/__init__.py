"""Client-side remediation engine for server-driven authentication flows.

Public surface::

    from idx_engine import (
        remediate,
        RemediationEngine,
        RemediationConfig,
        RemediatorResolver,
        IdxResponse,
        FlowOptions,
        RemediationResult,
        NextStep,
        AuthSdkError,
        RemediationPolicyError,
    )
"""

from .config import RemediationConfig
from .core import (
    ActionSpec,
    FlowOptions,
    IdxMessage,
    IdxRemediation,
    IdxResponse,
    NextStep,
    RemediationResult,
)
from .engine import EngineState, RemediationEngine, remediate
from .errors import AuthSdkError, IdxResponseError, InputSchemaError, RemediationPolicyError
from .flows import get_remediators
from .normalize import unwrap_form_value
from .remediators import GenericRemediator, Remediator
from .resolver import ActionInvocation, RemediatorResolver
from .validate import is_satisfied

__all__ = [
    "remediate",
    "RemediationEngine",
    "EngineState",
    "RemediationConfig",
    "RemediatorResolver",
    "ActionInvocation",
    "Remediator",
    "GenericRemediator",
    "get_remediators",
    "ActionSpec",
    "FlowOptions",
    "IdxMessage",
    "IdxRemediation",
    "IdxResponse",
    "NextStep",
    "RemediationResult",
    "unwrap_form_value",
    "is_satisfied",
    "AuthSdkError",
    "IdxResponseError",
    "InputSchemaError",
    "RemediationPolicyError",
]
