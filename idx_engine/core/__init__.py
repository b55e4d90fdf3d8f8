"""Core data types: responses, flow options and results."""

from .options import DEFAULT_FLOW, ActionSpec, FlowOptions
from .response import IdxActionFunction, IdxMessage, IdxRemediation, IdxResponse, ProceedFunction
from .result import NextStep, RemediationResult

__all__ = [
    "DEFAULT_FLOW",
    "ActionSpec",
    "FlowOptions",
    "IdxActionFunction",
    "IdxMessage",
    "IdxRemediation",
    "IdxResponse",
    "ProceedFunction",
    "NextStep",
    "RemediationResult",
]
