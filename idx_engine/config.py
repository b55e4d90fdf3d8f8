"""Engine configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass
class RemediationConfig:
    """Configuration for :class:`~idx_engine.engine.RemediationEngine`.

    ``remediators`` pins a registry of remediation name to Remediator class.
    Leave it as ``None`` to pick the registry from ``FlowOptions.flow``.
    """

    remediators: Optional[Mapping[str, type]] = None
    use_generic_remediator: bool = True
    resend_suffix: str = "-resend"
    cancel_action: str = "cancel"
