"""Flow registries — which remediations each flow is allowed to drive."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from .remediators import (
    ChallengeAuthenticator,
    ChallengePoll,
    EnrollAuthenticator,
    EnrollPoll,
    EnrollProfile,
    Identify,
    IdentifyRecovery,
    ReEnrollAuthenticator,
    RedirectIdp,
    Remediator,
    ResetAuthenticator,
    SelectAuthenticatorAuthenticate,
    SelectAuthenticatorEnroll,
    SelectEnrollProfile,
    Skip,
)

AUTHENTICATE = "authenticate"


def registry_for(*classes: type[Remediator]) -> Mapping[str, type[Remediator]]:
    """Build a read-only name → class registry from Remediator classes."""
    return MappingProxyType({cls.remediation_name: cls for cls in classes})


AuthenticationFlow = registry_for(
    Identify,
    SelectAuthenticatorAuthenticate,
    SelectAuthenticatorEnroll,
    ChallengeAuthenticator,
    EnrollAuthenticator,
    ReEnrollAuthenticator,
    EnrollPoll,
    ChallengePoll,
    RedirectIdp,
    Skip,
)

RegistrationFlow = registry_for(
    SelectEnrollProfile,
    EnrollProfile,
    SelectAuthenticatorEnroll,
    EnrollAuthenticator,
    EnrollPoll,
    Skip,
)

PasswordRecoveryFlow = registry_for(
    Identify,
    IdentifyRecovery,
    SelectAuthenticatorAuthenticate,
    ChallengeAuthenticator,
    ChallengePoll,
    ResetAuthenticator,
    ReEnrollAuthenticator,
)

AccountUnlockFlow = registry_for(
    Identify,
    IdentifyRecovery,
    SelectAuthenticatorAuthenticate,
    ChallengeAuthenticator,
    ChallengePoll,
)

FLOWS: Mapping[str, Mapping[str, type[Remediator]]] = MappingProxyType(
    {
        AUTHENTICATE: AuthenticationFlow,
        "default": AuthenticationFlow,
        "login": AuthenticationFlow,
        "register": RegistrationFlow,
        "recoverPassword": PasswordRecoveryFlow,
        "unlockAccount": AccountUnlockFlow,
    }
)


def get_remediators(flow: Optional[str] = None) -> Mapping[str, type[Remediator]]:
    """Registry for *flow*; unknown or missing flows authenticate."""
    return FLOWS.get(flow or AUTHENTICATE, AuthenticationFlow)
