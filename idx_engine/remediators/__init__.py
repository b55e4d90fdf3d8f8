"""Remediator catalog: one class per modelled remediation name."""

from .base import Remediator, current_authenticator, relation_value
from .generic import GenericRemediator
from .identify import Identify, IdentifyRecovery
from .poll import ChallengePoll, EnrollPoll
from .profile import EnrollProfile, SelectEnrollProfile
from .redirect_idp import RedirectIdp
from .select_authenticator import (
    SelectAuthenticator,
    SelectAuthenticatorAuthenticate,
    SelectAuthenticatorEnroll,
)
from .skip import Skip
from .verify_authenticator import (
    ChallengeAuthenticator,
    EnrollAuthenticator,
    ReEnrollAuthenticator,
    ResetAuthenticator,
    VerifyAuthenticator,
)

ALL_REMEDIATORS: tuple[type[Remediator], ...] = (
    Identify,
    IdentifyRecovery,
    SelectAuthenticatorAuthenticate,
    SelectAuthenticatorEnroll,
    ChallengeAuthenticator,
    EnrollAuthenticator,
    ResetAuthenticator,
    ReEnrollAuthenticator,
    EnrollPoll,
    ChallengePoll,
    Skip,
    SelectEnrollProfile,
    EnrollProfile,
    RedirectIdp,
)

__all__ = [
    "ALL_REMEDIATORS",
    "Remediator",
    "GenericRemediator",
    "Identify",
    "IdentifyRecovery",
    "SelectAuthenticator",
    "SelectAuthenticatorAuthenticate",
    "SelectAuthenticatorEnroll",
    "VerifyAuthenticator",
    "ChallengeAuthenticator",
    "EnrollAuthenticator",
    "ResetAuthenticator",
    "ReEnrollAuthenticator",
    "EnrollPoll",
    "ChallengePoll",
    "Skip",
    "SelectEnrollProfile",
    "EnrollProfile",
    "RedirectIdp",
    "current_authenticator",
    "relation_value",
]
