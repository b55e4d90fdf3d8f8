"""Tests for the flow registries and RemediationConfig wiring."""

from __future__ import annotations

from types import MappingProxyType

import pytest

from idx_engine import RemediationConfig, RemediationEngine, get_remediators
from idx_engine.flows import (
    FLOWS,
    AccountUnlockFlow,
    AuthenticationFlow,
    PasswordRecoveryFlow,
    RegistrationFlow,
    registry_for,
)
from idx_engine.remediators import (
    ALL_REMEDIATORS,
    EnrollProfile,
    Identify,
    ResetAuthenticator,
    Skip,
)


@pytest.mark.unit
class TestRegistries:
    def test_registry_is_keyed_by_remediation_name(self):
        registry = registry_for(Identify, Skip)
        assert dict(registry) == {"identify": Identify, "skip": Skip}
        assert isinstance(registry, MappingProxyType)

    def test_every_remediator_has_a_unique_name(self):
        names = [cls.remediation_name for cls in ALL_REMEDIATORS]
        assert all(names)
        assert len(names) == len(set(names))

    def test_every_remediator_belongs_to_some_flow(self):
        registered = {cls for registry in FLOWS.values() for cls in registry.values()}
        assert set(ALL_REMEDIATORS) <= registered

    @pytest.mark.parametrize(
        "flow, registry",
        [
            (None, AuthenticationFlow),
            ("default", AuthenticationFlow),
            ("authenticate", AuthenticationFlow),
            ("login", AuthenticationFlow),
            ("register", RegistrationFlow),
            ("recoverPassword", PasswordRecoveryFlow),
            ("unlockAccount", AccountUnlockFlow),
            ("made-up", AuthenticationFlow),
        ],
    )
    def test_get_remediators(self, flow, registry):
        assert get_remediators(flow) is registry

    def test_flow_membership(self):
        assert "enroll-profile" in RegistrationFlow
        assert "identify" not in RegistrationFlow
        assert PasswordRecoveryFlow["reset-authenticator"] is ResetAuthenticator
        assert "reset-authenticator" not in AuthenticationFlow


@pytest.mark.unit
class TestRemediationConfig:
    def test_defaults(self):
        config = RemediationConfig()
        assert config.remediators is None
        assert config.use_generic_remediator is True
        assert config.resend_suffix == "-resend"
        assert config.cancel_action == "cancel"

    def test_engine_builds_resolver_from_config(self):
        registry = registry_for(EnrollProfile)
        engine = RemediationEngine(
            RemediationConfig(remediators=registry, use_generic_remediator=False, resend_suffix="-again")
        )
        assert engine.resolver.remediators is registry
        assert engine.resolver.use_generic_remediator is False
        assert engine.resolver.resend_suffix == "-again"
