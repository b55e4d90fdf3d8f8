"""Unit tests for the core data types: options, responses and results."""

from __future__ import annotations

import dataclasses
from types import MappingProxyType

import pytest

from idx_engine import (
    ActionSpec,
    FlowOptions,
    IdxRemediation,
    IdxResponse,
    NextStep,
    RemediationResult,
)


# ---------------------------------------------------------------------------
# FlowOptions
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestActionSpec:
    def test_string_entry_has_no_params(self):
        assert ActionSpec.coerce("cancel") == ActionSpec(name="cancel")
        assert ActionSpec.coerce("cancel").params is None

    def test_mapping_entry_params_default_to_empty(self):
        entry = ActionSpec.coerce({"name": "unlock"})
        assert entry.name == "unlock"
        assert entry.params == MappingProxyType({})

    def test_mapping_params_are_read_only(self):
        entry = ActionSpec.coerce({"name": "unlock", "params": {"a": 1}})
        with pytest.raises(TypeError):
            entry.params["a"] = 2

    def test_instance_passes_through(self):
        entry = ActionSpec(name="x")
        assert ActionSpec.coerce(entry) is entry

    def test_unsupported_entry_raises(self):
        with pytest.raises(TypeError, match="Unsupported action entry"):
            ActionSpec.coerce(42)


@pytest.mark.unit
class TestFlowOptions:
    def test_coerce_none(self):
        assert FlowOptions.coerce(None) == FlowOptions()

    def test_coerce_mapping(self):
        options = FlowOptions.coerce({"step": "identify", "actions": ["a", {"name": "b"}], "flow": "default"})
        assert options.step == "identify"
        assert [a.name for a in options.actions] == ["a", "b"]
        assert options.is_default_flow is True

    def test_coerce_instance_is_identity(self):
        options = FlowOptions(flow="register")
        assert FlowOptions.coerce(options) is options

    def test_actions_are_a_tuple(self):
        options = FlowOptions(actions=["a"])
        assert isinstance(options.actions, tuple)
        assert options.actions == (ActionSpec(name="a"),)

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            FlowOptions().step = "x"

    def test_next_turn_drops_first_entry_only(self):
        options = FlowOptions(actions=["a", "b", "a"], flow="authenticate")
        rest = options.next_turn()
        assert [a.name for a in rest.actions] == ["b", "a"]
        assert rest.flow == "authenticate"
        assert [a.name for a in options.actions] == ["a", "b", "a"]

    def test_next_turn_on_empty_actions(self):
        assert FlowOptions().next_turn().actions == ()

    def test_only_default_is_default(self):
        assert FlowOptions().is_default_flow is False
        assert FlowOptions(flow="authenticate").is_default_flow is False


# ---------------------------------------------------------------------------
# IdxResponse
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestIdxResponse:
    def test_remediations_are_validated(self):
        response = IdxResponse(needed_to_proceed=[{"name": "identify", "relatesTo": {"id": "a"}}])
        (remediation,) = response.needed_to_proceed
        assert isinstance(remediation, IdxRemediation)
        assert remediation.relates_to == {"id": "a"}

    def test_mappings_are_read_only(self):
        response = IdxResponse(actions={"cancel": None}, raw_idx_state={"a": 1}, context={"b": 2})
        for mapping in (response.actions, response.raw_idx_state, response.context):
            assert isinstance(mapping, MappingProxyType)
        with pytest.raises(TypeError):
            response.context["b"] = 3

    def test_replace_returns_new_instance(self):
        response = IdxResponse(needed_to_proceed=[{"name": "identify"}])
        updated = response.replace(request_did_succeed=True)
        assert updated is not response
        assert updated.request_did_succeed is True
        assert response.request_did_succeed is None
        assert updated.needed_to_proceed == response.needed_to_proceed

    def test_find_remediation(self):
        response = IdxResponse(needed_to_proceed=[{"name": "identify"}, {"name": "skip"}])
        assert response.find_remediation("skip").name == "skip"
        assert response.find_remediation("nope") is None
        assert response.remediation_names == ["identify", "skip"]

    def test_unknown_protocol_keys_are_kept(self):
        remediation = IdxRemediation.model_validate({"name": "redirect-idp", "idp": {"id": "x"}})
        assert remediation.model_extra == {"idp": {"id": "x"}}

    def test_remediation_requires_a_name(self):
        with pytest.raises(ValueError):
            IdxRemediation.model_validate({"value": []})


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestResults:
    def test_messages_become_a_tuple(self):
        assert RemediationResult(messages=["a"]).messages == ("a",)

    def test_defaults(self):
        result = RemediationResult()
        assert result.terminal is False
        assert result.canceled is False
        assert result.messages == ()
        assert result.error is None

    def test_replace(self):
        result = RemediationResult(terminal=True)
        assert result.replace(messages=["m"]).messages == ("m",)
        assert result.messages == ()

    def test_next_step_accepts_protocol_names(self):
        step = NextStep.model_validate({"name": "enroll-poll", "pollUrl": "u", "canSkip": True})
        assert step.poll_url == "u"
        assert step.can_skip is True

    def test_next_step_keeps_extra_keys(self):
        assert NextStep(name="x", idp={"id": "i"}).model_extra == {"idp": {"id": "i"}}
