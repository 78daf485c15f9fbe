"""Wizard state machine tests — advance/retreat/jump gating, set_field, progress, snapshot."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from ngc_intake.wizard import (
    STEPS,
    TOTAL_STEPS,
    WizardState,
    advance,
    can_submit,
    estimates,
    get_step,
    jump,
    progress_percentage,
    reset,
    retreat,
    set_field,
    snapshot,
    step_for_field,
)

ACME = {
    "name": "Acme Redo",
    "description": "Need a full site overhaul for our storefront",
    "type": "website-redesign",
    "urgency": "urgent",
    "contactEmail": "a@b.com",
}


def _filled_state(step=1):
    state = WizardState(current_step=step)
    for name, value in ACME.items():
        set_field(state, name, value)
    return state


class TestSteps:
    def test_five_steps(self):
        assert TOTAL_STEPS == 5
        assert [step.number for step in STEPS] == [1, 2, 3, 4, 5]

    def test_review_step_has_no_fields(self):
        assert get_step(5).fields == ()

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            get_step(0)
        with pytest.raises(ValueError):
            get_step(6)

    def test_field_owner(self):
        assert step_for_field("contactEmail").number == 4
        assert step_for_field("goals").number == 2


class TestAdvance:
    def test_empty_form_can_walk_to_review(self):
        state = WizardState()
        for expected in range(2, TOTAL_STEPS + 1):
            result = advance(state)
            assert result.advanced is True
            assert result.current_step == expected

    def test_blocked_on_last_step(self):
        state = WizardState(current_step=TOTAL_STEPS)
        result = advance(state)
        assert result.advanced is False
        assert result.errors == {}
        assert state.current_step == TOTAL_STEPS

    def test_invalid_field_blocks_and_repeats(self):
        state = WizardState()
        set_field(state, "name", "A")
        first = advance(state)
        second = advance(state)
        assert first.advanced is False
        assert state.current_step == 1
        assert set(first.errors) == set(second.errors) == {"name"}

    def test_only_current_step_is_checked(self):
        state = WizardState()
        set_field(state, "contactEmail", "not-an-email")
        assert advance(state).advanced is True


class TestRetreat:
    def test_keeps_values(self):
        state = _filled_state(step=3)
        before = dict(state.values)
        assert retreat(state) == 2
        assert state.values == before

    def test_floored_at_one(self):
        state = WizardState()
        assert retreat(state) == 1


class TestJump:
    def test_backward_always_allowed(self):
        state = WizardState(current_step=4)
        set_field(state, "name", "A")
        result = jump(state, 1)
        assert result.advanced is True
        assert state.current_step == 1

    def test_forward_stops_on_invalid_skipped_step(self):
        state = WizardState()
        set_field(state, "existingWebsite", "example.com")
        result = jump(state, 4)
        assert result.advanced is False
        assert set(result.errors) == {"existingWebsite"}
        assert state.current_step == 1

    def test_forward_when_valid(self):
        state = _filled_state()
        assert jump(state, 5).advanced is True
        assert state.current_step == 5

    def test_same_step_is_not_a_move(self):
        state = WizardState(current_step=2)
        assert jump(state, 2).advanced is False

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            jump(WizardState(), 9)


class TestSetField:
    def test_returns_validation(self):
        state = WizardState()
        assert set_field(state, "contactEmail", "nope").valid is False
        assert state.values["contactEmail"] == "nope"

    def test_does_not_move(self):
        state = WizardState(current_step=2)
        set_field(state, "industry", "retail")
        assert state.current_step == 2

    def test_unknown_field(self):
        with pytest.raises(ValueError):
            set_field(WizardState(), "shoeSize", 42)


class TestProgress:
    def test_first_and_last(self):
        assert progress_percentage(WizardState(current_step=1)) == 20
        assert progress_percentage(WizardState(current_step=TOTAL_STEPS)) == 100

    def test_monotonic(self):
        values = [progress_percentage(WizardState(current_step=n)) for n in range(1, TOTAL_STEPS + 1)]
        assert values == sorted(values)


class TestSubmitReadiness:
    def test_needs_last_step(self):
        assert can_submit(_filled_state(step=4)) is False
        assert can_submit(_filled_state(step=5)) is True

    def test_needs_every_field_valid(self):
        state = _filled_state(step=5)
        set_field(state, "contactPhone", "abc")
        assert can_submit(state) is False

    def test_reset(self):
        state = _filled_state(step=5)
        reset(state)
        assert state.current_step == 1
        assert state.values == {}


class TestSnapshot:
    def test_drops_blank_values(self):
        state = _filled_state()
        set_field(state, "company", "  ")
        set_field(state, "goals", [])
        set_field(state, "industry", None)
        payload = snapshot(state)
        assert payload == ACME

    def test_strips_strings(self):
        state = WizardState()
        set_field(state, "name", "  Acme Redo ")
        assert snapshot(state) == {"name": "Acme Redo"}

    def test_is_a_copy(self):
        state = _filled_state()
        set_field(state, "features", ["seo-optimization"])
        payload = snapshot(state)
        payload["features"].append("multi-language")
        assert state.values["features"] == ["seo-optimization"]


class TestLiveEstimates:
    def test_acme(self):
        state = _filled_state()
        assert estimates(state) == {
            "estimatedBudget": 12000,
            "estimatedTimeline": 4,
            "complexityScore": 2.0,
        }
