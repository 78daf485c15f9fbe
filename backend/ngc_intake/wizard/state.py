"""Form wizard state machine.

The state is a plain owned object; every transition is a function that takes
the state and mutates it in place. Nothing here performs I/O, so transitions
are synchronous and validation failures are reported as data.

States are the step numbers ``1..TOTAL_STEPS``:

- ``advance``  — forward one step, gated by the current step's fields
- ``retreat``  — back one step, unconditional, floored at 1
- ``jump``     — to any step; forward jumps are gated like ``advance``
- ``set_field`` — store a value and re-validate only that field
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from .estimates import complexity_score, estimate_budget, estimate_timeline
from .steps import STEPS, TOTAL_STEPS, get_step
from .validation import FIELD_NAMES, FieldValidation, validate, validate_fields


@dataclass
class WizardState:
    """Current step plus the full field-value map of one intake session."""

    current_step: int = 1
    values: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AdvanceResult:
    """Outcome of a forward transition.

    ``errors`` is empty when the move happened, or when it was blocked only
    because the wizard is already on the last step.
    """

    advanced: bool
    current_step: int
    errors: Dict[str, FieldValidation] = field(default_factory=dict)


# ── Transitions ───────────────────────────────────────────────────────

def advance(state: WizardState) -> AdvanceResult:
    step = get_step(state.current_step)
    errors = validate_fields(state.values, step.fields)
    if errors:
        return AdvanceResult(False, state.current_step, errors)
    if state.current_step >= TOTAL_STEPS:
        return AdvanceResult(False, state.current_step)
    state.current_step += 1
    return AdvanceResult(True, state.current_step)


def retreat(state: WizardState) -> int:
    if state.current_step > 1:
        state.current_step -= 1
    return state.current_step


def jump(state: WizardState, target: int) -> AdvanceResult:
    """Move directly to ``target``.

    A forward jump validates every step it skips over, starting with the
    current one, and stops without moving at the first step that fails.
    """
    get_step(target)
    if target <= state.current_step:
        moved = target != state.current_step
        state.current_step = target
        return AdvanceResult(moved, state.current_step)

    for number in range(state.current_step, target):
        errors = validate_fields(state.values, get_step(number).fields)
        if errors:
            return AdvanceResult(False, state.current_step, errors)
    state.current_step = target
    return AdvanceResult(True, state.current_step)


def set_field(state: WizardState, name: str, value: Any) -> FieldValidation:
    if name not in FIELD_NAMES:
        raise ValueError(f"Unknown form field: {name!r}")
    state.values[name] = value
    return validate(name, value)


def reset(state: WizardState) -> None:
    state.current_step = 1
    state.values.clear()


# ── Derived values ────────────────────────────────────────────────────

def progress_percentage(state: WizardState) -> int:
    # Integer arithmetic keeps the .5 cases exact: round(100 * step / N)
    return (200 * state.current_step + TOTAL_STEPS) // (2 * TOTAL_STEPS)


def invalid_fields(state: WizardState) -> Dict[str, FieldValidation]:
    """Every invalid field across all steps."""
    errors: Dict[str, FieldValidation] = {}
    for step in STEPS:
        errors.update(validate_fields(state.values, step.fields))
    return errors


def can_submit(state: WizardState) -> bool:
    return state.current_step == TOTAL_STEPS and not invalid_fields(state)


def estimates(state: WizardState) -> Dict[str, Any]:
    """Live estimates; values of the wrong shape are treated as unanswered."""
    values = state.values
    text = {name: values.get(name) if isinstance(values.get(name), str) else None
            for name in ("type", "urgency", "hasContent")}
    features = values.get("features")
    features = [f for f in features if isinstance(f, str)] if isinstance(features, (list, tuple)) else None
    return {
        "estimatedBudget": estimate_budget(text["type"], features, text["urgency"]),
        "estimatedTimeline": estimate_timeline(text["type"], features, text["hasContent"], text["urgency"]),
        "complexityScore": complexity_score(text["type"], features),
    }


def snapshot(state: WizardState) -> Dict[str, Any]:
    """Submission payload: a copy of the values without blank entries."""
    payload: Dict[str, Any] = {}
    for name in FIELD_NAMES:
        value = state.values.get(name)
        if value is None:
            continue
        if isinstance(value, str):
            if not value.strip():
                continue
            value = value.strip()
        elif isinstance(value, (list, tuple)):
            if not value:
                continue
            value = list(value)
        payload[name] = value
    return payload
