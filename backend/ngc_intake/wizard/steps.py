"""Static step definitions for the intake wizard."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StepDefinition:
    number: int
    title_key: str
    fields: tuple[str, ...]


STEPS: tuple[StepDefinition, ...] = (
    StepDefinition(
        1,
        "initializeProject.steps.step1",
        ("name", "description", "type", "urgency"),
    ),
    StepDefinition(
        2,
        "initializeProject.steps.step2",
        ("industry", "targetAudience", "existingWebsite", "goals", "features"),
    ),
    StepDefinition(
        3,
        "initializeProject.steps.step3",
        ("timeline", "budget", "hasContent", "designPreferences"),
    ),
    StepDefinition(
        4,
        "initializeProject.steps.step4",
        (
            "contactName",
            "contactEmail",
            "contactPhone",
            "company",
            "preferredContact",
            "additionalInfo",
            "projectFiles",
        ),
    ),
    StepDefinition(5, "initializeProject.steps.step5", ()),
)

TOTAL_STEPS = len(STEPS)


def get_step(number: int) -> StepDefinition:
    """Return the step with the given 1-based number."""
    if not 1 <= number <= TOTAL_STEPS:
        raise ValueError(f"Step must be between 1 and {TOTAL_STEPS}, got {number}")
    return STEPS[number - 1]


def step_for_field(field_name: str) -> StepDefinition:
    """Return the step that owns ``field_name``."""
    for step in STEPS:
        if field_name in step.fields:
            return step
    raise ValueError(f"No step owns field {field_name!r}")
