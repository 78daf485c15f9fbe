from .estimates import complexity_score, estimate_budget, estimate_timeline, feature_surcharge
from .gateway import (
    Creator,
    ErrorKind,
    HttpConsultationCreator,
    SubmissionGateway,
    SubmissionRejected,
    SubmissionResult,
)
from .state import (
    AdvanceResult,
    WizardState,
    advance,
    can_submit,
    estimates,
    invalid_fields,
    jump,
    progress_percentage,
    reset,
    retreat,
    set_field,
    snapshot,
)
from .steps import STEPS, TOTAL_STEPS, StepDefinition, get_step, step_for_field
from .validation import FIELD_NAMES, FieldValidation, validate, validate_fields

__all__ = [
    "AdvanceResult",
    "Creator",
    "ErrorKind",
    "FIELD_NAMES",
    "FieldValidation",
    "HttpConsultationCreator",
    "STEPS",
    "StepDefinition",
    "SubmissionGateway",
    "SubmissionRejected",
    "SubmissionResult",
    "TOTAL_STEPS",
    "WizardState",
    "advance",
    "can_submit",
    "complexity_score",
    "estimate_budget",
    "estimate_timeline",
    "estimates",
    "feature_surcharge",
    "get_step",
    "invalid_fields",
    "jump",
    "progress_percentage",
    "reset",
    "retreat",
    "set_field",
    "snapshot",
    "step_for_field",
    "validate",
    "validate_fields",
]
