"""Per-field validation rules for the project intake wizard.

Deterministic and side-effect free. Every field is optional: an empty or
absent value always passes, a present value must satisfy the field's rule.
A failed check is reported as data (``FieldValidation.valid is False`` plus a
message key for i18n), never by raising.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional

from ..constants import PROJECT_TYPES, URGENCY_LEVELS

URL_RE = re.compile(r"^https?://.+")
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\+?[1-9]\d{0,15}$")


@dataclass(frozen=True)
class FieldValidation:
    """Outcome of validating one field value."""

    valid: bool
    message_key: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)


VALID = FieldValidation(valid=True)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


# ── Rule builders ─────────────────────────────────────────────────────

def _length(min_len: int, max_len: int) -> Callable[[Any], FieldValidation]:
    def rule(value: Any) -> FieldValidation:
        if not isinstance(value, str):
            return FieldValidation(False, "validation.minLength", {"min": min_len, "max": max_len})
        size = len(value.strip())
        if size < min_len:
            return FieldValidation(False, "validation.minLength", {"min": min_len, "max": max_len})
        if size > max_len:
            return FieldValidation(False, "validation.maxLength", {"min": min_len, "max": max_len})
        return VALID

    return rule


def _pattern(regex: re.Pattern[str], message_key: str) -> Callable[[Any], FieldValidation]:
    def rule(value: Any) -> FieldValidation:
        if isinstance(value, str) and regex.match(value.strip()):
            return VALID
        return FieldValidation(False, message_key)

    return rule


def _choice(options: Iterable[str]) -> Callable[[Any], FieldValidation]:
    allowed = frozenset(options)

    def rule(value: Any) -> FieldValidation:
        if isinstance(value, str) and value in allowed:
            return VALID
        return FieldValidation(False, "validation.invalidOption", {"options": sorted(allowed)})

    return rule


def _string_list(value: Any) -> FieldValidation:
    if isinstance(value, (list, tuple)) and all(
        isinstance(item, str) and item.strip() for item in value
    ):
        return VALID
    return FieldValidation(False, "validation.invalidList")


def _any_text(value: Any) -> FieldValidation:
    return VALID if isinstance(value, str) else FieldValidation(False, "validation.invalidOption")


# ── Canonical rule set ────────────────────────────────────────────────

RULES: Dict[str, Callable[[Any], FieldValidation]] = {
    # Step 1
    "name": _length(2, 100),
    "description": _length(10, 1000),
    "type": _choice(PROJECT_TYPES),
    "urgency": _choice(URGENCY_LEVELS),
    # Step 2
    "industry": _any_text,
    "targetAudience": _any_text,
    "existingWebsite": _pattern(URL_RE, "validation.invalidUrl"),
    "goals": _string_list,
    "features": _string_list,
    # Step 3
    "timeline": _any_text,
    "budget": _any_text,
    "hasContent": _any_text,
    "designPreferences": _any_text,
    # Step 4
    "contactName": _length(2, 100),
    "contactEmail": _pattern(EMAIL_RE, "validation.invalidEmail"),
    "contactPhone": _pattern(PHONE_RE, "validation.invalidPhone"),
    "company": _any_text,
    "preferredContact": _any_text,
    "additionalInfo": _any_text,
    "projectFiles": _string_list,
}

FIELD_NAMES: tuple[str, ...] = tuple(RULES)


def validate(field_name: str, value: Any) -> FieldValidation:
    """Validate ``value`` for ``field_name``.

    Raises ``ValueError`` only for a field name that is not part of the form,
    which is a programming error rather than user input.
    """
    rule = RULES.get(field_name)
    if rule is None:
        raise ValueError(f"Unknown form field: {field_name!r}")
    if _is_empty(value):
        return VALID
    return rule(value)


def validate_fields(values: Dict[str, Any], fields: Iterable[str]) -> Dict[str, FieldValidation]:
    """Return the invalid subset of ``fields`` as ``{field: FieldValidation}``."""
    errors: Dict[str, FieldValidation] = {}
    for name in fields:
        result = validate(name, values.get(name))
        if not result.valid:
            errors[name] = result
    return errors
