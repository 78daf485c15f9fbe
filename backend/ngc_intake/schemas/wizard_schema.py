"""Wizard session API schemas."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field

from .base import CamelModel


class FieldUpdateRequest(CamelModel):
    value: Any = Field(default=None, description="New value; null or empty clears the field")


class JumpRequest(CamelModel):
    step: int = Field(..., ge=1, description="1-based target step")


class FieldError(CamelModel):
    field: str
    message_key: Optional[str] = None
    message: Optional[str] = None
    params: dict[str, Any] = {}


class StepOut(CamelModel):
    number: int
    title_key: str
    title: str
    fields: list[str]


class WizardSessionResponse(CamelModel):
    session_id: str
    current_step: int
    total_steps: int
    step_title: str
    progress: int
    progress_label: str
    values: dict[str, Any]
    errors: list[FieldError] = []
    can_submit: bool
    estimates: dict[str, Any]


class FieldUpdateResponse(CamelModel):
    field: str
    valid: bool
    message_key: Optional[str] = None
    message: Optional[str] = None
    session: WizardSessionResponse


class TransitionResponse(CamelModel):
    moved: bool
    session: WizardSessionResponse


class SubmitResponse(CamelModel):
    success: bool
    id: Optional[str] = None
    error_kind: Optional[str] = None
    message: str
    detail: Any = None
