"""Project consultation request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import Field, model_validator

from ..wizard.validation import validate
from .base import CamelModel

ProjectType = Literal["website-redesign", "new-website", "ecommerce", "web-app", "mobile-app", "branding"]
Urgency = Literal["low", "medium", "high", "urgent"]
ConsultationStatus = Literal[
    "new", "reviewing", "quoted", "accepted", "declined", "in_progress", "completed", "cancelled"
]
ConsultationNoteType = Literal["note", "email", "call", "meeting"]

# attribute name → wizard field name, for the fields the wizard validates
_INTAKE_FIELDS: dict[str, str] = {
    "name": "name",
    "description": "description",
    "existing_website": "existingWebsite",
    "goals": "goals",
    "features": "features",
    "contact_name": "contactName",
    "contact_email": "contactEmail",
    "contact_phone": "contactPhone",
    "project_files": "projectFiles",
}


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class ProjectConsultationCreate(CamelModel):
    """Wizard snapshot plus client metadata.

    Every intake field is optional, so partial records are stored. Present
    values must pass the wizard's field rules.
    """

    # Project basics
    name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[ProjectType] = None
    urgency: Optional[Urgency] = None

    # Project details
    industry: Optional[str] = None
    target_audience: Optional[str] = None
    existing_website: Optional[str] = None
    goals: Optional[list[str]] = None
    features: Optional[list[str]] = None

    # Timeline & budget
    timeline: Optional[str] = None
    budget: Optional[str] = None
    has_content: Optional[str] = None
    design_preferences: Optional[str] = None

    # Contact information
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    company: Optional[str] = None
    preferred_contact: Optional[str] = None
    additional_info: Optional[str] = None
    project_files: Optional[list[str]] = None

    # Client metadata
    source: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)
    ip_address: Optional[str] = Field(default=None, max_length=64)
    referrer: Optional[str] = Field(default=None, max_length=2048)

    @model_validator(mode="after")
    def check_intake_rules(self) -> "ProjectConsultationCreate":
        problems = []
        for attr, field_name in _INTAKE_FIELDS.items():
            result = validate(field_name, getattr(self, attr))
            if not result.valid:
                problems.append(f"{field_name}: {result.message_key}")
        if problems:
            raise ValueError("Invalid intake fields — " + "; ".join(problems))
        return self


class StatusUpdateRequest(CamelModel):
    status: ConsultationStatus
    user_id: Optional[UUID] = None
    notes: Optional[str] = Field(default=None, max_length=5000)


class AssignRequest(CamelModel):
    user_id: UUID
    assigned_by: Optional[UUID] = None


class ConsultationNoteCreate(CamelModel):
    content: str = Field(..., min_length=1, max_length=5000)
    author: str = Field(..., min_length=1, max_length=100)
    type: ConsultationNoteType = "note"


class EstimatesUpdateRequest(CamelModel):
    estimated_budget: Optional[int] = Field(default=None, ge=0)
    estimated_timeline: Optional[int] = Field(default=None, ge=0)
    complexity_score: Optional[float] = Field(default=None, ge=0)
    user_id: Optional[UUID] = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class NoteOut(CamelModel):
    content: str
    author: str
    timestamp: datetime
    type: str


class ProjectConsultationResponse(CamelModel):
    id: UUID
    name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    urgency: Optional[str] = None
    industry: Optional[str] = None
    target_audience: Optional[str] = None
    existing_website: Optional[str] = None
    goals: Optional[list[str]] = None
    features: Optional[list[str]] = None
    timeline: Optional[str] = None
    budget: Optional[str] = None
    has_content: Optional[str] = None
    design_preferences: Optional[str] = None
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    company: Optional[str] = None
    preferred_contact: Optional[str] = None
    additional_info: Optional[str] = None

    status: str
    priority: str
    assigned_to: Optional[UUID] = None
    estimated_budget: Optional[int] = None
    estimated_timeline: Optional[int] = None
    complexity_score: Optional[float] = None

    source: Optional[str] = None
    attachments: Optional[list[str]] = None
    notes: Optional[list[NoteOut]] = None

    created_at: datetime
    updated_at: datetime
    reviewed_at: Optional[datetime] = None
    quoted_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class ConsultationCreatedResponse(CamelModel):
    id: UUID
    message: str


class ConsultationListResponse(CamelModel):
    success: bool = True
    data: list[ProjectConsultationResponse]
    count: int


class ConsultationStats(CamelModel):
    total: int
    by_status: dict[str, int]
    by_type: dict[str, int]
    by_urgency: dict[str, int]
    average_estimated_budget: int
    average_estimated_timeline: int
    average_complexity_score: float
