"""Contact form request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from ..wizard.validation import PHONE_RE
from .base import CamelModel
from .consultation_schema import NoteOut, Urgency

ContactType = Literal["general", "business", "support", "partnership", "careers"]
ContactStatus = Literal["new", "in_progress", "resolved", "closed", "spam"]
ContactNoteType = Literal["note", "email", "call"]


class ContactCreate(CamelModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr = Field(..., description="Reply-to address")
    phone: Optional[str] = None
    company: Optional[str] = Field(default=None, max_length=255)
    subject: Optional[str] = Field(default=None, max_length=255)
    message: str = Field(..., min_length=10, max_length=5000)
    contact_type: ContactType = "general"
    priority: Optional[Urgency] = None

    source: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)
    ip_address: Optional[str] = Field(default=None, max_length=64)
    referrer: Optional[str] = Field(default=None, max_length=2048)

    gdpr_consent: Optional[bool] = None
    marketing_consent: Optional[bool] = None

    @field_validator("name", "message")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        if not PHONE_RE.match(v.strip()):
            raise ValueError("Please enter a valid phone number")
        return v.strip()


class ContactStatusUpdate(CamelModel):
    status: ContactStatus
    user_id: Optional[UUID] = None
    notes: Optional[str] = Field(default=None, max_length=5000)


class ContactNoteCreate(CamelModel):
    content: str = Field(..., min_length=1, max_length=5000)
    author: str = Field(..., min_length=1, max_length=100)
    type: ContactNoteType = "note"


class ContactResponse(CamelModel):
    id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    company: Optional[str] = None
    subject: Optional[str] = None
    message: str
    contact_type: str
    priority: str
    status: str
    source: Optional[str] = None
    assigned_to: Optional[UUID] = None
    department: Optional[str] = None
    tags: Optional[list[str]] = None
    notes: Optional[list[NoteOut]] = None
    created_at: datetime
    updated_at: datetime
    resolved_at: Optional[datetime] = None
    last_contacted_at: Optional[datetime] = None
    gdpr_consent: Optional[bool] = None
    marketing_consent: Optional[bool] = None


class ContactCreatedResponse(CamelModel):
    id: UUID
    message: str


class ContactListResponse(CamelModel):
    success: bool = True
    data: list[ContactResponse]
    count: int


class ContactStats(CamelModel):
    total: int
    by_status: dict[str, int]
    by_type: dict[str, int]
    by_priority: dict[str, int]
