"""Schemas shared by the consultation and contact routes: users, activities."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional
from uuid import UUID

from pydantic import EmailStr, Field

from .base import CamelModel

UserRole = Literal["admin", "agent", "manager", "viewer"]


class UserCreate(CamelModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    role: UserRole = "agent"
    department: Optional[str] = Field(default=None, max_length=64)


class UserResponse(CamelModel):
    id: UUID
    name: str
    email: str
    role: str
    department: Optional[str] = None
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: datetime


class ActivityResponse(CamelModel):
    id: UUID
    contact_id: Optional[UUID] = None
    project_id: Optional[UUID] = None
    user_id: Optional[UUID] = None
    action: str
    details: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None
    timestamp: datetime
