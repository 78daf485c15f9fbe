import uuid
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.types import CHAR, TypeDecorator

from ..database import Base


class GUID(TypeDecorator):
    """Platform-independent UUID type.

    Uses CHAR(36) to store UUIDs as strings, compatible with all backends
    including SQLite.
    """

    impl = CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):
        return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value, dialect):
        if value is not None:
            return str(value)
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            return uuid.UUID(value)
        return value


class ProjectConsultation(Base):
    __tablename__ = "project_consultations"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)

    # Project basics; every intake field is nullable
    name = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    type = Column(String(32), nullable=True, index=True)
    urgency = Column(String(16), nullable=True, index=True)

    # Project details
    industry = Column(String(64), nullable=True)
    target_audience = Column(Text, nullable=True)
    existing_website = Column(String(2048), nullable=True)
    goals = Column(JSON, nullable=True)
    features = Column(JSON, nullable=True)

    # Timeline & budget
    timeline = Column(String(32), nullable=True)
    budget = Column(String(32), nullable=True)
    has_content = Column(String(32), nullable=True)
    design_preferences = Column(Text, nullable=True)

    # Contact information
    contact_name = Column(String(100), nullable=True)
    contact_email = Column(String(320), nullable=True, index=True)
    contact_phone = Column(String(32), nullable=True)
    company = Column(String(255), nullable=True)
    preferred_contact = Column(String(32), nullable=True)
    additional_info = Column(Text, nullable=True)

    # Server-assigned tracking
    status = Column(String(16), nullable=False, default="new", index=True)
    priority = Column(String(16), nullable=False, default="medium")
    assigned_to = Column(GUID(), ForeignKey("users.id"), nullable=True, index=True)
    estimated_budget = Column(Integer, nullable=True)
    estimated_timeline = Column(Integer, nullable=True)  # weeks
    complexity_score = Column(Float, nullable=True)

    # Client metadata
    source = Column(String(64), nullable=True)
    user_agent = Column(String(512), nullable=True)
    ip_address = Column(String(64), nullable=True)
    referrer = Column(String(2048), nullable=True)

    attachments = Column(JSON, nullable=True)  # opaque file references
    notes = Column(JSON, nullable=True)  # [{content, author, timestamp, type}]

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    reviewed_at = Column(DateTime, nullable=True)
    quoted_at = Column(DateTime, nullable=True)
    accepted_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)

    assignee = relationship("User", backref="assigned_consultations")

    __table_args__ = (
        Index("ix_consultations_status_urgency", "status", "urgency"),
        Index("ix_consultations_type_status", "type", "status"),
    )
