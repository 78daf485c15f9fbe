import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship

from ..database import Base
from .project_consultation import GUID


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(GUID(), primary_key=True, default=uuid.uuid4)

    name = Column(String(100), nullable=False)
    email = Column(String(320), nullable=False, index=True)
    phone = Column(String(32), nullable=True)
    company = Column(String(255), nullable=True)

    subject = Column(String(255), nullable=True)
    message = Column(Text, nullable=False)

    contact_type = Column(String(16), nullable=False, index=True)  # general | business | support | partnership | careers
    priority = Column(String(16), nullable=False, default="medium", index=True)
    status = Column(String(16), nullable=False, default="new", index=True)  # new | in_progress | resolved | closed | spam

    source = Column(String(64), nullable=True)
    user_agent = Column(String(512), nullable=True)
    ip_address = Column(String(64), nullable=True)
    referrer = Column(String(2048), nullable=True)

    assigned_to = Column(GUID(), ForeignKey("users.id"), nullable=True, index=True)
    department = Column(String(64), nullable=True)
    tags = Column(JSON, nullable=True)
    notes = Column(JSON, nullable=True)  # [{content, author, timestamp, type}]

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    resolved_at = Column(DateTime, nullable=True)
    last_contacted_at = Column(DateTime, nullable=True)

    gdpr_consent = Column(Boolean, nullable=True)
    marketing_consent = Column(Boolean, nullable=True)
    data_retention_date = Column(DateTime, nullable=True)

    assignee = relationship("User", backref="assigned_contacts")

    __table_args__ = (
        Index("ix_contacts_status_priority", "status", "priority"),
        Index("ix_contacts_type_status", "contact_type", "status"),
    )
