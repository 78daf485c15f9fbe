"""Contact form persistence and triage."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional
from uuid import UUID, uuid4

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..constants import CONTACT_STATUSES, CONTACT_TYPES, DEFAULT_PRIORITY, URGENCY_LEVELS
from ..models.contact import Contact
from ..schemas.contact_schema import ContactCreate
from .activity_service import log_activity
from .errors import RecordNotFound
from .user_service import get_user

logger = logging.getLogger(__name__)


def create_contact(db: Session, payload: ContactCreate) -> Contact:
    now = datetime.utcnow()
    contact = Contact(
        id=uuid4(),
        name=payload.name,
        email=payload.email.lower(),
        phone=payload.phone,
        company=payload.company,
        subject=payload.subject,
        message=payload.message,
        contact_type=payload.contact_type,
        priority=payload.priority or DEFAULT_PRIORITY,
        status="new",
        source=payload.source,
        user_agent=payload.user_agent,
        ip_address=payload.ip_address,
        referrer=payload.referrer,
        gdpr_consent=payload.gdpr_consent,
        marketing_consent=payload.marketing_consent,
        tags=[],
        notes=[],
        created_at=now,
        updated_at=now,
    )
    db.add(contact)
    log_activity(
        db,
        "contact_created",
        contact_id=contact.id,
        details=f"New {payload.contact_type} contact from {payload.name}",
        metadata={"email": contact.email, "subject": payload.subject},
    )
    db.commit()
    db.refresh(contact)
    logger.info("[CONTACTS] Created %s (type=%s)", contact.id, contact.contact_type)
    return contact


def get_contact(db: Session, contact_id: UUID) -> Contact:
    contact = db.query(Contact).filter(Contact.id == str(contact_id)).first()
    if contact is None:
        raise RecordNotFound("Contact not found")
    return contact


def list_contacts(
    db: Session,
    *,
    status: Optional[str] = None,
    contact_type: Optional[str] = None,
    priority: Optional[str] = None,
    assigned_to: Optional[UUID] = None,
    limit: Optional[int] = None,
) -> list[Contact]:
    """Newest-first contacts; every given filter must match."""
    query = db.query(Contact)
    if status:
        query = query.filter(Contact.status == status)
    if contact_type:
        query = query.filter(Contact.contact_type == contact_type)
    if priority:
        query = query.filter(Contact.priority == priority)
    if assigned_to:
        query = query.filter(Contact.assigned_to == str(assigned_to))
    query = query.order_by(Contact.created_at.desc())
    if limit:
        query = query.limit(limit)
    return query.all()


def search_contacts(
    db: Session,
    term: str,
    *,
    status: Optional[str] = None,
    limit: Optional[int] = None,
) -> list[Contact]:
    pattern = f"%{term.strip()}%"
    query = db.query(Contact).filter(
        or_(
            Contact.message.ilike(pattern),
            Contact.name.ilike(pattern),
            Contact.subject.ilike(pattern),
        )
    )
    if status:
        query = query.filter(Contact.status == status)
    query = query.order_by(Contact.created_at.desc())
    if limit:
        query = query.limit(limit)
    return query.all()


def update_contact_status(
    db: Session,
    contact_id: UUID,
    status: str,
    *,
    user_id: Optional[UUID] = None,
    notes: Optional[str] = None,
) -> Contact:
    contact = get_contact(db, contact_id)
    previous = contact.status
    now = datetime.utcnow()

    contact.status = status
    contact.updated_at = now
    if status == "resolved":
        contact.resolved_at = now
    if notes:
        contact.notes = [
            *(contact.notes or []),
            {"content": notes, "author": "System", "timestamp": now.isoformat(), "type": "note"},
        ]

    log_activity(
        db,
        "status_changed",
        contact_id=contact.id,
        user_id=user_id,
        details=f"Status changed from {previous} to {status}",
        metadata={"previousValue": previous, "newValue": status, "field": "status"},
    )
    db.commit()
    db.refresh(contact)
    return contact


def assign_contact(
    db: Session,
    contact_id: UUID,
    user_id: UUID,
    *,
    assigned_by: Optional[UUID] = None,
) -> Contact:
    contact = get_contact(db, contact_id)
    user = get_user(db, user_id)
    previous = contact.assigned_to

    contact.assigned_to = user.id
    contact.department = contact.department or user.department
    contact.updated_at = datetime.utcnow()
    log_activity(
        db,
        "contact_assigned",
        contact_id=contact.id,
        user_id=assigned_by,
        details=f"Contact assigned to {user.name}",
        metadata={"previousValue": previous, "newValue": user.id, "field": "assignedTo"},
    )
    db.commit()
    db.refresh(contact)
    return contact


def add_contact_note(
    db: Session,
    contact_id: UUID,
    content: str,
    author: str,
    note_type: str = "note",
) -> Contact:
    """Append a note; email and call notes also count as reaching out."""
    contact = get_contact(db, contact_id)
    now = datetime.utcnow()
    contact.notes = [
        *(contact.notes or []),
        {"content": content, "author": author, "timestamp": now.isoformat(), "type": note_type},
    ]
    contact.updated_at = now
    if note_type != "note":
        contact.last_contacted_at = now

    log_activity(
        db,
        "note_added",
        contact_id=contact.id,
        details=f"{note_type} note added by {author}",
        metadata={"noteType": note_type},
    )
    db.commit()
    db.refresh(contact)
    return contact


def delete_contact(
    db: Session,
    contact_id: UUID,
    *,
    permanent: bool = False,
    user_id: Optional[UUID] = None,
) -> UUID:
    """Mark as spam (soft) or remove (permanent)."""
    contact = get_contact(db, contact_id)
    record_id = contact.id
    metadata = {"email": contact.email, "name": contact.name}

    if permanent:
        db.delete(contact)
        action, details = "contact_deleted", "Contact permanently deleted"
    else:
        contact.status = "spam"
        contact.updated_at = datetime.utcnow()
        action, details = "contact_marked_spam", "Contact marked as spam"

    log_activity(db, action, contact_id=record_id, user_id=user_id, details=details, metadata=metadata)
    db.commit()
    logger.info("[CONTACTS] %s %s", record_id, action)
    return record_id


def contact_stats(db: Session) -> dict[str, Any]:
    by_status = {status: 0 for status in CONTACT_STATUSES}
    by_type = {contact_type: 0 for contact_type in CONTACT_TYPES}
    by_priority = {level: 0 for level in URGENCY_LEVELS}

    contacts = db.query(Contact).all()
    for contact in contacts:
        by_status[contact.status] = by_status.get(contact.status, 0) + 1
        by_type[contact.contact_type] = by_type.get(contact.contact_type, 0) + 1
        by_priority[contact.priority] = by_priority.get(contact.priority, 0) + 1

    return {
        "total": len(contacts),
        "by_status": by_status,
        "by_type": by_type,
        "by_priority": by_priority,
    }
