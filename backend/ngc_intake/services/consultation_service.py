"""Project consultation persistence — create, query, lifecycle updates, stats.

Every mutation stages an Activity row in the same transaction.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional
from uuid import UUID, uuid4

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError
from sqlalchemy import or_
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..constants import (
    CONSULTATION_STATUS_TIMESTAMPS,
    CONSULTATION_STATUSES,
    DEFAULT_PRIORITY,
    PROJECT_TYPES,
    URGENCY_LEVELS,
)
from ..models.project_consultation import ProjectConsultation
from ..schemas.consultation_schema import ProjectConsultationCreate
from ..wizard.estimates import complexity_score, estimate_budget, estimate_timeline
from ..wizard.gateway import SubmissionRejected
from .activity_service import log_activity
from .errors import RecordNotFound
from .user_service import get_user

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.utcnow()


def _note(content: str, author: str, note_type: str, at: datetime) -> dict[str, Any]:
    return {"content": content, "author": author, "timestamp": at.isoformat(), "type": note_type}


# ── Create ────────────────────────────────────────────────────────────

def create_consultation(db: Session, payload: ProjectConsultationCreate) -> ProjectConsultation:
    """Persist a submitted intake and return the ORM instance.

    Status, priority and the three estimates are assigned here; the client
    never sends them.
    """
    now = _now()
    budget = estimate_budget(payload.type, payload.features, payload.urgency)
    timeline = estimate_timeline(payload.type, payload.features, payload.has_content, payload.urgency)
    complexity = complexity_score(payload.type, payload.features)

    consultation = ProjectConsultation(
        id=uuid4(),
        name=payload.name,
        description=payload.description,
        type=payload.type,
        urgency=payload.urgency,
        industry=payload.industry,
        target_audience=payload.target_audience,
        existing_website=payload.existing_website,
        goals=payload.goals,
        features=payload.features,
        timeline=payload.timeline,
        budget=payload.budget,
        has_content=payload.has_content,
        design_preferences=payload.design_preferences,
        contact_name=payload.contact_name,
        contact_email=payload.contact_email.strip() if payload.contact_email else None,
        contact_phone=payload.contact_phone,
        company=payload.company,
        preferred_contact=payload.preferred_contact,
        additional_info=payload.additional_info,
        attachments=payload.project_files,
        source=payload.source,
        user_agent=payload.user_agent,
        ip_address=payload.ip_address,
        referrer=payload.referrer,
        status="new",
        priority=payload.urgency or DEFAULT_PRIORITY,
        estimated_budget=budget,
        estimated_timeline=timeline,
        complexity_score=complexity,
        notes=[],
        created_at=now,
        updated_at=now,
    )
    db.add(consultation)
    log_activity(
        db,
        "project_created",
        project_id=consultation.id,
        details=f"New project consultation created: {payload.name or 'Untitled Project'}",
        metadata={
            "type": payload.type,
            "estimatedBudget": budget,
            "estimatedTimeline": timeline,
            "complexityScore": complexity,
            "contactEmail": payload.contact_email,
        },
    )
    db.commit()
    db.refresh(consultation)
    logger.info("[CONSULTATIONS] Created %s (type=%s, budget=%s)", consultation.id, payload.type, budget)
    return consultation


class DatabaseConsultationCreator:
    """Submission-gateway creator that writes straight to the database.

    Translates persistence failures into the exceptions the gateway
    classifies: schema rejection → ``SubmissionRejected``, unreachable
    database → ``ConnectionError``.
    """

    def __init__(self, db: Session, *, source: str = "website", **client_metadata: Optional[str]):
        self.db = db
        self.metadata = {"source": source, **client_metadata}

    async def __call__(self, payload: dict[str, Any]) -> str:
        try:
            data = ProjectConsultationCreate.model_validate({**self.metadata, **payload})
        except ValidationError as exc:
            raise SubmissionRejected(
                "Consultation rejected by schema",
                detail=exc.errors(include_url=False, include_context=False),
            ) from exc

        try:
            consultation = await run_in_threadpool(create_consultation, self.db, data)
        except SQLAlchemyError as exc:
            self.db.rollback()
            if isinstance(exc, OperationalError):
                raise ConnectionError(f"Database unavailable: {exc}") from exc
            raise
        return str(consultation.id)


# ── Queries ───────────────────────────────────────────────────────────

def get_consultation(db: Session, consultation_id: UUID) -> ProjectConsultation:
    consultation = (
        db.query(ProjectConsultation).filter(ProjectConsultation.id == str(consultation_id)).first()
    )
    if consultation is None:
        raise RecordNotFound("Project consultation not found")
    return consultation


def list_consultations(
    db: Session,
    *,
    status: Optional[str] = None,
    type: Optional[str] = None,
    urgency: Optional[str] = None,
    assigned_to: Optional[UUID] = None,
    limit: Optional[int] = None,
) -> list[ProjectConsultation]:
    """Newest-first consultations; every given filter must match."""
    query = db.query(ProjectConsultation)
    if status:
        query = query.filter(ProjectConsultation.status == status)
    if type:
        query = query.filter(ProjectConsultation.type == type)
    if urgency:
        query = query.filter(ProjectConsultation.urgency == urgency)
    if assigned_to:
        query = query.filter(ProjectConsultation.assigned_to == str(assigned_to))
    query = query.order_by(ProjectConsultation.created_at.desc())
    if limit:
        query = query.limit(limit)
    return query.all()


def search_consultations(
    db: Session,
    term: str,
    *,
    type: Optional[str] = None,
    status: Optional[str] = None,
    limit: Optional[int] = None,
) -> list[ProjectConsultation]:
    """Case-insensitive substring search over description, name and contact name."""
    pattern = f"%{term.strip()}%"
    query = db.query(ProjectConsultation).filter(
        or_(
            ProjectConsultation.description.ilike(pattern),
            ProjectConsultation.name.ilike(pattern),
            ProjectConsultation.contact_name.ilike(pattern),
        )
    )
    if type:
        query = query.filter(ProjectConsultation.type == type)
    if status:
        query = query.filter(ProjectConsultation.status == status)
    query = query.order_by(ProjectConsultation.created_at.desc())
    if limit:
        query = query.limit(limit)
    return query.all()


def consultation_stats(db: Session) -> dict[str, Any]:
    consultations = db.query(ProjectConsultation).all()

    by_status = {status: 0 for status in CONSULTATION_STATUSES}
    by_type = {project_type: 0 for project_type in PROJECT_TYPES}
    by_urgency = {level: 0 for level in URGENCY_LEVELS}
    budgets: list[int] = []
    timelines: list[int] = []
    complexities: list[float] = []

    for consultation in consultations:
        by_status[consultation.status] = by_status.get(consultation.status, 0) + 1
        if consultation.type:
            by_type[consultation.type] = by_type.get(consultation.type, 0) + 1
        by_urgency[consultation.priority] = by_urgency.get(consultation.priority, 0) + 1
        if consultation.estimated_budget:
            budgets.append(consultation.estimated_budget)
        if consultation.estimated_timeline:
            timelines.append(consultation.estimated_timeline)
        if consultation.complexity_score:
            complexities.append(consultation.complexity_score)

    return {
        "total": len(consultations),
        "by_status": by_status,
        "by_type": by_type,
        "by_urgency": by_urgency,
        "average_estimated_budget": round(sum(budgets) / len(budgets)) if budgets else 0,
        "average_estimated_timeline": round(sum(timelines) / len(timelines)) if timelines else 0,
        "average_complexity_score": round(sum(complexities) / len(complexities), 1) if complexities else 0.0,
    }


# ── Lifecycle updates ─────────────────────────────────────────────────

def update_status(
    db: Session,
    consultation_id: UUID,
    status: str,
    *,
    user_id: Optional[UUID] = None,
    notes: Optional[str] = None,
) -> ProjectConsultation:
    consultation = get_consultation(db, consultation_id)
    previous = consultation.status
    now = _now()

    consultation.status = status
    consultation.updated_at = now
    stamp = CONSULTATION_STATUS_TIMESTAMPS.get(status)
    if stamp:
        setattr(consultation, stamp, now)
    if notes:
        # Reassign so the JSON column is flagged dirty
        consultation.notes = [*(consultation.notes or []), _note(notes, "System", "note", now)]

    log_activity(
        db,
        "status_changed",
        project_id=consultation.id,
        user_id=user_id,
        details=f"Status changed from {previous} to {status}",
        metadata={"previousValue": previous, "newValue": status, "field": "status"},
    )
    db.commit()
    db.refresh(consultation)
    logger.info("[CONSULTATIONS] %s status %s → %s", consultation.id, previous, status)
    return consultation


def assign_consultation(
    db: Session,
    consultation_id: UUID,
    user_id: UUID,
    *,
    assigned_by: Optional[UUID] = None,
) -> ProjectConsultation:
    consultation = get_consultation(db, consultation_id)
    user = get_user(db, user_id)
    previous = consultation.assigned_to

    consultation.assigned_to = user.id
    consultation.updated_at = _now()
    log_activity(
        db,
        "project_assigned",
        project_id=consultation.id,
        user_id=assigned_by,
        details=f"Project assigned to {user.name}",
        metadata={"previousValue": previous, "newValue": user.id, "field": "assignedTo"},
    )
    db.commit()
    db.refresh(consultation)
    return consultation


def add_note(
    db: Session,
    consultation_id: UUID,
    content: str,
    author: str,
    note_type: str = "note",
) -> ProjectConsultation:
    consultation = get_consultation(db, consultation_id)
    now = _now()
    consultation.notes = [*(consultation.notes or []), _note(content, author, note_type, now)]
    consultation.updated_at = now
    log_activity(
        db,
        "note_added",
        project_id=consultation.id,
        details=f"{note_type} note added by {author}",
        metadata={"noteType": note_type},
    )
    db.commit()
    db.refresh(consultation)
    return consultation


def update_estimates(
    db: Session,
    consultation_id: UUID,
    *,
    estimated_budget: Optional[int] = None,
    estimated_timeline: Optional[int] = None,
    complexity: Optional[float] = None,
    user_id: Optional[UUID] = None,
) -> ProjectConsultation:
    """Manual override of the computed estimates; ``None`` leaves a value as is."""
    consultation = get_consultation(db, consultation_id)
    if estimated_budget is not None:
        consultation.estimated_budget = estimated_budget
    if estimated_timeline is not None:
        consultation.estimated_timeline = estimated_timeline
    if complexity is not None:
        consultation.complexity_score = complexity
    consultation.updated_at = _now()

    log_activity(
        db,
        "estimates_updated",
        project_id=consultation.id,
        user_id=user_id,
        details="Project estimates updated",
        metadata={
            "estimatedBudget": estimated_budget,
            "estimatedTimeline": estimated_timeline,
            "complexityScore": complexity,
        },
    )
    db.commit()
    db.refresh(consultation)
    return consultation


def delete_consultation(
    db: Session,
    consultation_id: UUID,
    *,
    permanent: bool = False,
    user_id: Optional[UUID] = None,
) -> UUID:
    """Cancel (soft) or remove (permanent) a consultation; returns its id."""
    consultation = get_consultation(db, consultation_id)
    record_id = consultation.id
    metadata = {"projectName": consultation.name, "contactEmail": consultation.contact_email}

    if permanent:
        db.delete(consultation)
        log_activity(
            db,
            "project_deleted",
            project_id=record_id,
            user_id=user_id,
            details="Project consultation permanently deleted",
            metadata=metadata,
        )
    else:
        consultation.status = "cancelled"
        consultation.updated_at = _now()
        log_activity(
            db,
            "project_cancelled",
            project_id=record_id,
            user_id=user_id,
            details="Project consultation cancelled",
            metadata=metadata,
        )
    db.commit()
    logger.info("[CONSULTATIONS] %s %s", record_id, "deleted" if permanent else "cancelled")
    return record_id
