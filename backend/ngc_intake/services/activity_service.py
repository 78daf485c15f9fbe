"""Audit trail — one Activity row per consultation/contact mutation."""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from ..models.activity import Activity
from ..schemas.common_schema import ActivityResponse


def _jsonable(value: Any) -> Any:
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    return value


def log_activity(
    db: Session,
    action: str,
    *,
    details: Optional[str] = None,
    metadata: Optional[dict[str, Any]] = None,
    project_id: Optional[UUID] = None,
    contact_id: Optional[UUID] = None,
    user_id: Optional[UUID] = None,
) -> Activity:
    """Stage an activity row on ``db``; the caller's commit persists it."""
    activity = Activity(
        action=action,
        details=details,
        metadata_json=_jsonable(metadata) if metadata else None,
        project_id=project_id,
        contact_id=contact_id,
        user_id=user_id,
    )
    db.add(activity)
    return activity


def list_activities(
    db: Session,
    *,
    project_id: Optional[UUID] = None,
    contact_id: Optional[UUID] = None,
    limit: Optional[int] = None,
) -> list[Activity]:
    """Newest-first activities for one record."""
    query = db.query(Activity)
    if project_id is not None:
        query = query.filter(Activity.project_id == str(project_id))
    if contact_id is not None:
        query = query.filter(Activity.contact_id == str(contact_id))
    query = query.order_by(Activity.timestamp.desc())
    if limit:
        query = query.limit(limit)
    return query.all()


def activity_public(activity: Activity) -> ActivityResponse:
    return ActivityResponse(
        id=activity.id,
        contact_id=activity.contact_id,
        project_id=activity.project_id,
        user_id=activity.user_id,
        action=activity.action,
        details=activity.details,
        metadata=activity.metadata_json,
        timestamp=activity.timestamp,
    )
