from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.base import MessageResponse
from ..schemas.common_schema import ActivityResponse
from ..schemas.consultation_schema import (
    AssignRequest,
    ConsultationCreatedResponse,
    ConsultationListResponse,
    ConsultationNoteCreate,
    ConsultationStats,
    ConsultationStatus,
    EstimatesUpdateRequest,
    ProjectConsultationCreate,
    ProjectConsultationResponse,
    ProjectType,
    StatusUpdateRequest,
    Urgency,
)
from ..services import consultation_service as service
from ..services.activity_service import activity_public, list_activities
from ..services.errors import RecordNotFound

router = APIRouter(
    prefix="/consultations",
    tags=["Consultations"],
)


def _not_found(exc: RecordNotFound) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.post(
    "/",
    response_model=ConsultationCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a Project Consultation",
    response_description="The stored consultation ID and confirmation message",
)
def submit_consultation(
    payload: ProjectConsultationCreate,
    db: Session = Depends(get_db),
) -> ConsultationCreatedResponse:
    """Persist a completed intake wizard snapshot with computed estimates."""
    try:
        consultation = service.create_consultation(db, payload)
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to store consultation: {exc}",
        ) from exc

    return ConsultationCreatedResponse(
        id=consultation.id,
        message="Project consultation submitted successfully",
    )


@router.get(
    "/",
    response_model=ConsultationListResponse,
    summary="List Project Consultations",
)
def list_consultations(
    status_filter: Optional[ConsultationStatus] = Query(None, alias="status"),
    type: Optional[ProjectType] = None,
    urgency: Optional[Urgency] = None,
    assigned_to: Optional[UUID] = Query(None, alias="assignedTo"),
    search: Optional[str] = Query(None, min_length=1),
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
) -> ConsultationListResponse:
    """Newest first. ``search`` matches description, name and contact name."""
    if search:
        rows = service.search_consultations(db, search, type=type, status=status_filter, limit=limit)
    else:
        rows = service.list_consultations(
            db,
            status=status_filter,
            type=type,
            urgency=urgency,
            assigned_to=assigned_to,
            limit=limit,
        )
    data = [ProjectConsultationResponse.model_validate(row) for row in rows]
    return ConsultationListResponse(data=data, count=len(data))


@router.get("/stats", response_model=ConsultationStats, summary="Consultation Statistics")
def consultation_stats(db: Session = Depends(get_db)) -> ConsultationStats:
    return ConsultationStats(**service.consultation_stats(db))


@router.get("/{consultation_id}", response_model=ProjectConsultationResponse)
def get_consultation(consultation_id: UUID, db: Session = Depends(get_db)) -> ProjectConsultationResponse:
    try:
        consultation = service.get_consultation(db, consultation_id)
    except RecordNotFound as exc:
        raise _not_found(exc) from exc
    return ProjectConsultationResponse.model_validate(consultation)


@router.patch("/{consultation_id}/status", response_model=ProjectConsultationResponse)
def update_status(
    consultation_id: UUID,
    payload: StatusUpdateRequest,
    db: Session = Depends(get_db),
) -> ProjectConsultationResponse:
    """Move a consultation through its lifecycle, stamping the matching timestamp."""
    try:
        consultation = service.update_status(
            db, consultation_id, payload.status, user_id=payload.user_id, notes=payload.notes
        )
    except RecordNotFound as exc:
        raise _not_found(exc) from exc
    return ProjectConsultationResponse.model_validate(consultation)


@router.post("/{consultation_id}/assign", response_model=ProjectConsultationResponse)
def assign_consultation(
    consultation_id: UUID,
    payload: AssignRequest,
    db: Session = Depends(get_db),
) -> ProjectConsultationResponse:
    try:
        consultation = service.assign_consultation(
            db, consultation_id, payload.user_id, assigned_by=payload.assigned_by
        )
    except RecordNotFound as exc:
        raise _not_found(exc) from exc
    return ProjectConsultationResponse.model_validate(consultation)


@router.post(
    "/{consultation_id}/notes",
    response_model=ProjectConsultationResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_note(
    consultation_id: UUID,
    payload: ConsultationNoteCreate,
    db: Session = Depends(get_db),
) -> ProjectConsultationResponse:
    try:
        consultation = service.add_note(db, consultation_id, payload.content, payload.author, payload.type)
    except RecordNotFound as exc:
        raise _not_found(exc) from exc
    return ProjectConsultationResponse.model_validate(consultation)


@router.patch("/{consultation_id}/estimates", response_model=ProjectConsultationResponse)
def update_estimates(
    consultation_id: UUID,
    payload: EstimatesUpdateRequest,
    db: Session = Depends(get_db),
) -> ProjectConsultationResponse:
    try:
        consultation = service.update_estimates(
            db,
            consultation_id,
            estimated_budget=payload.estimated_budget,
            estimated_timeline=payload.estimated_timeline,
            complexity=payload.complexity_score,
            user_id=payload.user_id,
        )
    except RecordNotFound as exc:
        raise _not_found(exc) from exc
    return ProjectConsultationResponse.model_validate(consultation)


@router.delete("/{consultation_id}", response_model=MessageResponse)
def delete_consultation(
    consultation_id: UUID,
    permanent: bool = False,
    user_id: Optional[UUID] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Soft delete marks the consultation cancelled; ``permanent=true`` removes it."""
    try:
        service.delete_consultation(db, consultation_id, permanent=permanent, user_id=user_id)
    except RecordNotFound as exc:
        raise _not_found(exc) from exc
    return MessageResponse(
        message="Project consultation deleted" if permanent else "Project consultation cancelled"
    )


@router.get("/{consultation_id}/activities", response_model=list[ActivityResponse])
def consultation_activities(
    consultation_id: UUID,
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
) -> list[ActivityResponse]:
    """Audit trail, newest first. Still available after a permanent delete."""
    return [
        activity_public(activity)
        for activity in list_activities(db, project_id=consultation_id, limit=limit)
    ]
