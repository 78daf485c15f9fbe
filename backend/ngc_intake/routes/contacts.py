from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..i18n import t
from ..schemas.base import MessageResponse
from ..schemas.common_schema import ActivityResponse
from ..schemas.consultation_schema import AssignRequest, Urgency
from ..schemas.contact_schema import (
    ContactCreate,
    ContactCreatedResponse,
    ContactListResponse,
    ContactNoteCreate,
    ContactResponse,
    ContactStats,
    ContactStatus,
    ContactStatusUpdate,
    ContactType,
)
from ..services import contact_service as service
from ..services.activity_service import activity_public, list_activities
from ..services.errors import RecordNotFound

router = APIRouter(
    prefix="/contacts",
    tags=["Contacts"],
)


@router.post(
    "/",
    response_model=ContactCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit the Contact Form",
)
def submit_contact(
    payload: ContactCreate,
    locale: Optional[str] = None,
    db: Session = Depends(get_db),
) -> ContactCreatedResponse:
    try:
        contact = service.create_contact(db, payload)
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to store contact: {exc}",
        ) from exc
    return ContactCreatedResponse(id=contact.id, message=t("contact.received", locale=locale))


@router.get("/", response_model=ContactListResponse, summary="List Contacts")
def list_contacts(
    status_filter: Optional[ContactStatus] = Query(None, alias="status"),
    contact_type: Optional[ContactType] = Query(None, alias="contactType"),
    priority: Optional[Urgency] = None,
    assigned_to: Optional[UUID] = Query(None, alias="assignedTo"),
    search: Optional[str] = Query(None, min_length=1),
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
) -> ContactListResponse:
    if search:
        rows = service.search_contacts(db, search, status=status_filter, limit=limit)
    else:
        rows = service.list_contacts(
            db,
            status=status_filter,
            contact_type=contact_type,
            priority=priority,
            assigned_to=assigned_to,
            limit=limit,
        )
    data = [ContactResponse.model_validate(row) for row in rows]
    return ContactListResponse(data=data, count=len(data))


@router.get("/stats", response_model=ContactStats, summary="Contact Statistics")
def contact_stats(db: Session = Depends(get_db)) -> ContactStats:
    return ContactStats(**service.contact_stats(db))


@router.get("/{contact_id}", response_model=ContactResponse)
def get_contact(contact_id: UUID, db: Session = Depends(get_db)) -> ContactResponse:
    try:
        return ContactResponse.model_validate(service.get_contact(db, contact_id))
    except RecordNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.patch("/{contact_id}/status", response_model=ContactResponse)
def update_contact_status(
    contact_id: UUID,
    payload: ContactStatusUpdate,
    db: Session = Depends(get_db),
) -> ContactResponse:
    try:
        contact = service.update_contact_status(
            db, contact_id, payload.status, user_id=payload.user_id, notes=payload.notes
        )
    except RecordNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return ContactResponse.model_validate(contact)


@router.post("/{contact_id}/assign", response_model=ContactResponse)
def assign_contact(
    contact_id: UUID,
    payload: AssignRequest,
    db: Session = Depends(get_db),
) -> ContactResponse:
    try:
        contact = service.assign_contact(db, contact_id, payload.user_id, assigned_by=payload.assigned_by)
    except RecordNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return ContactResponse.model_validate(contact)


@router.post("/{contact_id}/notes", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
def add_contact_note(
    contact_id: UUID,
    payload: ContactNoteCreate,
    db: Session = Depends(get_db),
) -> ContactResponse:
    try:
        contact = service.add_contact_note(db, contact_id, payload.content, payload.author, payload.type)
    except RecordNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return ContactResponse.model_validate(contact)


@router.delete("/{contact_id}", response_model=MessageResponse)
def delete_contact(
    contact_id: UUID,
    permanent: bool = False,
    user_id: Optional[UUID] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Soft delete marks the contact as spam; ``permanent=true`` removes it."""
    try:
        service.delete_contact(db, contact_id, permanent=permanent, user_id=user_id)
    except RecordNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return MessageResponse(message="Contact deleted" if permanent else "Contact marked as spam")


@router.get("/{contact_id}/activities", response_model=list[ActivityResponse])
def contact_activities(
    contact_id: UUID,
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
) -> list[ActivityResponse]:
    return [activity_public(a) for a in list_activities(db, contact_id=contact_id, limit=limit)]
