"""Intake wizard session endpoints.

The front end drives one server-side session per visitor: it writes field
values, moves between steps, and finally submits. Every response carries both
message keys and text localized via the ``locale`` query parameter.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from ..constants import (
    BUDGET_RANGES,
    CONTACT_METHODS,
    CONTENT_READINESS,
    FEATURES,
    INDUSTRIES,
    PROJECT_GOALS,
    PROJECT_TYPES,
    TIMELINES,
    URGENCY_LEVELS,
)
from ..database import get_db
from ..i18n import t
from ..schemas.base import MessageResponse
from ..schemas.wizard_schema import (
    FieldUpdateRequest,
    FieldUpdateResponse,
    JumpRequest,
    StepOut,
    SubmitResponse,
    TransitionResponse,
    WizardSessionResponse,
)
from ..services.consultation_service import DatabaseConsultationCreator
from ..services.wizard_service import (
    SessionNotFound,
    WizardSession,
    WizardSessionStore,
    get_session_store,
    list_steps,
    session_response,
)
from ..wizard import (
    TOTAL_STEPS,
    ErrorKind,
    advance,
    can_submit,
    estimates,
    invalid_fields,
    jump,
    retreat,
    set_field,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/wizard",
    tags=["Wizard"],
)

SUBMIT_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.CONNECTION: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.VALIDATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.IN_FLIGHT: status.HTTP_409_CONFLICT,
    ErrorKind.UNKNOWN: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _load(store: WizardSessionStore, session_id: str, locale: Optional[str]) -> WizardSession:
    try:
        return store.get(session_id)
    except SessionNotFound as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=t("errors.sessionNotFound", locale=locale),
        ) from exc


@router.get("/steps", response_model=list[StepOut], summary="List Wizard Steps")
def steps(locale: Optional[str] = None) -> list[StepOut]:
    return list_steps(locale)


@router.get("/options", summary="Wizard Option Lists")
def options() -> dict[str, list[str]]:
    """Allowed values for every select, radio and checkbox field in the wizard."""
    return {
        "type": PROJECT_TYPES,
        "urgency": URGENCY_LEVELS,
        "industry": INDUSTRIES,
        "goals": PROJECT_GOALS,
        "features": FEATURES,
        "timeline": TIMELINES,
        "budget": BUDGET_RANGES,
        "hasContent": CONTENT_READINESS,
        "preferredContact": CONTACT_METHODS,
    }


@router.post(
    "/sessions",
    response_model=WizardSessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start an Intake Session",
)
def start_session(
    locale: Optional[str] = None,
    store: WizardSessionStore = Depends(get_session_store),
) -> WizardSessionResponse:
    session = store.create()
    return session_response(session, locale)


@router.get("/sessions/{session_id}", response_model=WizardSessionResponse)
def get_session(
    session_id: str,
    locale: Optional[str] = None,
    store: WizardSessionStore = Depends(get_session_store),
) -> WizardSessionResponse:
    return session_response(_load(store, session_id, locale), locale)


@router.put("/sessions/{session_id}/fields/{field_name}", response_model=FieldUpdateResponse)
def update_field(
    session_id: str,
    field_name: str,
    payload: FieldUpdateRequest,
    locale: Optional[str] = None,
    store: WizardSessionStore = Depends(get_session_store),
) -> FieldUpdateResponse:
    """Store one value and return its validation result; never changes the step."""
    session = _load(store, session_id, locale)
    try:
        result = set_field(session.state, field_name, payload.value)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    return FieldUpdateResponse(
        field=field_name,
        valid=result.valid,
        message_key=result.message_key,
        message=t(result.message_key, result.params, locale) if result.message_key else None,
        session=session_response(session, locale),
    )


@router.post("/sessions/{session_id}/advance", response_model=TransitionResponse)
def advance_session(
    session_id: str,
    locale: Optional[str] = None,
    store: WizardSessionStore = Depends(get_session_store),
) -> TransitionResponse:
    session = _load(store, session_id, locale)
    result = advance(session.state)
    return TransitionResponse(
        moved=result.advanced,
        session=session_response(session, locale, errors=result.errors),
    )


@router.post("/sessions/{session_id}/retreat", response_model=TransitionResponse)
def retreat_session(
    session_id: str,
    locale: Optional[str] = None,
    store: WizardSessionStore = Depends(get_session_store),
) -> TransitionResponse:
    session = _load(store, session_id, locale)
    before = session.state.current_step
    after = retreat(session.state)
    return TransitionResponse(moved=after != before, session=session_response(session, locale, errors={}))


@router.post("/sessions/{session_id}/jump", response_model=TransitionResponse)
def jump_session(
    session_id: str,
    payload: JumpRequest,
    locale: Optional[str] = None,
    store: WizardSessionStore = Depends(get_session_store),
) -> TransitionResponse:
    session = _load(store, session_id, locale)
    try:
        result = jump(session.state, payload.step)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return TransitionResponse(
        moved=result.advanced,
        session=session_response(session, locale, errors=result.errors),
    )


@router.get("/sessions/{session_id}/estimate")
def session_estimate(
    session_id: str,
    store: WizardSessionStore = Depends(get_session_store),
) -> dict[str, Any]:
    """Live budget, timeline and complexity for the values entered so far."""
    return estimates(_load(store, session_id, None).state)


@router.post("/sessions/{session_id}/submit", response_model=SubmitResponse)
async def submit_session(
    session_id: str,
    request: Request,
    response: Response,
    locale: Optional[str] = None,
    store: WizardSessionStore = Depends(get_session_store),
    db: Session = Depends(get_db),
) -> SubmitResponse:
    """Store the session's snapshot as a new consultation.

    Only allowed from the review step with every field valid. On success the
    session starts over at step 1.
    """
    session = _load(store, session_id, locale)

    if session.state.current_step != TOTAL_STEPS:
        response.status_code = status.HTTP_409_CONFLICT
        return SubmitResponse(success=False, message=t("errors.notReadyToSubmit", locale=locale))
    if not can_submit(session.state):
        response.status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
        return SubmitResponse(
            success=False,
            error_kind=ErrorKind.VALIDATION.value,
            message=t("errors.validationError", locale=locale),
            detail=sorted(invalid_fields(session.state)),
        )

    creator = DatabaseConsultationCreator(
        db,
        user_agent=request.headers.get("user-agent"),
        ip_address=request.client.host if request.client else None,
        referrer=request.headers.get("referer"),
    )
    result = await session.submit(creator)
    if result.success:
        response.status_code = status.HTTP_201_CREATED
        return SubmitResponse(success=True, id=result.id, message=t("initializeProject.submitted", locale=locale))

    response.status_code = SUBMIT_STATUS_CODES[result.error_kind]
    logger.warning("[WIZARD] Submit for %s failed: %s", session_id, result.error_kind.value)
    return SubmitResponse(
        success=False,
        error_kind=result.error_kind.value,
        message=t(result.message_key, locale=locale),
        detail=result.detail,
    )


@router.delete("/sessions/{session_id}", response_model=MessageResponse)
def discard_session(
    session_id: str,
    locale: Optional[str] = None,
    store: WizardSessionStore = Depends(get_session_store),
) -> MessageResponse:
    try:
        store.delete(session_id)
    except SessionNotFound as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=t("errors.sessionNotFound", locale=locale),
        ) from exc
    return MessageResponse(message="Session discarded")
