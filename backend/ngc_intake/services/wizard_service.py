"""Server-side wizard sessions.

Each session owns one ``WizardState`` and one ``SubmissionGateway``. Sessions
are kept in memory, keyed by UUID, and dropped once idle for longer than
``WIZARD_SESSION_TTL_MINUTES``.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from ..config import WIZARD_SESSION_TTL_MINUTES
from ..i18n import t
from ..schemas.wizard_schema import FieldError, StepOut, WizardSessionResponse
from ..wizard import (
    STEPS,
    TOTAL_STEPS,
    Creator,
    FieldValidation,
    SubmissionGateway,
    SubmissionResult,
    WizardState,
    can_submit,
    estimates,
    get_step,
    invalid_fields,
    progress_percentage,
    reset,
    snapshot,
)
from .errors import RecordNotFound

logger = logging.getLogger(__name__)


class SessionNotFound(RecordNotFound):
    """Unknown or expired wizard session."""


class WizardSession:
    def __init__(self, session_id: str):
        self.session_id = session_id
        self.state = WizardState()
        self.gateway = SubmissionGateway(self._dispatch)
        self.created_at = datetime.utcnow()
        self.last_activity = self.created_at
        self._create: Optional[Creator] = None

    def touch(self) -> None:
        self.last_activity = datetime.utcnow()

    def expired(self, minutes: int = WIZARD_SESSION_TTL_MINUTES) -> bool:
        return datetime.utcnow() > self.last_activity + timedelta(minutes=minutes)

    async def _dispatch(self, payload: Dict[str, Any]) -> str:
        return await self._create(payload)

    async def submit(self, create: Creator) -> SubmissionResult:
        """Send the current snapshot through ``create``; reset on success."""
        # The running submission keeps its creator until it finishes
        if not self.gateway.in_flight:
            self._create = create
        result = await self.gateway.submit(snapshot(self.state))
        if result.success:
            reset(self.state)
            logger.info("[WIZARD] %s submitted as %s, session reset", self.session_id, result.id)
        return result


class WizardSessionStore:
    def __init__(self, ttl_minutes: int = WIZARD_SESSION_TTL_MINUTES):
        self.ttl_minutes = ttl_minutes
        self.sessions: Dict[str, WizardSession] = {}

    def create(self) -> WizardSession:
        session = WizardSession(str(uuid.uuid4()))
        self.sessions[session.session_id] = session
        self.purge_expired()
        logger.info("[WIZARD] Created session %s", session.session_id)
        return session

    def get(self, session_id: str) -> WizardSession:
        session = self.sessions.get(session_id)
        if session is not None and session.expired(self.ttl_minutes):
            del self.sessions[session_id]
            logger.info("[WIZARD] Session %s expired", session_id)
            session = None
        if session is None:
            raise SessionNotFound("errors.sessionNotFound")
        session.touch()
        return session

    def delete(self, session_id: str) -> None:
        if self.sessions.pop(session_id, None) is None:
            raise SessionNotFound("errors.sessionNotFound")

    def purge_expired(self) -> int:
        stale = [sid for sid, s in self.sessions.items() if s.expired(self.ttl_minutes)]
        for sid in stale:
            del self.sessions[sid]
        return len(stale)


session_store = WizardSessionStore()


def get_session_store() -> WizardSessionStore:
    return session_store


# ── Response builders ─────────────────────────────────────────────────

def field_error(name: str, result: FieldValidation, locale: Optional[str] = None) -> FieldError:
    return FieldError(
        field=name,
        message_key=result.message_key,
        message=t(result.message_key, result.params, locale) if result.message_key else None,
        params=dict(result.params),
    )


def field_errors(errors: Dict[str, FieldValidation], locale: Optional[str] = None) -> list[FieldError]:
    return [field_error(name, result, locale) for name, result in errors.items()]


def step_out(number: int, locale: Optional[str] = None) -> StepOut:
    step = get_step(number)
    return StepOut(
        number=step.number,
        title_key=step.title_key,
        title=t(step.title_key, locale=locale),
        fields=list(step.fields),
    )


def list_steps(locale: Optional[str] = None) -> list[StepOut]:
    return [step_out(step.number, locale) for step in STEPS]


def session_response(
    session: WizardSession,
    locale: Optional[str] = None,
    errors: Optional[Dict[str, FieldValidation]] = None,
) -> WizardSessionResponse:
    """Full view of a session; ``errors`` defaults to every invalid field."""
    state = session.state
    step = get_step(state.current_step)
    return WizardSessionResponse(
        session_id=session.session_id,
        current_step=state.current_step,
        total_steps=TOTAL_STEPS,
        step_title=t(step.title_key, locale=locale),
        progress=progress_percentage(state),
        progress_label=t(
            "initializeProject.progress",
            {"current": state.current_step, "total": TOTAL_STEPS},
            locale,
        ),
        values=dict(state.values),
        errors=field_errors(invalid_fields(state) if errors is None else errors, locale),
        can_submit=can_submit(state),
        estimates=estimates(state),
    )
