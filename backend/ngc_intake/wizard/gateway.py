"""Submission gateway — hands a completed wizard snapshot to persistence.

The gateway does not know where records live. It wraps an async *creator*
(``payload -> record id``) and turns whatever that creator raises into one of
a few error kinds the UI can show. Exactly one attempt is made per call; a
call that arrives while another is still running is refused.

Creators:
  HttpConsultationCreator — POST /consultations on a running intake API
  services.consultation_service.DatabaseConsultationCreator — in-process
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from ..config import INTAKE_API_URL, INTAKE_HTTP_TIMEOUT

logger = logging.getLogger(__name__)

Creator = Callable[[Dict[str, Any]], Awaitable[str]]


class SubmissionRejected(Exception):
    """Raised by a creator when the persistence service refuses the payload."""

    def __init__(self, message: str, detail: Any = None):
        super().__init__(message)
        self.detail = detail


class ErrorKind(str, Enum):
    CONNECTION = "ConnectionError"
    VALIDATION = "ValidationError"
    UNKNOWN = "UnknownError"
    IN_FLIGHT = "InFlight"


ERROR_MESSAGE_KEYS: dict[ErrorKind, str] = {
    ErrorKind.CONNECTION: "errors.serverUnavailable",
    ErrorKind.VALIDATION: "errors.validationError",
    ErrorKind.UNKNOWN: "errors.unknownError",
    ErrorKind.IN_FLIGHT: "errors.submissionInFlight",
}


@dataclass(frozen=True)
class SubmissionResult:
    success: bool
    id: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    detail: Any = None

    @property
    def message_key(self) -> Optional[str]:
        return ERROR_MESSAGE_KEYS.get(self.error_kind) if self.error_kind else None


def classify_error(exc: BaseException) -> ErrorKind:
    if isinstance(exc, SubmissionRejected):
        return ErrorKind.VALIDATION
    if isinstance(exc, (ConnectionError, httpx.TransportError)):
        return ErrorKind.CONNECTION
    return ErrorKind.UNKNOWN


class SubmissionGateway:
    """One-shot submitter with an in-flight guard."""

    def __init__(self, create: Creator):
        self._create = create
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def submit(self, values: Dict[str, Any]) -> SubmissionResult:
        if self._in_flight:
            logger.warning("[GATEWAY] Submit refused — a submission is already in flight")
            return SubmissionResult(False, error_kind=ErrorKind.IN_FLIGHT)

        self._in_flight = True
        try:
            record_id = await self._create(dict(values))
        except Exception as exc:
            kind = classify_error(exc)
            logger.error("[GATEWAY] Submission failed (%s): %s", kind.value, exc)
            detail = exc.detail if isinstance(exc, SubmissionRejected) else None
            return SubmissionResult(False, error_kind=kind, detail=detail)
        finally:
            self._in_flight = False

        logger.info("[GATEWAY] Submission stored — id=%s", record_id)
        return SubmissionResult(True, id=str(record_id))


class HttpConsultationCreator:
    """Creator that posts the payload to a running intake API."""

    def __init__(
        self,
        base_url: str = INTAKE_API_URL,
        *,
        timeout: float = INTAKE_HTTP_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        source: str = "website",
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.source = source

    async def __call__(self, payload: Dict[str, Any]) -> str:
        body = {"source": self.source, **payload}
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self.transport
        ) as client:
            response = await client.post("/consultations/", json=body)

        if response.status_code in (400, 422):
            raise SubmissionRejected(
                f"Consultation rejected (HTTP {response.status_code})",
                detail=_json_or_text(response),
            )
        if response.status_code != 201:
            raise RuntimeError(
                f"Consultation create failed (HTTP {response.status_code}): {response.text[:500]}"
            )

        record_id = response.json().get("id")
        if not record_id:
            raise RuntimeError("Consultation create response missing id")
        return str(record_id)


def _json_or_text(response: httpx.Response) -> Any:
    try:
        body = response.json()
    except ValueError:
        return response.text[:500]
    return body.get("detail") if isinstance(body, dict) else body
