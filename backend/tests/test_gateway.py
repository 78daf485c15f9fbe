"""Submission gateway tests — error classification, in-flight guard, HTTP creator.

The HTTP creator is exercised against ``httpx.MockTransport`` so no server is needed.
"""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import asyncio
import json

import httpx
import pytest

from ngc_intake.wizard.gateway import (
    ErrorKind,
    HttpConsultationCreator,
    SubmissionGateway,
    SubmissionRejected,
    classify_error,
)

PAYLOAD = {"name": "Acme Redo", "contactEmail": "a@b.com"}


def _run(coro):
    return asyncio.run(coro)


class TestClassification:
    def test_rejected_is_validation(self):
        assert classify_error(SubmissionRejected("bad")) is ErrorKind.VALIDATION

    def test_connection_errors(self):
        assert classify_error(ConnectionError("down")) is ErrorKind.CONNECTION
        assert classify_error(httpx.ConnectError("refused")) is ErrorKind.CONNECTION
        assert classify_error(httpx.ReadTimeout("slow")) is ErrorKind.CONNECTION

    def test_anything_else_is_unknown(self):
        assert classify_error(KeyError("id")) is ErrorKind.UNKNOWN


class TestSubmissionGateway:
    def test_success_returns_id(self):
        calls = []

        async def create(payload):
            calls.append(payload)
            return "abc-123"

        result = _run(SubmissionGateway(create).submit(PAYLOAD))
        assert result.success is True
        assert result.id == "abc-123"
        assert result.error_kind is None
        assert calls == [PAYLOAD]

    def test_creator_gets_a_copy(self):
        async def create(payload):
            payload["mutated"] = True
            return "id"

        values = dict(PAYLOAD)
        _run(SubmissionGateway(create).submit(values))
        assert "mutated" not in values

    def test_rejection(self):
        async def create(payload):
            raise SubmissionRejected("missing email", detail=[{"loc": ["contactEmail"]}])

        result = _run(SubmissionGateway(create).submit({}))
        assert result.success is False
        assert result.error_kind is ErrorKind.VALIDATION
        assert result.message_key == "errors.validationError"
        assert result.detail == [{"loc": ["contactEmail"]}]

    def test_unreachable_service(self):
        async def create(payload):
            raise ConnectionError("connection refused")

        result = _run(SubmissionGateway(create).submit(PAYLOAD))
        assert result.error_kind is ErrorKind.CONNECTION
        assert result.message_key == "errors.serverUnavailable"

    def test_single_attempt_no_retry(self):
        attempts = []

        async def create(payload):
            attempts.append(1)
            raise RuntimeError("boom")

        result = _run(SubmissionGateway(create).submit(PAYLOAD))
        assert result.error_kind is ErrorKind.UNKNOWN
        assert len(attempts) == 1

    def test_second_submit_while_in_flight_is_refused(self):
        calls = []

        async def scenario():
            release = asyncio.Event()

            async def create(payload):
                calls.append(payload)
                await release.wait()
                return "only-one"

            gateway = SubmissionGateway(create)
            first = asyncio.create_task(gateway.submit(PAYLOAD))
            await asyncio.sleep(0)
            assert gateway.in_flight is True
            second = await gateway.submit(PAYLOAD)
            release.set()
            return await first, second, gateway

        first, second, gateway = _run(scenario())
        assert first.success is True
        assert second.success is False
        assert second.error_kind is ErrorKind.IN_FLIGHT
        assert len(calls) == 1
        assert gateway.in_flight is False

    def test_guard_released_after_failure(self):
        async def create(payload):
            raise ConnectionError("down")

        gateway = SubmissionGateway(create)
        _run(gateway.submit(PAYLOAD))
        assert gateway.in_flight is False


class TestHttpConsultationCreator:
    def _creator(self, handler):
        return HttpConsultationCreator("http://intake.test", transport=httpx.MockTransport(handler))

    def test_posts_payload_with_source(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={"id": "rec-1", "message": "ok"})

        record_id = _run(self._creator(handler)(PAYLOAD))
        assert record_id == "rec-1"
        assert seen["path"] == "/consultations/"
        assert seen["body"] == {"source": "website", **PAYLOAD}

    def test_422_becomes_rejection(self):
        def handler(request):
            return httpx.Response(422, json={"detail": [{"loc": ["body", "contactEmail"]}]})

        with pytest.raises(SubmissionRejected) as exc_info:
            _run(self._creator(handler)({}))
        assert exc_info.value.detail == [{"loc": ["body", "contactEmail"]}]

    def test_422_with_bare_list_body(self):
        def handler(request):
            return httpx.Response(422, json=[{"loc": "type"}])

        result = _run(SubmissionGateway(self._creator(handler)).submit(PAYLOAD))
        assert result.error_kind is ErrorKind.VALIDATION
        assert result.detail == [{"loc": "type"}]

    def test_server_error_is_unknown(self):
        def handler(request):
            return httpx.Response(500, text="oops")

        result = _run(SubmissionGateway(self._creator(handler)).submit(PAYLOAD))
        assert result.error_kind is ErrorKind.UNKNOWN

    def test_transport_failure_is_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        result = _run(SubmissionGateway(self._creator(handler)).submit(PAYLOAD))
        assert result.error_kind is ErrorKind.CONNECTION
