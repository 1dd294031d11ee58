"""Testes do middleware de correlation_id."""

from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from internpath_assistant.observability.middleware import (
    CORRELATION_ID_HEADER,
    CorrelationIdMiddleware,
    get_correlation_id,
)


@pytest.fixture()
def client() -> TestClient:
    """App mínima que devolve o correlation_id visto pelo handler."""
    app = FastAPI()
    app.add_middleware(CorrelationIdMiddleware)

    @app.get("/echo")
    def echo() -> dict[str, str]:
        return {"correlation_id": get_correlation_id()}

    return TestClient(app)


class TestCorrelationIdMiddleware:
    def test_incoming_id_reaches_handler_and_response(self, client: TestClient) -> None:
        response = client.get("/echo", headers={CORRELATION_ID_HEADER: "abc-123"})

        assert response.json() == {"correlation_id": "abc-123"}
        assert response.headers[CORRELATION_ID_HEADER] == "abc-123"

    def test_generates_id_when_absent(self, client: TestClient) -> None:
        response = client.get("/echo")

        generated = response.headers[CORRELATION_ID_HEADER]
        assert len(generated) == 32
        assert response.json() == {"correlation_id": generated}

    def test_logs_completed_request(
        self, client: TestClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="internpath_assistant.observability"):
            client.get("/echo")

        records = [r for r in caplog.records if r.getMessage() == "http_request_completed"]
        assert len(records) == 1
        assert records[0].method == "GET"
        assert records[0].path == "/echo"
        assert records[0].status_code == 200
