"""Tests for /api/collect and /api/submit."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from jailbox.core.config import settings
from jailbox.engines.script import ScriptHost
from jailbox.main import create_app
from tests.utils.script import make_host


def test_collect_returns_json(client: TestClient) -> None:
    r = client.get(f"{settings.API_V1_STR}/collect")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/json")
    assert r.json() == {"files": ["a.txt", "b.txt"], "data": {"a": 1}}


def test_submit_success(client: TestClient) -> None:
    r = client.post(f"{settings.API_V1_STR}/submit", content="hello")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/json")
    assert r.json() == {"echo": "hello"}


def test_submit_rejected_is_plain_text(client: TestClient) -> None:
    r = client.post(f"{settings.API_V1_STR}/submit", content="")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")
    assert r.text == "empty input"


def test_submit_fault_is_redacted(
    client: TestClient, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.ERROR):
        r = client.post(f"{settings.API_V1_STR}/submit", content="boom")
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}
    assert "ZeroDivision" not in r.text
    assert any("ZeroDivisionError" in rec.getMessage() for rec in caplog.records)


def test_compile_error_is_redacted(context_dir: Path) -> None:
    host = make_host("def collect(:\n", context_dir)
    with TestClient(create_app(host)) as c:
        r = c.get(f"{settings.API_V1_STR}/collect")
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}


def test_host_not_configured_returns_503() -> None:
    with patch(
        "jailbox.api.deps.default_script_host",
        side_effect=ValueError("Context directory does not exist"),
    ):
        with TestClient(create_app()) as c:
            r = c.get(f"{settings.API_V1_STR}/collect")
    assert r.status_code == 503
    assert r.json() == {"detail": "Script host is not configured"}


def test_submit_invalid_utf8_is_bad_request(client: TestClient, api_host: ScriptHost) -> None:
    with patch.object(api_host, "check") as check:
        r = client.post(f"{settings.API_V1_STR}/submit", content=b"ab\xffcd")
    assert r.status_code == 400
    assert r.json() == {"detail": "Request body must be valid UTF-8"}
    check.assert_not_called()


def test_submit_non_ascii_utf8_passed_through(client: TestClient) -> None:
    r = client.post(f"{settings.API_V1_STR}/submit", content="héllo".encode())
    assert r.status_code == 200
    assert r.json() == {"echo": "héllo"}
