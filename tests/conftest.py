"""Shared fixtures: a configured process-wide client and a patched HTTP layer."""
from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

import td_jobs
from td_jobs import config as td_config

BASE_URL = "http://an.url.com"
SECRET = "v3ry_53cr37"


def make_response(status_code: int = 200, body: Any = None, text: str | None = None) -> MagicMock:
    """A stand-in for ``requests.Response``; ``text`` without ``body`` means non-JSON."""
    response = MagicMock()
    response.status_code = status_code
    if body is None and text is not None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
        response.text = text
    else:
        response.json.return_value = body
        response.text = json.dumps(body)
    return response


@pytest.fixture(autouse=True)
def configured():
    td_config.reset()
    td_jobs.configure(base_url=BASE_URL, application_secret=SECRET)
    yield td_jobs.configuration()
    td_config.reset()
    td_jobs.configure()


@pytest.fixture
def http():
    """Patch the session transport; every call is recorded on the mock."""
    with patch("requests.Session.request") as request:
        yield request


def sent_json(http_mock: MagicMock) -> Any:
    return http_mock.call_args.kwargs["json"]


def sent_params(http_mock: MagicMock) -> dict[str, str]:
    return dict(http_mock.call_args.kwargs["params"] or [])
