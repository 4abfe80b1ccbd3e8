"""Test configuration and fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import Mock

import pytest
import requests

from homework_assigner.config import AssignerSettings
from homework_assigner.github.client import GitHubClient

ResponseFactory = Callable[..., requests.Response]


@pytest.fixture
def settings() -> AssignerSettings:
    """Provide settings that ignore the developer's environment and `.env`."""
    return AssignerSettings(
        _env_file=None,
        OAUTH_TOKEN="test-token",
        GITHUB_BASE_URL="https://api.github.com",
        GITHUB_USER_AGENT="homework-assigner-tests",
        GITHUB_TIMEOUT_SECONDS=30,
    )


@pytest.fixture
def make_response() -> ResponseFactory:
    """Build real `requests.Response` objects carrying a JSON payload."""

    def _make(
        payload: Any = None,
        *,
        status: int = 200,
        headers: dict[str, str] | None = None,
        url: str = "https://api.github.com/",
    ) -> requests.Response:
        resp = requests.Response()
        resp.status_code = status
        resp.reason = "OK" if status < 400 else "Error"
        resp.url = url
        resp.encoding = "utf-8"
        resp.headers["Content-Type"] = "application/json"
        resp.headers.update(headers or {})
        resp._content = json.dumps(payload).encode("utf-8")
        return resp

    return _make


@pytest.fixture
def session() -> Mock:
    """Provide a mocked HTTP session."""
    return Mock(spec=requests.Session)


@pytest.fixture
def client(settings: AssignerSettings, session: Mock) -> GitHubClient:
    """Provide a client wired to the mocked session."""
    return GitHubClient("test-token", settings=settings, session=session)
