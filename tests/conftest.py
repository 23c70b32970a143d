"""Shared fixtures for the setup script tests."""

from __future__ import annotations

import pytest
from github_api import ApiResponse, GitHubApiError


class FakeClient:
    """Stands in for GitHubClient; replies from a (method, path) table."""

    def __init__(self, replies: dict | None = None):
        self.replies = replies or {}
        self.calls: list[tuple[str, str, dict | None]] = []

    def request(self, method: str, path: str, body: dict | None = None) -> ApiResponse:
        self.calls.append((method, path, body))
        reply = self.replies.get((method, path), GitHubApiError("HTTP 404: Branch not found", 404))
        if isinstance(reply, Exception):
            raise reply
        return reply

    def paths(self, method: str) -> list[str]:
        return [path for m, path, _ in self.calls if m == method]


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def env() -> dict[str, str]:
    return {"GITHUB_TOKEN": "ghp_test", "GITHUB_REPOSITORY": "acme/widgets"}


@pytest.fixture
def ok() -> ApiResponse:
    return ApiResponse(200, {})
