"""Shared fixtures: in-memory store, stub AI assistant, TestClient."""
import os

# 앱 import 전에 설정
os.environ["SOLUTION_STORE"] = "memory"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "s3cret-pass"
os.environ["ADMIN_HASHED_PASSWORD"] = ""
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["GEMINI_API_KEY"] = ""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from api.main import app
from core.assistant import SolutionAssistant
from core.cache import ViewCache
from core.container import get_assistant, get_solution_repository, get_view_cache
from core.errors import AIServiceError
from core.repository import MemorySolutionRepository
from schemas.assistant import TagSuggestion


class StepClock:
    """Deterministic clock: every call is one second later than the last."""

    def __init__(self, start=datetime(2024, 1, 1, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> str:
        self.current += timedelta(seconds=1)
        return self.current.isoformat()


class StubAssistant(SolutionAssistant):
    def __init__(self):
        self.fail = False
        self.calls = []

    async def summarize(self, text: str) -> str:
        self.calls.append(("summarize", text))
        if not text.strip():
            raise AIServiceError("Cannot summarize empty text.", upstream=False)
        if self.fail:
            raise AIServiceError("Failed to summarize text with AI.")
        return f"Summary of {len(text)} chars"

    async def suggest_tags_and_categories(self, text: str) -> TagSuggestion:
        self.calls.append(("suggest", text))
        if not text.strip():
            raise AIServiceError("Cannot suggest tags for empty content.", upstream=False)
        if self.fail:
            raise AIServiceError("Failed to suggest tags and categories with AI.")
        return TagSuggestion(tags=["dp", "greedy"], categories=["Dynamic Programming"])


def make_payload(**overrides) -> dict:
    payload = {
        "title": "Two Sets",
        "problemId": "1092",
        "problemStatementLink": "https://cses.fi/problemset/task/1092",
        "sections": [{"type": "paragraph", "content": "x"}],
        "tags": "dp,greedy",
        "category": "DP",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def repo(clock):
    return MemorySolutionRepository(clock=clock)


@pytest.fixture
def assistant():
    return StubAssistant()


@pytest.fixture
def client(repo, assistant):
    cache = ViewCache()
    app.dependency_overrides[get_solution_repository] = lambda: repo
    app.dependency_overrides[get_assistant] = lambda: assistant
    app.dependency_overrides[get_view_cache] = lambda: cache
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client):
    resp = client.post("/api/admin/login", json={"username": "admin", "password": "s3cret-pass"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
def submit(client):
    """Submit a solution and return its id."""

    def _submit(**overrides) -> str:
        resp = client.post("/submit", json=make_payload(**overrides), follow_redirects=False)
        assert resp.status_code == 303, resp.text
        return resp.headers["location"].rsplit("/", 1)[-1]

    return _submit
