from types import SimpleNamespace

import pytest

from leadforge.config import Settings
from leadforge.discovery import RateLimitPolicy
from leadforge.types import Location, RawResultItem, SearchCriteria


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    """Records requests and replays queued responses (or raises queued exceptions)."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def _next(self, method, url, kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        resp = self.responses.pop(0) if self.responses else FakeResponse(200, {})
        if isinstance(resp, Exception):
            raise resp
        return resp

    def get(self, url, **kwargs):
        return self._next("GET", url, kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, kwargs)


class FakeChatClient:
    """Mimics ``client.chat.completions.create`` of the openai SDK."""

    def __init__(self, replies=None, error=None):
        self.replies = list(replies or [])
        self.error = error
        self.prompts = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, model, messages, **kwargs):
        self.prompts.append(messages[-1]["content"])
        if self.error is not None:
            raise self.error
        content = self.replies.pop(0) if self.replies else ""
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeSearchClient:
    """Returns ``pages[query]`` page by page; unknown queries yield nothing."""

    def __init__(self, pages=None, default=None, errors=None):
        self.pages = pages or {}
        self.default = default or []
        self.errors = errors or {}
        self.calls = []

    def search(self, query, start=1, num=10, date_restrict=""):
        self.calls.append((query, start, date_restrict))
        if query in self.errors:
            raise self.errors[query]
        page_idx = (start - 1) // num
        pages = self.pages.get(query, self.default)
        return list(pages[page_idx]) if page_idx < len(pages) else []


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        google_api_key="test-key",
        google_cx="test-cx",
        search_backend="google",
        gemini_api_key="",
        brevo_api_key="brevo-test",
    )


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def policy(sleeps):
    return RateLimitPolicy(sleeper=sleeps.append)


@pytest.fixture
def pune_criteria():
    return SearchCriteria(
        industry=["Technology"],
        location=Location(city="Pune"),
        target_platforms=["linkedin"],
        max_pages=1,
    )


@pytest.fixture
def john_item():
    return RawResultItem(
        title="John Smith - CTO",
        snippet="John Smith, CTO at Acme Inc, john@acme.com, +1-555-123-4567, Pune",
        link="https://www.linkedin.com/in/johnsmith",
    )
