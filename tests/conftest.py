"""
Pytest configuration and shared fixtures.

Provides sample pages, fake HTTP sessions and a fake OpenAI client so unit and
integration tests never touch the network.
"""

import json
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, Iterable, List, Optional

import pytest
import requests

from sitetune.core.config import Config, PageSource


SAMPLE_HTML = """
<html>
<head>
  <title>Acme Software | Home</title>
  <meta name="description" content="Acme builds web and mobile products.">
  <script>var tracking = "should never appear";</script>
  <style>.hero { color: red; }</style>
</head>
<body>
  <header><h1>Header heading should be removed</h1></header>
  <nav><ul><li>Navigation link removed</li></ul></nav>
  <div class="cookie-banner"><p>We use cookies to improve your experience on this site.</p></div>
  <div class="modal-popup"><p>Subscribe to our newsletter for weekly updates!</p></div>
  <main>
    <h1>Welcome to Acme</h1>
    <h2>Our Services</h2>
    <h3>Hi</h3>
    <p>Acme is a software development company founded in 2015.</p>
    <p>Too short.</p>
    <p>We build custom web applications, mobile apps and cloud platforms.</p>
    <ul>
      <li>Web development</li>
      <li>Tiny</li>
      <li>Mobile app development</li>
    </ul>
    <ol><li>Cloud consulting services</li></ol>
    <button>Contact us now</button>
    <a class="btn">Get a quote today please</a>
  </main>
  <footer><p>Copyright Acme Software, all rights reserved worldwide.</p></footer>
</body>
</html>
"""


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """
    requests.Session stand-in.

    ``pages`` maps URL to HTML or to an exception instance to raise.
    """

    def __init__(self, pages: Dict[str, Any]):
        self.pages = pages
        self.headers: Dict[str, str] = {}
        self.calls: List[Dict[str, Any]] = []

    def get(self, url: str, timeout: Optional[float] = None) -> FakeResponse:
        self.calls.append({"url": url, "timeout": timeout})
        page = self.pages.get(url)
        if isinstance(page, Exception):
            raise page
        if page is None:
            return FakeResponse("", status_code=404)
        return FakeResponse(page)


def make_completion(content: Optional[str], prompt_tokens: int = 1000, completion_tokens: int = 500):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens),
    )


def make_job(job_id: str, status: str, fine_tuned_model: Optional[str] = None, error: Optional[str] = None):
    return SimpleNamespace(
        id=job_id,
        status=status,
        fine_tuned_model=fine_tuned_model,
        error=SimpleNamespace(message=error) if error is not None else None,
    )


class _FakeChatCompletions:
    def __init__(self, client: "FakeOpenAI"):
        self._client = client

    def create(self, **kwargs):
        self._client.chat_requests.append(kwargs)
        if self._client.chat_error is not None:
            raise self._client.chat_error
        if kwargs.get("stream"):
            return iter(self._client.stream_chunks)
        return self._client.completion


class _FakeFiles:
    def __init__(self, client: "FakeOpenAI"):
        self._client = client

    def create(self, file, purpose):
        self._client.uploads.append({"content": file.read(), "purpose": purpose})
        if self._client.upload_error is not None:
            raise self._client.upload_error
        return SimpleNamespace(id="file-123")


class _FakeJobs:
    def __init__(self, client: "FakeOpenAI"):
        self._client = client

    def create(self, **kwargs):
        self._client.job_requests.append(kwargs)
        if self._client.job_error is not None:
            raise self._client.job_error
        return make_job("ftjob-123", "validating_files")

    def retrieve(self, job_id: str):
        self._client.retrieved.append(job_id)
        return self._client.job_states.pop(0)


class FakeOpenAI:
    """
    Records every call and replays canned responses.
    """

    def __init__(
        self,
        completion: Any = None,
        job_states: Optional[Iterable[Any]] = None,
        stream_chunks: Optional[Iterable[Any]] = None,
    ):
        self.completion = completion
        self.job_states = list(job_states or [])
        self.stream_chunks = list(stream_chunks or [])
        self.chat_error: Optional[Exception] = None
        self.upload_error: Optional[Exception] = None
        self.job_error: Optional[Exception] = None

        self.chat_requests: List[Dict[str, Any]] = []
        self.uploads: List[Dict[str, Any]] = []
        self.job_requests: List[Dict[str, Any]] = []
        self.retrieved: List[str] = []

        self.chat = SimpleNamespace(completions=_FakeChatCompletions(self))
        self.files = _FakeFiles(self)
        self.fine_tuning = SimpleNamespace(jobs=_FakeJobs(self))


def qa_payload(count: int, start: int = 1) -> List[Dict[str, str]]:
    return [
        {"question": f"What is question {i}?", "answer": f"This is answer {i}."}
        for i in range(start, start + count)
    ]


def record_line(question: str = "What do you do?", answer: str = "We build software.") -> str:
    return json.dumps(
        {
            "messages": [
                {"role": "system", "content": "You are a helpful assistant."},
                {"role": "user", "content": question},
                {"role": "assistant", "content": answer},
            ]
        }
    )


def write_lines(path: Path, lines: Iterable[str]) -> Path:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_HTML


@pytest.fixture
def page_source() -> PageSource:
    return PageSource(url="https://example.com/", content_type="general")


@pytest.fixture
def test_config(tmp_path, monkeypatch) -> Config:
    """
    Config isolated from the developer's environment and .env file.
    """
    for name in ("OPENAI_API_KEY", "OPENAI_ORG_ID", "FINE_TUNED_MODEL"):
        monkeypatch.delenv(name, raising=False)
    return Config(
        _env_file=None,
        logs_dir=tmp_path / "logs",
        log_level="WARNING",
        openai_api_key="sk-test",
    )


@pytest.fixture
def no_sleep():
    """Sleep replacement that records requested delays."""
    delays: List[float] = []

    def _sleep(seconds: float) -> None:
        delays.append(seconds)

    _sleep.delays = delays
    return _sleep


def pytest_configure(config):
    """
    Pytest hook for custom configuration.

    Registers custom markers used throughout tests.
    """
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
