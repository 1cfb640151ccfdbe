"""Test fixtures for robyn-upload-api unit tests."""

import asyncio
from dataclasses import dataclass, field

import pytest
from robyn.testing import TestClient

from upload_api.core.lifespan import State
from upload_api.services.ingestor import UploadIngestor


# -----------------------------------------------------------------------------
# Mock classes for Robyn Request
# -----------------------------------------------------------------------------


@dataclass
class MockHeaders:
    """Mock Headers object for Robyn Request."""

    _data: dict = field(default_factory=dict)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._data.get(key.lower(), default)

    def set(self, key: str, value: str) -> None:
        self._data[key.lower()] = value

    def __getitem__(self, key: str) -> str:
        return self._data[key.lower()]

    def __setitem__(self, key: str, value: str) -> None:
        self._data[key.lower()] = value


@dataclass
class MockUrl:
    """Mock Url object for Robyn Request."""

    scheme: str = "http"
    host: str = "testserver"
    path: str = "/upload"


@dataclass
class MockRequest:
    """Mock Request object shaped like Robyn's after its multipart parsing.

    ``form_data`` maps text field names to values, ``files`` maps filenames
    to contents and ``body`` only holds the concatenated payloads.
    """

    form_data: dict = field(default_factory=dict)
    files: dict = field(default_factory=dict)
    body: bytes | str = b""
    headers: MockHeaders = field(default_factory=MockHeaders)
    method: str = "POST"
    url: MockUrl = field(default_factory=MockUrl)


# -----------------------------------------------------------------------------
# State fixture
# -----------------------------------------------------------------------------


@pytest.fixture(scope="session")
def test_state() -> State:
    """Create a test state container."""
    return State()


@pytest.fixture
def global_dependencies(test_state: State) -> dict:
    """Setup global dependencies for tests."""
    test_state.ingestor = UploadIngestor(field="file")
    yield {"state": test_state}
    test_state.clear()


@pytest.fixture
def make_mock_request():
    """Factory fixture to create mock form requests."""

    def _make(
        form_data: dict | None = None,
        files: dict | None = None,
        content_type: str | None = "multipart/form-data; boundary=robyn-upload-test",
        path: str = "/upload",
    ) -> MockRequest:
        headers = MockHeaders()
        if content_type is not None:
            headers.set("Content-Type", content_type)
        form_data = form_data or {}
        files = files or {}
        payloads = [value.encode() for value in form_data.values() if isinstance(value, str)]
        payloads += [value for value in files.values() if isinstance(value, bytes)]
        body = b"".join(payloads)
        return MockRequest(form_data=form_data, files=files, body=body, headers=headers, url=MockUrl(path=path))

    return _make


# -----------------------------------------------------------------------------
# Application fixture
# -----------------------------------------------------------------------------


@pytest.fixture(scope="session")
def client() -> TestClient:
    """In-process client over the real app with its lifespan started."""
    from upload_api.main import app, lifespan

    asyncio.run(lifespan.startup())
    with TestClient(app) as test_client:
        yield test_client
    asyncio.run(lifespan.shutdown())
