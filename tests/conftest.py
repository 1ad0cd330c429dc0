"""Pytest configuration and shared fixtures."""

from typing import Callable, List

import httpx
import pytest

from mailgun_client.api.client import RestClient


API_KEY = "key-test-12345"


@pytest.fixture
def api_key() -> str:
    return API_KEY


@pytest.fixture
def mock_settings():
    """Mock settings for testing."""
    from mailgun_client.config import Settings

    return Settings(
        api_key=API_KEY,
        api_host="api.test.mailgun.net",
        api_version="v3",
        ssl=True,
        api_timeout=5.0,
        log_level="DEBUG",
    )


@pytest.fixture
def client():
    """RestClient backed by a plain httpx.Client (mocked with respx in tests)."""
    with httpx.Client() as http_client:
        yield RestClient(API_KEY, http_client=http_client)


@pytest.fixture
def captured_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def make_client(captured_requests) -> Callable[..., RestClient]:
    """Build a RestClient over an httpx.MockTransport.

    Every request is read and stored in ``captured_requests`` before the
    response is returned.
    """
    clients: List[httpx.Client] = []

    def _make(
        response: httpx.Response = None,
        ssl: bool = True,
        api_key: str = API_KEY,
    ) -> RestClient:
        def handler(request: httpx.Request) -> httpx.Response:
            captured_requests.append(request)
            if response is None:
                return httpx.Response(200, json={"message": "Queued. Thank you."})
            return response

        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(http_client)
        return RestClient(api_key, ssl=ssl, http_client=http_client)

    yield _make

    for http_client in clients:
        http_client.close()


@pytest.fixture
def sample_files(tmp_path):
    """Two small files on disk for upload tests."""
    image = tmp_path / "x.png"
    image.write_bytes(b"\x89PNG fake image")
    text = tmp_path / "notes.txt"
    text.write_bytes(b"attachment body")
    return {"image": image, "text": text}
