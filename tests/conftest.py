"""Shared pytest fixtures for Text to Image Generator tests."""

from typing import Callable, Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from text2image.api.main import create_app
from text2image.core.backend import BackendError, ImageBackend
from text2image.core.config import Text2ImageConfig
from text2image.ui.models import FormState

ENDPOINT_URL = "http://testserver"


class FakeBackend(ImageBackend):
    """In-memory backend that records prompts and returns a fixed URL."""

    name = "Fake Backend"

    def __init__(self, image_url: str = "https://cdn.example.com/img/1.png") -> None:
        self.image_url = image_url
        self.error: BackendError | None = None
        self.prompts: list[str] = []
        self.closed = False

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.image_url

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def test_config() -> Text2ImageConfig:
    """Create a test configuration that ignores any local .env file.

    Returns:
        Text2ImageConfig instance for testing
    """
    return Text2ImageConfig(
        _env_file=None,
        endpoint_url=ENDPOINT_URL,
        request_timeout=5.0,
        provider_url="https://provider.test/v1/images/generations",
        provider_api_key="test-key",
        provider_model="test-model",
        image_size="512x512",
    )


@pytest.fixture
def form_state() -> FormState:
    """Create an empty form state.

    Returns:
        FormState instance
    """
    return FormState()


@pytest.fixture
def fake_backend() -> FakeBackend:
    """Create a backend double for the API.

    Returns:
        FakeBackend returning a fixed image URL
    """
    return FakeBackend()


@pytest.fixture
def test_client(fake_backend: FakeBackend) -> Generator[TestClient, None, None]:
    """Create a TestClient for the API with the fake backend and no UI.

    Yields:
        TestClient with the application lifespan running
    """
    app = create_app(backend=fake_backend, mount_ui=False)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def endpoint_transport() -> Callable[..., httpx.MockTransport]:
    """Build a MockTransport that answers ``POST /api/generate``.

    The returned factory takes ``status_code`` and either ``json`` or raw
    ``content``.  Every request seen is appended to ``transport.requests``.

    Returns:
        Factory producing configured MockTransport instances
    """

    def factory(status_code: int = 200, json=None, content: bytes | None = None):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=json)

        transport = httpx.MockTransport(handler)
        transport.requests = requests
        return transport

    return factory
