"""Integration tests for text2image.api.main: FastAPI REST API endpoints.

All tests use the FastAPI TestClient with a fake image backend so that no
provider is contacted.  Tests cover:

- ``POST /api/generate``: image generation and error shapes.
- ``GET /api/health``: liveness.
- Application lifespan: backend shutdown.
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from text2image import __version__
from text2image.api.main import create_app
from text2image.core.backend import BackendError

# ---------------------------------------------------------------------------
# Generation endpoint tests.
# ---------------------------------------------------------------------------


class TestGenerate:
    """Test POST /api/generate: image generation."""

    def test_generate_success(self, test_client, fake_backend):
        """A valid prompt should return 200 with the image URL."""
        resp = test_client.post("/api/generate", json={"prompt": "A goblin workshop."})
        assert resp.status_code == 200
        assert resp.json() == {"imageUrl": "https://cdn.example.com/img/1.png"}

    def test_generate_passes_prompt_untrimmed(self, test_client, fake_backend):
        """The backend receives the prompt exactly as submitted."""
        test_client.post("/api/generate", json={"prompt": "  A goblin workshop.  "})
        assert fake_backend.prompts == ["  A goblin workshop.  "]

    def test_generate_blank_prompt(self, test_client, fake_backend):
        """A whitespace-only prompt should return 400 without calling the backend."""
        resp = test_client.post("/api/generate", json={"prompt": "   "})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Prompt is required"}
        assert fake_backend.prompts == []

    def test_generate_missing_prompt(self, test_client):
        """A body without a prompt should return 422 in the error shape."""
        resp = test_client.post("/api/generate", json={})
        assert resp.status_code == 422
        data = resp.json()
        assert set(data) == {"error"}
        assert data["error"].startswith("prompt:")

    def test_generate_wrong_type(self, test_client):
        """A non-string prompt should return 422."""
        resp = test_client.post("/api/generate", json={"prompt": 42})
        assert resp.status_code == 422
        assert "error" in resp.json()

    def test_generate_backend_failure(self, test_client, fake_backend):
        """Backend failures become 502 with the backend's message."""
        fake_backend.error = BackendError("quota exceeded")
        resp = test_client.post("/api/generate", json={"prompt": "A goblin workshop."})
        assert resp.status_code == 502
        assert resp.json() == {"error": "quota exceeded"}

    def test_generate_backend_status_passthrough(self, test_client, fake_backend):
        """The backend's chosen status code is preserved."""
        fake_backend.error = BackendError("blocked", status_code=422)
        resp = test_client.post("/api/generate", json={"prompt": "A goblin workshop."})
        assert resp.status_code == 422
        assert resp.json() == {"error": "blocked"}

    def test_generate_data_uri(self, test_client, fake_backend):
        """Inline images are relayed unchanged."""
        fake_backend.image_url = "data:image/png;base64,aGVsbG8="
        resp = test_client.post("/api/generate", json={"prompt": "A goblin workshop."})
        assert resp.json()["imageUrl"] == "data:image/png;base64,aGVsbG8="

    def test_generate_wrong_method(self, test_client):
        """GET on the generate route returns 405 in the error shape."""
        resp = test_client.get("/api/generate")
        assert resp.status_code == 405
        assert "error" in resp.json()


# ---------------------------------------------------------------------------
# Health endpoint tests.
# ---------------------------------------------------------------------------


class TestHealth:
    """Test GET /api/health."""

    def test_health(self, test_client):
        resp = test_client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "version": __version__}


# ---------------------------------------------------------------------------
# Lifespan tests.
# ---------------------------------------------------------------------------


class TestLifespan:
    """The backend is closed when the application shuts down."""

    def test_backend_closed_on_shutdown(self, fake_backend):
        app = create_app(backend=fake_backend, mount_ui=False)
        with TestClient(app):
            assert app.state.backend is fake_backend
            assert fake_backend.closed is False
        assert fake_backend.closed is True
