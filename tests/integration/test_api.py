"""Integration tests for imaginator.api.main — FastAPI REST API endpoints.

All tests use the FastAPI TestClient with a fake generation client so that no
request reaches a real image API.  Tests cover every endpoint:

- ``GET /api/health`` — Version and busy flag.
- ``POST /api/generate`` — Batch image generation.
- ``POST /api/edit`` — Filter/rotate/flip flattening.
"""

from __future__ import annotations

import base64
import io
from unittest.mock import patch

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from imaginator import __version__
from imaginator.api.main import app
from imaginator.core.gallery import GalleryController
from imaginator.core.generation_client import API_FAILURE_MESSAGE, ImageGenerationClient


@pytest.fixture
def gallery(fake_client) -> GalleryController:
    return GalleryController(fake_client)


@pytest.fixture
def test_client(gallery, test_config):
    """TestClient bound to a gallery backed by the fake client."""
    app.state.gallery = gallery
    with patch("imaginator.api.main.config", test_config), TestClient(app) as client:
        yield client
    app.state.gallery = None


def _decode(b64: str) -> Image.Image:
    with Image.open(io.BytesIO(base64.b64decode(b64))) as img:
        return img.convert("RGB")


# ---------------------------------------------------------------------------
# Health endpoint tests.
# ---------------------------------------------------------------------------


class TestHealth:
    """Test GET /api/health."""

    def test_health(self, test_client):
        resp = test_client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "version": __version__, "busy": False}

    def test_health_reports_busy(self, test_client, gallery):
        gallery._busy = True
        assert test_client.get("/api/health").json()["busy"] is True


# ---------------------------------------------------------------------------
# Generation endpoint tests.
# ---------------------------------------------------------------------------


class TestGenerate:
    """Test POST /api/generate — image generation."""

    def test_generate_success(self, test_client, fake_client):
        resp = test_client.post("/api/generate", json={"prompt": "a red cube", "count": 2})

        assert resp.status_code == 200
        images = resp.json()["images"]
        assert len(images) == 2
        assert fake_client.calls == [("a red cube", 2)]
        for image in images:
            assert (image["width"], image["height"]) == (64, 64)
            assert image["filename"].endswith("-imaginator.jpg")
            assert _decode(image["b64_json"]).size == (64, 64)

    def test_count_defaults_to_one(self, test_client):
        resp = test_client.post("/api/generate", json={"prompt": "a red cube"})
        assert len(resp.json()["images"]) == 1

    def test_count_above_max(self, test_client, fake_client):
        resp = test_client.post("/api/generate", json={"prompt": "a red cube", "count": 5})
        assert resp.status_code == 422
        assert fake_client.calls == []

    def test_count_zero_rejected(self, test_client):
        resp = test_client.post("/api/generate", json={"prompt": "a red cube", "count": 0})
        assert resp.status_code == 422

    def test_blank_prompt_rejected(self, test_client):
        resp = test_client.post("/api/generate", json={"prompt": "   ", "count": 1})
        assert resp.status_code == 422

    def test_busy_returns_conflict(self, test_client, gallery, fake_client):
        gallery._busy = True
        resp = test_client.post("/api/generate", json={"prompt": "a red cube", "count": 1})
        assert resp.status_code == 409
        assert fake_client.calls == []

    def test_api_failure_returns_bad_gateway(self, test_client, gallery, failing_client):
        gallery._client = failing_client
        resp = test_client.post("/api/generate", json={"prompt": "a red cube", "count": 1})
        assert resp.status_code == 502
        assert resp.json()["detail"] == API_FAILURE_MESSAGE

    def test_malformed_body_returns_bad_gateway(
        self, test_client, gallery, test_config, mock_transport_factory
    ):
        transport = mock_transport_factory(lambda request: httpx.Response(200, json={"data": None}))
        gallery._client = ImageGenerationClient.from_config(test_config, transport=transport)

        resp = test_client.post("/api/generate", json={"prompt": "a red cube", "count": 1})

        assert resp.status_code == 502
        assert "Unexpected response" in resp.json()["detail"]
        assert not gallery.busy


# ---------------------------------------------------------------------------
# Edit endpoint tests.
# ---------------------------------------------------------------------------


class TestEdit:
    """Test POST /api/edit — flattening an edit onto an image."""

    def test_unedited(self, test_client, red_blue_b64):
        resp = test_client.post("/api/edit", json={"b64_json": red_blue_b64})

        assert resp.status_code == 200
        data = resp.json()
        assert data["filename"].endswith("-imaginator.jpg")
        assert data["filter"] == "brightness(100%) saturate(100%) invert(0%) grayscale(0%)"
        assert data["transform"] == "rotate(0deg) scale(1, 1)"
        assert _decode(data["b64_json"]).size == (64, 64)

    def test_rotation_and_filters(self, test_client, red_blue_b64):
        resp = test_client.post(
            "/api/edit",
            json={"b64_json": red_blue_b64, "brightness": 50, "rotation_degrees": 90},
        )

        data = resp.json()
        assert data["filter"] == "brightness(50%) saturate(100%) invert(0%) grayscale(0%)"
        assert data["transform"] == "rotate(90deg) scale(1, 1)"
        r, g, b = _decode(data["b64_json"]).getpixel((32, 8))
        assert r > 100 and b < 40

    def test_negative_rotation_is_wrapped(self, test_client, red_blue_b64):
        resp = test_client.post(
            "/api/edit", json={"b64_json": red_blue_b64, "rotation_degrees": -90}
        )
        assert resp.json()["transform"] == "rotate(270deg) scale(1, 1)"

    def test_flips(self, test_client, red_blue_b64):
        resp = test_client.post(
            "/api/edit",
            json={"b64_json": red_blue_b64, "flip_horizontal": -1, "flip_vertical": -1},
        )
        data = resp.json()
        assert data["transform"] == "rotate(0deg) scale(-1, -1)"
        r, g, b = _decode(data["b64_json"]).getpixel((56, 32))
        assert r > 200 and b < 60

    def test_invalid_image(self, test_client):
        resp = test_client.post("/api/edit", json={"b64_json": "bm90IGFuIGltYWdl"})
        assert resp.status_code == 400

    @pytest.mark.parametrize(
        "overrides",
        [
            {"rotation_degrees": 45},
            {"flip_horizontal": 0},
            {"brightness": 201},
            {"inversion": 101},
        ],
    )
    def test_invalid_state_rejected(self, test_client, red_blue_b64, overrides):
        resp = test_client.post("/api/edit", json={"b64_json": red_blue_b64, **overrides})
        assert resp.status_code == 422
