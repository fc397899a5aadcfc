"""Shared pytest fixtures for Imaginator tests."""

import base64
import io
import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Generator

import httpx
import pytest
from PIL import Image

from imaginator.core.config import ImaginatorConfig
from imaginator.core.editor import EditorPanel
from imaginator.core.errors import GenerationError
from imaginator.core.faq import FaqAccordion
from imaginator.core.gallery import GalleryController
from imaginator.core.images import GeneratedImage
from imaginator.ui.models import UIState

RED = (255, 0, 0)
BLUE = (0, 0, 255)


def encode_png(image: Image.Image) -> bytes:
    """Encode an image losslessly so pixel assertions stay exact."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


class FakeGenerationClient:
    """Stand-in for ImageGenerationClient that never touches the network.

    Args:
        images: Images returned by every call (cycled to ``count`` when None)
        error: If set, every call raises GenerationError with this message
    """

    def __init__(self, images: list[GeneratedImage] | None = None, error: str | None = None):
        self.images = images
        self.error = error
        self.calls: list[tuple[str, int]] = []

    async def generate(self, prompt: str, count: int) -> list[GeneratedImage]:
        self.calls.append((prompt, count))
        if self.error:
            raise GenerationError(self.error)
        if self.images is not None:
            return list(self.images)
        return [GeneratedImage.from_bytes(encode_png(split_image())) for _ in range(count)]


def split_image(width: int = 64, height: int = 64) -> Image.Image:
    """Image whose left half is red and right half is blue."""
    image = Image.new("RGB", (width, height), BLUE)
    image.paste(RED, (0, 0, width // 2, height))
    return image


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> ImaginatorConfig:
    """Create a test configuration with a temporary outputs directory.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        ImaginatorConfig instance for testing
    """
    return ImaginatorConfig(
        api_key="sk-test",
        api_base_url="https://images.example.test/v1",
        image_size="512x512",
        max_images=4,
        outputs_dir=temp_dir / "outputs",
        preview_max_size=64,
        _env_file=None,
    )


@pytest.fixture
def red_blue_image() -> Image.Image:
    """64x64 image, red on the left and blue on the right."""
    return split_image()


@pytest.fixture
def generated_image(red_blue_image: Image.Image) -> GeneratedImage:
    """GeneratedImage wrapping the red/blue test image as PNG bytes."""
    return GeneratedImage.from_bytes(encode_png(red_blue_image))


@pytest.fixture
def red_blue_b64(red_blue_image: Image.Image) -> str:
    """The red/blue test image as an API ``b64_json`` string."""
    return base64.b64encode(encode_png(red_blue_image)).decode("ascii")


@pytest.fixture
def fake_client() -> FakeGenerationClient:
    """Client that returns one red/blue image per requested count."""
    return FakeGenerationClient()


@pytest.fixture
def make_fake_client() -> type[FakeGenerationClient]:
    """The fake client class, for tests that need custom images or errors."""
    return FakeGenerationClient


@pytest.fixture
def failing_client() -> FakeGenerationClient:
    """Client whose every request fails like a rejected API key."""
    return FakeGenerationClient(
        error="Failed to generate AI images. Make sure your API key is valid."
    )


@pytest.fixture
def mock_transport_factory() -> Callable[..., httpx.MockTransport]:
    """Build an httpx.MockTransport that records requests.

    The returned factory takes a handler ``(request) -> httpx.Response`` and
    stores every request it sees on ``transport.requests``.
    """

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.MockTransport:
        requests: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        transport = httpx.MockTransport(recording_handler)
        transport.requests = requests
        return transport

    return factory


@pytest.fixture
def ui_state() -> UIState:
    """Create empty UI state for testing.

    Returns:
        UIState instance
    """
    return UIState()


@pytest.fixture
def initialized_state(fake_client: FakeGenerationClient) -> UIState:
    """UIState with every component built around the fake client."""
    state = UIState()
    state.gallery = GalleryController(fake_client)
    state.editor_panel = EditorPanel(preview_max_size=64, jpeg_quality=92)
    state.faq = FaqAccordion()
    return state
