"""Generated image payloads and download helpers.

A :class:`GeneratedImage` wraps the encoded bytes returned by the generation
API together with the natural dimensions read from the payload.  The object is
immutable and is shared by reference between the gallery and an editor
session.

Download files are named ``<unix-epoch-ms>-imaginator.jpg`` for both raw
generated images and edited exports.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from imaginator.core.errors import GenerationError

logger = logging.getLogger(__name__)

DOWNLOAD_SUFFIX = "-imaginator.jpg"


def timestamped_filename(now_ms: int | None = None) -> str:
    """Build a download filename from the current Unix time in milliseconds.

    Args:
        now_ms: Timestamp override (milliseconds since the epoch)

    Returns:
        Filename such as ``1718000000000-imaginator.jpg``
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return f"{now_ms}{DOWNLOAD_SUFFIX}"


def encode_jpeg(image: Image.Image, quality: int = 92) -> bytes:
    """Encode a Pillow image as JPEG bytes, dropping any alpha channel."""
    if image.mode != "RGB":
        image = image.convert("RGB")
    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


@dataclass(frozen=True)
class GeneratedImage:
    """One image returned by the generation API.

    Attributes:
        encoded: Raw encoded image bytes (opaque to the gallery)
        width: Natural width in pixels
        height: Natural height in pixels
        id: Unique identifier of this image
    """

    encoded: bytes = field(repr=False)
    width: int
    height: int
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @classmethod
    def from_bytes(cls, encoded: bytes) -> GeneratedImage:
        """Wrap encoded image bytes, reading the natural size from the header.

        Raises:
            GenerationError: If the bytes are not a decodable image
        """
        try:
            with Image.open(io.BytesIO(encoded)) as img:
                width, height = img.size
        except (UnidentifiedImageError, OSError) as e:
            raise GenerationError(f"Received an unreadable image: {e}") from e
        return cls(encoded=encoded, width=width, height=height)

    @classmethod
    def from_b64_json(cls, b64_json: str) -> GeneratedImage:
        """Build an image from the API's base64 ``b64_json`` field.

        Raises:
            GenerationError: If the payload is not valid base64 image data
        """
        try:
            encoded = base64.b64decode(b64_json, validate=True)
        except (binascii.Error, ValueError) as e:
            raise GenerationError(f"Received malformed image data: {e}") from e
        return cls.from_bytes(encoded)

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def decode(self) -> Image.Image:
        """Decode the payload into a fully loaded RGB Pillow image."""
        with Image.open(io.BytesIO(self.encoded)) as img:
            return img.convert("RGB")

    def to_b64_json(self) -> str:
        return base64.b64encode(self.encoded).decode("ascii")


@dataclass(frozen=True)
class ExportedImage:
    """A flattened, encoded image ready for download.

    Attributes:
        filename: Download filename (``<ms>-imaginator.jpg``)
        encoded: JPEG bytes
        source_id: Id of the GeneratedImage it was derived from
        filter: Filter string applied while compositing
        transform: Transform string applied while compositing
    """

    filename: str
    encoded: bytes = field(repr=False)
    source_id: str
    filter: str = "none"
    transform: str = "none"

    def write_to(self, directory: Path) -> Path:
        """Write the file below ``directory/<source_id>/`` and return its path.

        Files are grouped per source image because several images of one
        batch can be named within the same millisecond.
        """
        target_dir = directory / self.source_id
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / self.filename
        path.write_bytes(self.encoded)
        logger.info(f"Wrote download file: {path}")
        return path
