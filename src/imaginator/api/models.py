"""Pydantic request and response models for the Imaginator API.

Models
------
GenerateRequest
    Payload for ``POST /api/generate``.
EditRequest
    Payload for ``POST /api/edit`` — an encoded image plus the full editor
    state to flatten onto it.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class GenerateRequest(BaseModel):
    """Request body for the ``POST /api/generate`` endpoint.

    Attributes:
        prompt: Free-text description of the desired image.
        count: Number of images to generate (upper bound is
            ``IMAGINATOR_MAX_IMAGES``, checked by the route).
    """

    prompt: str = Field(
        ...,
        min_length=1,
        description="Free-text prompt.",
    )
    count: int = Field(
        default=1,
        ge=1,
        description="Number of images to generate.",
    )

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("prompt must not be blank")
        return value.strip()


class GeneratedImageResponse(BaseModel):
    """One generated image as returned by ``POST /api/generate``."""

    id: str
    width: int
    height: int
    filename: str
    b64_json: str


class EditRequest(BaseModel):
    """Request body for the ``POST /api/edit`` endpoint.

    Attributes:
        b64_json: Base64-encoded source image.
        brightness: Brightness percentage (0–200).
        saturation: Saturation percentage (0–200).
        inversion: Inversion percentage (0–100).
        grayscale: Grayscale percentage (0–100).
        rotation_degrees: Rotation, a multiple of 90 (any sign).
        flip_horizontal: ``1`` or ``-1``.
        flip_vertical: ``1`` or ``-1``.
    """

    b64_json: str = Field(..., min_length=1, description="Base64-encoded source image.")
    brightness: int = Field(default=100, ge=0, le=200)
    saturation: int = Field(default=100, ge=0, le=200)
    inversion: int = Field(default=0, ge=0, le=100)
    grayscale: int = Field(default=0, ge=0, le=100)
    rotation_degrees: int = Field(default=0, description="Multiple of 90.")
    flip_horizontal: int = Field(default=1)
    flip_vertical: int = Field(default=1)

    @field_validator("rotation_degrees")
    @classmethod
    def quarter_turns_only(cls, value: int) -> int:
        if value % 90 != 0:
            raise ValueError("rotation_degrees must be a multiple of 90")
        return value

    @field_validator("flip_horizontal", "flip_vertical")
    @classmethod
    def unit_sign(cls, value: int) -> int:
        if value not in (1, -1):
            raise ValueError("flip values must be 1 or -1")
        return value


class EditResponse(BaseModel):
    """Flattened image returned by ``POST /api/edit``."""

    filename: str
    filter: str
    transform: str
    b64_json: str
