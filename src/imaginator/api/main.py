"""Imaginator — FastAPI Application.

This module defines the FastAPI ``app`` instance, the REST routes, and the
``main()`` CLI function that launches the uvicorn server.

Architecture
------------
- **Generation** goes through one
  :class:`~imaginator.core.gallery.GalleryController` stored on
  ``app.state``.  Its busy flag is shared by all clients: a request that
  arrives while another generation is outstanding is rejected with 409
  instead of being queued.
- **Editing** is stateless: every ``POST /api/edit`` opens a throwaway
  :class:`~imaginator.core.editor.EditorSession`, replays the requested
  state through the session's operations, and returns the flattened JPEG.

Endpoints
---------
========  ==================  ====================================
Method    Path                Purpose
========  ==================  ====================================
GET       ``/api/health``     Version and busy flag
POST      ``/api/generate``   Generate a batch of images
POST      ``/api/edit``       Apply filters/rotation/flip to an image
========  ==================  ====================================

Usage
-----
CLI (installed entry point)::

    imaginator-api

Direct invocation::

    python -m imaginator.api.main
"""

from __future__ import annotations

import base64
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from imaginator import __version__
from imaginator.api.models import (
    EditRequest,
    EditResponse,
    GeneratedImageResponse,
    GenerateRequest,
)
from imaginator.core.config import config
from imaginator.core.editor import EditorSession
from imaginator.core.errors import GenerationError
from imaginator.core.filters import FILTER_CHANNELS, FlipAxis, RotateDirection
from imaginator.core.gallery import GalleryController
from imaginator.core.generation_client import ImageGenerationClient
from imaginator.core.images import GeneratedImage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the shared gallery controller on startup.

    Tests may pre-populate ``app.state.gallery`` with a controller backed by
    a stub client; an existing controller is kept.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    if getattr(app.state, "gallery", None) is None:
        app.state.gallery = GalleryController(ImageGenerationClient.from_config(config))
        logger.info("GalleryController initialised.")

    yield

    logger.info("Imaginator API shutting down.")


app = FastAPI(
    title="Imaginator",
    description="AI image generation with a lightweight per-image editor.",
    version=__version__,
    lifespan=lifespan,
)

# Allow cross-origin requests so a separately served frontend can call the API.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/api/health")
async def health() -> dict:
    """Return the API version and whether a generation is in progress."""
    gallery: GalleryController = app.state.gallery
    return {"status": "ok", "version": __version__, "busy": gallery.busy}


@app.post("/api/generate")
async def generate_images(req: GenerateRequest) -> dict:
    """Generate ``count`` images for ``prompt``.

    Returns:
        Dictionary with a single ``images`` key, in response order.

    Raises:
        HTTPException: 422 if ``count`` exceeds the configured maximum,
            409 if a generation is already in progress, 502 if the
            generation API fails.
    """
    if req.count > config.max_images:
        raise HTTPException(
            status_code=422,
            detail=f"count must be between 1 and {config.max_images}",
        )

    gallery: GalleryController = app.state.gallery
    outcome = await gallery.request_images(req.prompt, req.count)

    if outcome is None:
        raise HTTPException(status_code=409, detail="A generation is already in progress")
    if outcome.error:
        raise HTTPException(status_code=502, detail=outcome.error)

    images = [
        GeneratedImageResponse(
            id=card.image.id,
            width=card.image.width,
            height=card.image.height,
            filename=card.download_name,
            b64_json=card.image.to_b64_json(),
        )
        for card in outcome.cards
        if card.is_ready
    ]
    return {"images": [image.model_dump() for image in images]}


@app.post("/api/edit")
async def edit_image(req: EditRequest) -> dict:
    """Flatten the requested filters, rotation, and flips onto an image.

    Rotation is replayed as quarter turns modulo 360, so the reported
    transform carries the wrapped angle.

    Raises:
        HTTPException: 400 if ``b64_json`` is not a decodable image.
    """
    try:
        image = GeneratedImage.from_b64_json(req.b64_json)
    except GenerationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    session = EditorSession(
        image, preview_max_size=config.preview_max_size, jpeg_quality=config.jpeg_quality
    )

    for channel in FILTER_CHANNELS:
        session.select_filter_channel(channel)
        session.adjust_active_channel(getattr(req, channel.key))
    session.select_filter_channel(FILTER_CHANNELS[0])

    for _ in range((req.rotation_degrees % 360) // 90):
        session.rotate(RotateDirection.RIGHT)
    if req.flip_horizontal == -1:
        session.flip(FlipAxis.HORIZONTAL)
    if req.flip_vertical == -1:
        session.flip(FlipAxis.VERTICAL)

    exported = session.save()
    return EditResponse(
        filename=exported.filename,
        filter=exported.filter,
        transform=exported.transform,
        b64_json=base64.b64encode(exported.encoded).decode("ascii"),
    ).model_dump()


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~imaginator.core.config.config`
    (``IMAGINATOR_SERVER_NAME`` and ``IMAGINATOR_SERVER_PORT``).

    This function is registered as the ``imaginator-api`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    uvicorn.run(
        "imaginator.api.main:app",
        host=config.server_name,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
