"""Core functionality for image generation and editing.

This module provides the core components for Imaginator:

- **ImaginatorConfig / config**: Configuration management using Pydantic Settings
- **ImageGenerationClient**: Async client for the remote image-generation API
- **GalleryController**: Placeholder cards, the in-flight request guard, and
  index-aligned image binding
- **EditorSession / EditorPanel**: Filter and transform state over one image,
  and the Closed / Open(image_id) panel that hosts it
- **FaqAccordion**: Mutually exclusive FAQ expansion

Architecture Overview
---------------------
1. **Configuration Layer** (config.py):
   - Environment-based configuration using Pydantic Settings
   - All settings prefixed with IMAGINATOR_ in .env files

2. **Generation Layer** (generation_client.py, images.py, gallery.py):
   - One POST per request, base64 payloads decoded into GeneratedImage
   - Gallery cards bound in response order

3. **Editing Layer** (filters.py, compositing.py, editor.py):
   - FilterState / TransformState data model
   - Canvas-style Surface that composites filter -> translate -> rotate ->
     scale -> draw with Pillow

Usage Example
-------------
    from imaginator.core import GalleryController, ImageGenerationClient, config

    gallery = GalleryController(ImageGenerationClient.from_config(config))
    outcome = await gallery.request_images("a red cube", 2)

    panel = EditorPanel()
    panel.toggle(outcome.cards[0].image)
    panel.session.adjust_active_channel(50)
    exported = panel.session.save()
"""

from imaginator.core.config import ImaginatorConfig, config
from imaginator.core.editor import EditorPanel, EditorSession
from imaginator.core.errors import GenerationError, ImageNotReadyError, ImaginatorError
from imaginator.core.faq import FaqAccordion
from imaginator.core.filters import FilterChannel, FilterState, FlipAxis, RotateDirection, TransformState
from imaginator.core.gallery import GalleryController, ImageCard
from imaginator.core.generation_client import ImageGenerationClient
from imaginator.core.images import ExportedImage, GeneratedImage

__all__ = [
    "EditorPanel",
    "EditorSession",
    "ExportedImage",
    "FaqAccordion",
    "FilterChannel",
    "FilterState",
    "FlipAxis",
    "GalleryController",
    "GeneratedImage",
    "GenerationError",
    "ImageCard",
    "ImageGenerationClient",
    "ImageNotReadyError",
    "ImaginatorConfig",
    "ImaginatorError",
    "RotateDirection",
    "TransformState",
    "config",
]
