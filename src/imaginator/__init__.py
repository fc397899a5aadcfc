"""Imaginator - AI image generation with a lightweight per-image editor."""

__version__ = "0.1.0"

from imaginator.core.config import ImaginatorConfig, config
from imaginator.core.editor import EditorPanel, EditorSession
from imaginator.core.gallery import GalleryController

__all__ = [
    "EditorPanel",
    "EditorSession",
    "GalleryController",
    "ImaginatorConfig",
    "config",
]
