"""State management utilities for Imaginator UI.

This module handles the initialization and cleanup of per-session UI state:
the gallery controller, the editor panel, and the FAQ accordion.
"""

import logging

from imaginator.core.config import config
from imaginator.core.editor import EditorPanel
from imaginator.core.faq import FaqAccordion
from imaginator.core.gallery import GalleryController
from imaginator.core.generation_client import ImageGenerationClient

from .models import UIState

logger = logging.getLogger(__name__)


def initialize_ui_state(state: UIState | None = None) -> UIState:
    """Initialize or ensure UI state is ready.

    Components are created lazily; an already initialized state is returned
    unchanged.

    Args:
        state: Existing UIState or None

    Returns:
        Initialized UIState instance
    """
    if state is None:
        logger.info("Creating new UIState")
        state = UIState()

    if state.is_initialized():
        logger.debug("UIState already initialized")
        return state

    logger.info("Initializing UIState components...")

    try:
        if state.gallery is None:
            logger.info("Initializing GalleryController")
            client = ImageGenerationClient.from_config(config)
            if not client.api_key:
                logger.warning("IMAGINATOR_API_KEY is not set; generation requests will fail")
            state.gallery = GalleryController(client)

        if state.editor_panel is None:
            logger.info("Initializing EditorPanel")
            state.editor_panel = EditorPanel(
                preview_max_size=config.preview_max_size,
                jpeg_quality=config.jpeg_quality,
            )

        if state.faq is None:
            state.faq = FaqAccordion()

        logger.info(f"UIState initialization complete: {state}")
        return state

    except Exception as e:
        logger.error(f"Error initializing UIState: {e}", exc_info=True)
        raise


def cleanup_ui_state(state: UIState) -> None:
    """Clean up UI state resources when a session ends.

    Args:
        state: UI state to clean up
    """
    logger.info("Cleaning up UIState resources")

    if state.editor_panel is not None:
        state.editor_panel.close()

    state.gallery = None
    state.editor_panel = None
    state.faq = None
    state.download_paths.clear()

    logger.info("UIState cleanup complete")
