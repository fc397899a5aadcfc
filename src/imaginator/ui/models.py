"""Data models for Imaginator UI state and parameters."""

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class GenerationParams:
    """Parameters submitted by the generation form."""

    prompt: str
    count: int

    def validate(self, max_images: int) -> None:
        """Validate generation parameters.

        Raises:
            ValueError: If any parameter is invalid, with descriptive message
        """
        if not self.prompt or not self.prompt.strip():
            raise ValueError("Please describe the image you want to generate")

        if self.count < 1 or self.count > max_images:
            raise ValueError(f"Image count must be 1-{max_images}, got {self.count}")


@dataclass
class UIState:
    """Session state for the Gradio UI.

    Each browser session gets its own UIState, so the busy flag, the cards
    and the editor session are isolated per user.

    Attributes
    ----------
    gallery : Any | None
        GalleryController instance (cards and busy flag)
    editor_panel : Any | None
        EditorPanel instance (Closed / Open(image_id))
    faq : Any | None
        FaqAccordion instance
    download_paths : dict[str, str]
        Written download files keyed by image id
    """

    gallery: Any | None = None  # GalleryController instance
    editor_panel: Any | None = None  # EditorPanel instance
    faq: Any | None = None  # FaqAccordion instance
    download_paths: dict[str, str] = field(default_factory=dict)

    def is_initialized(self) -> bool:
        """Check if the state has been initialized with core components."""
        return (
            self.gallery is not None
            and self.editor_panel is not None
            and self.faq is not None
        )

    def __repr__(self) -> str:
        """String representation for debugging."""
        cards = len(self.gallery.cards) if self.gallery is not None else 0
        editing = self.editor_panel.open_image_id if self.editor_panel is not None else None
        return f"UIState(initialized={self.is_initialized()}, cards={cards}, editing={editing})"


# UI Constants
DEFAULT_PROMPT = ""
PROMPT_PLACEHOLDER = "Describe what you want to see, e.g. a red cube on a marble table"
READY_MESSAGE = "*Ready to generate images*"
PLACEHOLDER_COLOR = (229, 231, 235)
