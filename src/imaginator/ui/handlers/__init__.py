"""UI event handlers organized by feature area.

This package provides handlers for all Gradio UI events, organized into logical modules:
- generation: Image generation and gallery cards
- editor: Image editor panel
- faq: FAQ accordion
"""

from .editor import (
    adjust_active_channel,
    flip_horizontal,
    flip_vertical,
    refresh_editor,
    reset_editor,
    rotate_left,
    rotate_right,
    save_edited_image,
    select_filter_channel,
    toggle_editor,
)
from .faq import toggle_faq_entry
from .generation import generate_images, show_placeholders

__all__ = [
    # Generation handlers
    "generate_images",
    "show_placeholders",
    # Editor handlers
    "adjust_active_channel",
    "flip_horizontal",
    "flip_vertical",
    "refresh_editor",
    "reset_editor",
    "rotate_left",
    "rotate_right",
    "save_edited_image",
    "select_filter_channel",
    "toggle_editor",
    # FAQ handlers
    "toggle_faq_entry",
]
