"""FAQ accordion handlers."""

import logging

import gradio as gr

from ..components import faq_label
from ..models import UIState
from ..state import initialize_ui_state

logger = logging.getLogger(__name__)


def toggle_faq_entry(index: int, state: UIState) -> tuple:
    """Open or close FAQ entry ``index``; every other entry is closed.

    Args:
        index: Entry whose question was clicked
        state: UI state

    Returns:
        Tuple of (*question_updates, *answer_updates, updated_state)
    """
    state = initialize_ui_state(state)
    faq = state.faq

    try:
        states = faq.toggle(index)
    except IndexError as e:
        logger.warning(f"FAQ toggle ignored: {e}")
        states = faq.states()

    questions = [
        gr.update(value=faq_label(entry, is_open)) for entry, is_open in zip(faq.entries, states)
    ]
    answers = [gr.update(visible=is_open) for is_open in states]
    return (*questions, *answers, state)
