"""Image editor handlers.

Every handler returns the same editor view tuple
``(group, preview, channel, slider, filter_info)`` followed by the state, so
which selector looks active and what the slider shows are always derived
from the session rather than stored in the components.
"""

import logging

import gradio as gr

from imaginator.core.config import config
from imaginator.core.editor import EditorSession
from imaginator.core.errors import ImageNotReadyError
from imaginator.core.filters import FilterChannel, FlipAxis, RotateDirection

from ..components import filter_info_text
from ..models import UIState
from ..state import initialize_ui_state

logger = logging.getLogger(__name__)


def editor_view(session: EditorSession | None) -> list:
    """Build (group, preview, channel, slider, filter_info) updates for ``session``."""
    if session is None:
        return [gr.update(visible=False), gr.update(value=None), gr.update(), gr.update(), gr.update()]

    slider = session.slider
    channel = session.active_channel
    return [
        gr.update(visible=True),
        gr.update(value=session.preview),
        gr.update(value=channel.label),
        gr.update(
            minimum=slider.minimum,
            maximum=slider.maximum,
            value=slider.value,
            label=slider.label,
        ),
        gr.update(value=filter_info_text(channel, slider.value)),
    ]


def _no_change() -> list:
    return [gr.update()] * 5


def toggle_editor(index: int, state: UIState) -> tuple:
    """Open the editor for card ``index``, or close it if it is already open for it.

    Args:
        index: Card index whose edit control was activated
        state: UI state

    Returns:
        Tuple of (*editor_view, updated_state)
    """
    state = initialize_ui_state(state)

    try:
        card = state.gallery.card(index)
    except IndexError:
        logger.warning(f"Edit requested for missing card {index}")
        return (*_no_change(), state)

    try:
        transition = state.editor_panel.toggle(card.image)
    except ImageNotReadyError as e:
        gr.Info(str(e))
        return (*_no_change(), state)
    except Exception as e:
        logger.error(f"Error opening editor: {e}", exc_info=True)
        gr.Warning(f"Could not open the editor: {e}")
        return (*_no_change(), state)

    logger.info(f"Editor {'opened' if transition.opened else 'closed'} from card {index}")
    return (*editor_view(state.editor_panel.session), state)


def refresh_editor(state: UIState) -> tuple:
    """Re-render the editor panel from the current session (hidden when closed)."""
    state = initialize_ui_state(state)
    return (*editor_view(state.editor_panel.session), state)


def _with_session(state: UIState, action) -> tuple:
    """Run ``action(session)`` on the open session and return the editor view."""
    state = initialize_ui_state(state)
    session = state.editor_panel.session
    if session is None:
        return (*editor_view(None), state)

    try:
        action(session)
    except Exception as e:
        logger.error(f"Editor operation failed: {e}", exc_info=True)
        gr.Warning(f"Editor operation failed: {e}")

    return (*editor_view(session), state)


def select_filter_channel(channel_label: str, state: UIState) -> tuple:
    """Mark a filter channel active and rebound the slider to it."""
    return _with_session(
        state, lambda session: session.select_filter_channel(FilterChannel.from_key(channel_label))
    )


def adjust_active_channel(value, state: UIState) -> tuple:
    """Store the slider value in the active channel and recompose the preview."""
    return _with_session(state, lambda session: session.adjust_active_channel(int(value)))


def rotate_left(state: UIState) -> tuple:
    return _with_session(state, lambda session: session.rotate(RotateDirection.LEFT))


def rotate_right(state: UIState) -> tuple:
    return _with_session(state, lambda session: session.rotate(RotateDirection.RIGHT))


def flip_horizontal(state: UIState) -> tuple:
    return _with_session(state, lambda session: session.flip(FlipAxis.HORIZONTAL))


def flip_vertical(state: UIState) -> tuple:
    return _with_session(state, lambda session: session.flip(FlipAxis.VERTICAL))


def reset_editor(state: UIState) -> tuple:
    """Restore default filters and transform."""
    return _with_session(state, lambda session: session.reset())


def save_edited_image(state: UIState) -> tuple:
    """Flatten the current edit and expose it as a download.

    Returns:
        Tuple of (download_button_update, updated_state)
    """
    state = initialize_ui_state(state)
    session = state.editor_panel.session
    if session is None:
        return gr.update(visible=False), state

    try:
        exported = session.save()
        path = exported.write_to(config.outputs_dir)
    except Exception as e:
        logger.error(f"Error saving edited image: {e}", exc_info=True)
        gr.Warning(f"Could not save the image: {e}")
        return gr.update(visible=False), state

    gr.Info(f"Saved {exported.filename}")
    return gr.update(value=str(path), label=f"Download {exported.filename}", visible=True), state
