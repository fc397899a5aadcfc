"""Image generation handlers."""

import logging

import gradio as gr

from imaginator.core.config import config
from imaginator.core.gallery import SUBMIT_LABEL_BUSY, ImageCard

from ..components import placeholder_image
from ..models import GenerationParams, UIState
from ..state import initialize_ui_state
from ..validation import (
    ValidationError,
    parse_image_count,
    validate_generation_params,
    validate_prompt_content,
)

logger = logging.getLogger(__name__)


def card_updates(cards: list[ImageCard], state: UIState, max_cards: int) -> list:
    """Build (group, image, download, edit) updates for every card slot.

    Slots beyond ``len(cards)`` are hidden.  Loading cards show the
    placeholder image with disabled affordances; ready cards show the decoded
    image, a download target, and an enabled edit toggle.
    """
    updates = []
    for index in range(max_cards):
        if index >= len(cards):
            updates += [gr.update(visible=False), gr.update(value=None), gr.update(), gr.update()]
            continue

        card = cards[index]
        if card.is_loading:
            updates += [
                gr.update(visible=True),
                gr.update(value=placeholder_image()),
                gr.update(value=None, interactive=False),
                gr.update(interactive=False),
            ]
        else:
            download_path = state.download_paths.get(card.image.id)
            updates += [
                gr.update(visible=True),
                gr.update(value=card.preview),
                gr.update(value=download_path, interactive=download_path is not None),
                gr.update(interactive=True),
            ]
    return updates


def submit_update(state: UIState) -> dict:
    """Submit button mirroring the gallery's busy flag."""
    return gr.update(value=state.gallery.submit_label, interactive=state.gallery.submit_enabled)


def show_placeholders(count, state: UIState) -> tuple:
    """Disable the submit control and show loading cards before the request.

    Args:
        count: Requested image count
        state: UI state

    Returns:
        Tuple of (submit_update, *card_updates, updated_state)
    """
    state = initialize_ui_state(state)
    max_cards = config.max_images

    if state.gallery.busy:
        return (gr.update(), *[gr.update()] * (4 * max_cards), state)

    try:
        count = parse_image_count(count)
    except ValidationError:
        return (gr.update(), *[gr.update()] * (4 * max_cards), state)

    count = max(1, min(count, max_cards))
    loading = [ImageCard(index=i) for i in range(count)]
    return (
        gr.update(value=SUBMIT_LABEL_BUSY, interactive=False),
        *card_updates(loading, state, max_cards),
        state,
    )


async def generate_images(prompt: str, count, state: UIState) -> tuple:
    """Generate images from the form inputs and bind them to the cards.

    A submission while a request is outstanding is ignored.  Failures are
    shown once as a warning and leave the cards in their placeholder state.

    Args:
        prompt: Text prompt
        count: Number of images to generate
        state: UI state

    Returns:
        Tuple of (submit_update, info_text, *card_updates, updated_state)
    """
    state = initialize_ui_state(state)
    gallery = state.gallery
    max_cards = config.max_images
    no_change = [gr.update()] * (4 * max_cards)

    if gallery.busy:
        logger.info("Ignoring submission while a generation is in progress")
        return (gr.update(), gr.update(), *no_change, state)

    try:
        params = GenerationParams(prompt=prompt, count=parse_image_count(count))
        validate_generation_params(params, config.max_images)
        validate_prompt_content(params.prompt)
    except ValidationError as e:
        logger.warning(f"Validation error: {e}")
        gr.Warning(str(e))
        return (
            submit_update(state),
            f"❌ **Validation Error**\n\n{e}",
            *card_updates(gallery.cards, state, max_cards),
            state,
        )

    try:
        outcome = await gallery.request_images(params.prompt.strip(), params.count)

        if outcome is None:
            return (submit_update(state), gr.update(), *no_change, state)

        if outcome.error:
            # The cards were replaced by placeholders, so the editor has no image.
            state.editor_panel.close()
            gr.Warning(outcome.error)
            return (
                submit_update(state),
                f"❌ **Generation Failed**\n\n{outcome.error}",
                *card_updates(outcome.cards, state, max_cards),
                state,
            )

        state.download_paths = {}
        for card in outcome.cards:
            if card.is_ready:
                path = card.download().write_to(config.outputs_dir)
                state.download_paths[card.image.id] = str(path)

        # Bound images replace the cards, so an open editor now refers to a
        # discarded image.
        state.editor_panel.close()

        ready = sum(1 for card in outcome.cards if card.is_ready)
        info = f"✅ **Generation Complete!**\n\n**Prompt:** {params.prompt.strip()}\n**Images:** {ready}"
        return (
            submit_update(state),
            info,
            *card_updates(outcome.cards, state, max_cards),
            state,
        )

    except Exception as e:
        logger.error(f"Error generating images: {e}", exc_info=True)
        gr.Warning(f"An unexpected error occurred: {e}")
        return (
            submit_update(state),
            f"❌ **Error**\n\nAn unexpected error occurred. Check logs for details.\n\n`{e}`",
            *no_change,
            state,
        )
