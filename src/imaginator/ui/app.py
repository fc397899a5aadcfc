"""Gradio UI for Imaginator."""

import logging
from functools import partial

import gradio as gr

from imaginator.core.config import config
from imaginator.core.faq import DEFAULT_FAQ

from .components import CardUI, EditorPanelUI, FaqUI
from .handlers import (
    adjust_active_channel,
    flip_horizontal,
    flip_vertical,
    generate_images,
    refresh_editor,
    reset_editor,
    rotate_left,
    rotate_right,
    save_edited_image,
    select_filter_channel,
    show_placeholders,
    toggle_editor,
    toggle_faq_entry,
)
from .models import DEFAULT_PROMPT, PROMPT_PLACEHOLDER, READY_MESSAGE, UIState

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_ui() -> tuple[gr.Blocks, str]:
    """Create the Gradio UI.

    Returns:
        Tuple of (Gradio Blocks app, custom CSS string)
    """
    custom_css = """
    .image-gallery {
        gap: 12px;
    }
    """

    app = gr.Blocks(title="Imaginator - AI Image Generator")

    with app:
        # Session state - one instance per user
        ui_state = gr.State(UIState())

        gr.Markdown(
            """
            # Imaginator
            ### Turn a text prompt into images, then fine-tune them in the editor
            """
        )

        create_generation_section(ui_state)
        create_faq_section(ui_state)

    return app, custom_css


def create_generation_section(ui_state):
    """Create the generation form, image cards, and editor panel.

    Args:
        ui_state: UI state component
    """
    with gr.Row():
        prompt_input = gr.Textbox(
            label="Prompt",
            placeholder=PROMPT_PLACEHOLDER,
            value=DEFAULT_PROMPT,
            lines=2,
            scale=4,
        )
        count_input = gr.Dropdown(
            label="Images",
            choices=list(range(1, config.max_images + 1)),
            value=min(4, config.max_images),
            scale=1,
        )
        generate_btn = gr.Button("Generate", variant="primary", scale=1)

    info_output = gr.Markdown(value=READY_MESSAGE)

    with gr.Row(elem_classes="image-gallery"):
        cards = [CardUI(index) for index in range(config.max_images)]

    editor = EditorPanelUI()

    card_outputs = [component for card in cards for component in card.get_output_components()]
    editor_outputs = editor.get_view_components() + [ui_state]

    # Generate: placeholders first, then the request, then sync the editor
    generate_btn.click(
        fn=show_placeholders,
        inputs=[count_input, ui_state],
        outputs=[generate_btn] + card_outputs + [ui_state],
    ).then(
        fn=generate_images,
        inputs=[prompt_input, count_input, ui_state],
        outputs=[generate_btn, info_output] + card_outputs + [ui_state],
    ).then(
        fn=refresh_editor,
        inputs=[ui_state],
        outputs=editor_outputs,
    )

    # Per-card edit toggles
    for card in cards:
        card.edit.click(
            fn=partial(toggle_editor, card.index),
            inputs=[ui_state],
            outputs=editor_outputs,
        )

    # Editor controls
    editor.channel.input(
        fn=select_filter_channel,
        inputs=[editor.channel, ui_state],
        outputs=editor_outputs,
    )
    editor.slider.input(
        fn=adjust_active_channel,
        inputs=[editor.slider, ui_state],
        outputs=editor_outputs,
    )
    for button, handler in (
        (editor.rotate_left, rotate_left),
        (editor.rotate_right, rotate_right),
        (editor.flip_horizontal, flip_horizontal),
        (editor.flip_vertical, flip_vertical),
        (editor.reset, reset_editor),
    ):
        button.click(fn=handler, inputs=[ui_state], outputs=editor_outputs)

    editor.save.click(
        fn=save_edited_image,
        inputs=[ui_state],
        outputs=[editor.saved_file, ui_state],
    )


def create_faq_section(ui_state):
    """Create the FAQ accordion.

    Args:
        ui_state: UI state component
    """
    faq = FaqUI(DEFAULT_FAQ)
    outputs = faq.get_output_components() + [ui_state]

    for index, question in enumerate(faq.questions):
        question.click(
            fn=partial(toggle_faq_entry, index),
            inputs=[ui_state],
            outputs=outputs,
        )


def main():
    """Main entry point for the application."""
    logger.info("Starting Imaginator...")
    logger.info(f"Configuration: {config.model_dump(exclude={'api_key'})}")

    app, custom_css = create_ui()

    logger.info(f"Launching Gradio UI on {config.server_name}:{config.server_port}")

    app.launch(
        server_name=config.server_name,
        server_port=config.server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
        css=custom_css,
    )


if __name__ == "__main__":
    main()
