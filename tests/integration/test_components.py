"""Integration tests for the Gradio UI components and app assembly."""

import gradio as gr

from imaginator.core.faq import DEFAULT_FAQ, FaqEntry
from imaginator.core.filters import FILTER_CHANNELS
from imaginator.ui.app import create_ui
from imaginator.ui.components import (
    CardUI,
    EditorPanelUI,
    FaqUI,
    faq_label,
    filter_info_text,
    placeholder_image,
)
from imaginator.ui.models import PLACEHOLDER_COLOR


def _same(actual, expected):
    return len(actual) == len(expected) and all(a is b for a, b in zip(actual, expected))


class TestHelpers:
    def test_placeholder_image(self):
        image = placeholder_image((32, 16))
        assert image.size == (32, 16)
        assert image.getpixel((0, 0)) == PLACEHOLDER_COLOR

    def test_faq_label_marker(self):
        entry = FaqEntry("Why?", "Because.")
        assert faq_label(entry, False) == "+  Why?"
        assert faq_label(entry, True) == "−  Why?"

    def test_filter_info_text(self):
        assert filter_info_text(FILTER_CHANNELS[1], 150) == "**Saturation:** 150%"


class TestComponents:
    def test_card_components(self):
        with gr.Blocks():
            card = CardUI(2)

        assert card.index == 2
        outputs = card.get_output_components()
        assert _same(outputs, [card.group, card.image, card.download, card.edit])

    def test_editor_panel_components(self):
        with gr.Blocks():
            editor = EditorPanelUI()

        assert _same(
            editor.get_view_components(),
            [editor.group, editor.preview, editor.channel, editor.slider, editor.filter_info],
        )

    def test_faq_components(self):
        with gr.Blocks():
            faq = FaqUI(DEFAULT_FAQ)

        assert len(faq.questions) == len(DEFAULT_FAQ)
        assert _same(faq.get_output_components(), faq.questions + faq.answers)


class TestCreateUI:
    def test_create_ui_returns_blocks_and_css(self):
        app, css = create_ui()
        assert isinstance(app, gr.Blocks)
        assert ".image-gallery" in css
