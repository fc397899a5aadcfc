"""Reusable UI components for the Imaginator Gradio interface."""

import gradio as gr
from PIL import Image

from imaginator.core.faq import FaqEntry
from imaginator.core.filters import FILTER_CHANNELS, FilterChannel

from .models import PLACEHOLDER_COLOR


def placeholder_image(size: tuple[int, int] = (256, 256)) -> Image.Image:
    """Flat image shown on a card while its generation is pending."""
    return Image.new("RGB", size, PLACEHOLDER_COLOR)


def faq_label(entry: FaqEntry, is_open: bool) -> str:
    """Question label with a +/- expansion marker."""
    return f"{'−' if is_open else '+'}  {entry.question}"


class CardUI:
    """One gallery card: image, download button, and edit toggle.

    Cards are created up front for the maximum image count; their
    visibility follows the number of images requested.
    """

    def __init__(self, index: int):
        """Initialize a card component.

        Args:
            index: Position of the card in the gallery
        """
        self.index = index

        with gr.Column(visible=False, min_width=160) as self.group:
            self.image = gr.Image(
                label=f"Image {index + 1}",
                type="pil",
                interactive=False,
                height=256,
            )
            with gr.Row():
                self.edit = gr.Button("Edit", size="sm", interactive=False)
                self.download = gr.DownloadButton("Download", size="sm", interactive=False)

    def get_output_components(self) -> list[gr.components.Component]:
        """Return components updated by generation handlers (group, image, download, edit)."""
        return [self.group, self.image, self.download, self.edit]


class EditorPanelUI:
    """The image editor panel: filters, slider, rotate/flip, reset and save."""

    def __init__(self):
        with gr.Group(visible=False) as self.group:
            gr.Markdown("## Easy Image Editor")
            with gr.Row():
                with gr.Column(scale=1):
                    gr.Markdown("**Filters**")
                    self.channel = gr.Radio(
                        choices=[channel.label for channel in FILTER_CHANNELS],
                        value=FilterChannel.BRIGHTNESS.label,
                        show_label=False,
                    )
                    self.filter_info = gr.Markdown(filter_info_text(FilterChannel.BRIGHTNESS, 100))
                    self.slider = gr.Slider(
                        minimum=0,
                        maximum=FilterChannel.BRIGHTNESS.maximum,
                        step=1,
                        value=FilterChannel.BRIGHTNESS.default,
                        show_label=False,
                    )

                    gr.Markdown("**Rotate & Flip**")
                    with gr.Row():
                        self.rotate_left = gr.Button("⟲ Left", size="sm")
                        self.rotate_right = gr.Button("⟳ Right", size="sm")
                        self.flip_horizontal = gr.Button("⇋ Horizontal", size="sm")
                        self.flip_vertical = gr.Button("⇅ Vertical", size="sm")

                with gr.Column(scale=2):
                    self.preview = gr.Image(
                        label="Preview", type="pil", interactive=False, height=420
                    )

            with gr.Row():
                self.reset = gr.Button("Reset Filters", variant="secondary")
                self.save = gr.Button("Save Image", variant="primary")
                self.saved_file = gr.DownloadButton("Download Edited Image", visible=False)

    def get_view_components(self) -> list[gr.components.Component]:
        """Components refreshed whenever the editor state changes."""
        return [self.group, self.preview, self.channel, self.slider, self.filter_info]


class FaqUI:
    """FAQ list where each question button reveals its answer."""

    def __init__(self, entries: tuple[FaqEntry, ...]):
        self.questions: list[gr.Button] = []
        self.answers: list[gr.Markdown] = []

        gr.Markdown("## Frequently Asked Questions")
        for entry in entries:
            self.questions.append(gr.Button(faq_label(entry, False), variant="secondary"))
            self.answers.append(gr.Markdown(entry.answer, visible=False))

    def get_output_components(self) -> list[gr.components.Component]:
        """Question buttons followed by answers, in entry order."""
        return self.questions + self.answers


def filter_info_text(channel: FilterChannel, value: int) -> str:
    return f"**{channel.label}:** {value}%"
