"""Per-image editor session and the editor panel that hosts it.

An :class:`EditorSession` is bound to one
:class:`~imaginator.core.images.GeneratedImage` and owns one
:class:`~imaginator.core.filters.FilterState` and one
:class:`~imaginator.core.filters.TransformState`.  Every mutation recomposes
the live preview synchronously; :meth:`EditorSession.save` flattens the state
into a new JPEG at the image's natural size.

:class:`EditorPanel` is the explicit Closed / Open(image_id) state machine
that decides what activating a card's edit control does:

- panel closed, or open for another image -> discard any session and open a
  fresh one for this image
- panel open for this same image -> close it and discard the session

At most one session exists per panel.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from PIL import Image

from imaginator.core.compositing import composite, render_preview
from imaginator.core.errors import ImageNotReadyError
from imaginator.core.filters import (
    FILTER_CHANNELS,
    FilterChannel,
    FilterState,
    FlipAxis,
    RotateDirection,
    SliderSpec,
    TransformState,
)
from imaginator.core.images import ExportedImage, GeneratedImage, encode_jpeg, timestamped_filename

logger = logging.getLogger(__name__)


class EditorSession:
    """Mutable filter/transform state over one generated image.

    Args:
        image: Image to edit (shared by reference, never copied)
        preview_max_size: Longest edge of the rendered preview
        jpeg_quality: Quality used by :meth:`save`
    """

    def __init__(
        self, image: GeneratedImage, preview_max_size: int = 512, jpeg_quality: int = 92
    ) -> None:
        self._image = image
        self._source = image.decode()
        self._preview_max_size = preview_max_size
        self._jpeg_quality = jpeg_quality
        self._filters = FilterState()
        self._transform = TransformState()
        self._preview: Image.Image | None = None
        self._recompose()
        logger.info(f"Editor session opened for image {image.id}")

    @property
    def image(self) -> GeneratedImage:
        return self._image

    @property
    def filters(self) -> FilterState:
        return self._filters

    @property
    def transform(self) -> TransformState:
        return self._transform

    @property
    def active_channel(self) -> FilterChannel:
        return self._filters.active_channel

    @property
    def preview(self) -> Image.Image:
        return self._preview

    @property
    def slider(self) -> SliderSpec:
        return self._filters.slider()

    @property
    def filter_css(self) -> str:
        return self._filters.css()

    @property
    def transform_css(self) -> str:
        return self._transform.css()

    def _recompose(self) -> None:
        self._preview = render_preview(
            self._source, self._filters, self._transform, self._preview_max_size
        )

    def select_filter_channel(self, channel: FilterChannel) -> SliderSpec:
        """Make ``channel`` active and return the slider settings for it."""
        self._filters.active_channel = channel
        logger.debug(f"Active filter channel: {channel.key}")
        return self._filters.slider()

    def adjust_active_channel(self, value: int) -> None:
        """Store ``value`` for the active channel and recompose the preview.

        The range is enforced by the slider, not here.
        """
        self._filters.set(self._filters.active_channel, int(value))
        self._recompose()

    def rotate(self, direction: RotateDirection) -> None:
        self._transform.rotate(direction)
        self._recompose()

    def flip(self, axis: FlipAxis) -> None:
        self._transform.flip(axis)
        self._recompose()

    def reset(self) -> None:
        """Restore default filters and transform and re-select the first channel."""
        self._filters = FilterState()
        self._transform = TransformState()
        self.select_filter_channel(FILTER_CHANNELS[0])
        self._recompose()

    def save(self) -> ExportedImage:
        """Flatten the current state into a JPEG at the image's natural size."""
        surface = composite(
            self._source, self._filters, self._transform, size=self._image.size
        )
        exported = ExportedImage(
            filename=timestamped_filename(),
            encoded=encode_jpeg(surface.to_image(), self._jpeg_quality),
            source_id=self._image.id,
            filter=self._filters.css(),
            transform=self._transform.css(),
        )
        logger.info(
            f"Exported {exported.filename} ({exported.filter}; {exported.transform})"
        )
        return exported


@dataclass(frozen=True)
class PanelTransition:
    """Outcome of activating an edit control."""

    opened: bool
    image_id: str | None


class EditorPanel:
    """Closed / Open(image_id) host for at most one :class:`EditorSession`."""

    def __init__(self, preview_max_size: int = 512, jpeg_quality: int = 92) -> None:
        self._preview_max_size = preview_max_size
        self._jpeg_quality = jpeg_quality
        self._session: EditorSession | None = None

    @property
    def session(self) -> EditorSession | None:
        return self._session

    @property
    def is_open(self) -> bool:
        return self._session is not None

    @property
    def open_image_id(self) -> str | None:
        return self._session.image.id if self._session else None

    def toggle(self, image: GeneratedImage | None) -> PanelTransition:
        """Handle an edit-control activation for ``image``.

        Raises:
            ImageNotReadyError: If ``image`` is None (card not yet bound)
        """
        if image is None:
            raise ImageNotReadyError("The image has not finished loading yet")

        if self.open_image_id == image.id:
            self.close()
            return PanelTransition(opened=False, image_id=None)

        self.open(image)
        return PanelTransition(opened=True, image_id=image.id)

    def open(self, image: GeneratedImage) -> EditorSession:
        """Open a fresh session for ``image``, discarding any previous one."""
        if self._session is not None:
            logger.info(f"Discarding editor session for image {self._session.image.id}")
        self._session = EditorSession(
            image,
            preview_max_size=self._preview_max_size,
            jpeg_quality=self._jpeg_quality,
        )
        return self._session

    def close(self) -> None:
        if self._session is not None:
            logger.info(f"Editor closed for image {self._session.image.id}")
        self._session = None
