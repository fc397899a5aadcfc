"""Gallery controller: generation requests, placeholder cards, image binding.

:meth:`GalleryController.request_images` is the only operation that
suspends.  A busy flag, checked and set before the first ``await``, turns a
second submission into a no-op while a request is outstanding.  The flag is
cleared in a ``finally`` block so the submit control is restored on every
exit path.

Responses are bound index-aligned: the Nth returned image fills the Nth
placeholder card.  On failure the cards stay in their placeholder state and a
single user-facing message is recorded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from PIL import Image

from imaginator.core.errors import GenerationError
from imaginator.core.generation_client import API_FAILURE_MESSAGE
from imaginator.core.images import ExportedImage, GeneratedImage, timestamped_filename

logger = logging.getLogger(__name__)

SUBMIT_LABEL_IDLE = "Generate"
SUBMIT_LABEL_BUSY = "Generating"


@dataclass
class ImageCard:
    """One gallery slot: a placeholder until an image is bound.

    Attributes:
        index: Position in the gallery
        image: Bound image, or None while loading
        preview: Decoded image for display
        download_name: ``<ms>-imaginator.jpg`` once bound
    """

    index: int
    image: GeneratedImage | None = None
    preview: Image.Image | None = field(default=None, repr=False)
    download_name: str | None = None

    @property
    def is_loading(self) -> bool:
        return self.image is None

    @property
    def is_ready(self) -> bool:
        return self.image is not None

    def download(self) -> ExportedImage:
        """Download target for the raw generated image.

        Raises:
            ValueError: If the card has no image yet
        """
        if self.image is None or self.download_name is None:
            raise ValueError(f"Card {self.index} has no image to download")
        return ExportedImage(
            filename=self.download_name,
            encoded=self.image.encoded,
            source_id=self.image.id,
        )


@dataclass(frozen=True)
class GenerationOutcome:
    """Result of one accepted generation request."""

    cards: list[ImageCard]
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class GalleryController:
    """Owns the gallery cards and the single in-flight request guard.

    Args:
        client: Object with ``async generate(prompt, count) -> list[GeneratedImage]``
    """

    def __init__(self, client: Any) -> None:
        self._client = client
        self._busy = False
        self._cards: list[ImageCard] = []

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def cards(self) -> list[ImageCard]:
        return list(self._cards)

    @property
    def submit_label(self) -> str:
        return SUBMIT_LABEL_BUSY if self._busy else SUBMIT_LABEL_IDLE

    @property
    def submit_enabled(self) -> bool:
        return not self._busy

    def card(self, index: int) -> ImageCard:
        return self._cards[index]

    async def request_images(self, prompt: str, count: int) -> GenerationOutcome | None:
        """Generate ``count`` images for ``prompt`` and bind them to new cards.

        Returns:
            The outcome, or None if a request was already in flight
        """
        if self._busy:
            logger.info("Generation already in progress; ignoring submission")
            return None

        self._busy = True
        try:
            self._cards = [ImageCard(index=i) for i in range(count)]
            logger.info(f"Created {count} placeholder card(s) for prompt: {prompt!r}")

            try:
                images = await self._client.generate(prompt, count)
                for card, image in zip(self._cards, images):
                    self.bind_image(card, image)
            except GenerationError as e:
                logger.warning(f"Generation failed: {e}")
                return self._failed(count, str(e))
            except Exception as e:
                logger.error(f"Unexpected generation failure: {e}", exc_info=True)
                return self._failed(count, API_FAILURE_MESSAGE)

            if len(images) != count:
                logger.warning(f"Requested {count} image(s), received {len(images)}")

            return GenerationOutcome(cards=self.cards)
        finally:
            self._busy = False

    def _failed(self, count: int, message: str) -> GenerationOutcome:
        # A failure part-way through binding must not leave a half-filled gallery.
        self._cards = [ImageCard(index=i) for i in range(count)]
        return GenerationOutcome(cards=self.cards, error=message)

    def bind_image(self, card: ImageCard, image: GeneratedImage) -> ImageCard:
        """Decode ``image`` into ``card`` and attach its download name.

        Binding marks the card ready, which is what allows the editor to open
        on it.
        """
        card.preview = image.decode()
        card.image = image
        card.download_name = timestamped_filename()
        logger.debug(f"Bound image {image.id} to card {card.index} as {card.download_name}")
        return card
