"""FAQ accordion with mutually exclusive expansion."""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FaqEntry:
    question: str
    answer: str


DEFAULT_FAQ: tuple[FaqEntry, ...] = (
    FaqEntry(
        "What is Imaginator?",
        "Imaginator turns a short text description into images using an AI "
        "image-generation API. You can download each image or touch it up in "
        "the built-in editor.",
    ),
    FaqEntry(
        "How many images can I generate at once?",
        "Pick a number in the image count selector next to the prompt. Every "
        "image appears as its own card as soon as the request completes.",
    ),
    FaqEntry(
        "Why did my generation fail?",
        "Most failures come from a missing or invalid API key. Set "
        "IMAGINATOR_API_KEY and try again.",
    ),
    FaqEntry(
        "What can the editor do?",
        "Adjust brightness, saturation, inversion and grayscale, rotate in "
        "quarter turns, flip horizontally or vertically, and save the result "
        "as a JPEG.",
    ),
    FaqEntry(
        "Are my edits kept?",
        "No. Closing the editor or opening it for another image discards the "
        "current adjustments. Save the image first if you want to keep it.",
    ),
)


class FaqAccordion:
    """List of entries where opening one closes all the others."""

    def __init__(self, entries: tuple[FaqEntry, ...] | list[FaqEntry] = DEFAULT_FAQ) -> None:
        self._entries = tuple(entries)
        self._open: list[bool] = [False] * len(self._entries)

    @property
    def entries(self) -> tuple[FaqEntry, ...]:
        return self._entries

    @property
    def open_index(self) -> int | None:
        for index, is_open in enumerate(self._open):
            if is_open:
                return index
        return None

    def is_open(self, index: int) -> bool:
        return self._open[index]

    def states(self) -> list[bool]:
        return list(self._open)

    def toggle(self, index: int) -> list[bool]:
        """Flip entry ``index`` and close every other entry.

        Raises:
            IndexError: If ``index`` is out of range
        """
        if not 0 <= index < len(self._entries):
            raise IndexError(f"FAQ entry {index} out of range (0-{len(self._entries) - 1})")

        now_open = not self._open[index]
        self._open = [False] * len(self._entries)
        self._open[index] = now_open
        logger.debug(f"FAQ entry {index} {'opened' if now_open else 'closed'}")
        return self.states()
