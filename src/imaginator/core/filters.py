"""Filter and transform state for the image editor.

The editor exposes four filter channels, each a percentage with its own
bound, and a transform made of a rotation (multiples of 90 degrees) and two
flip signs.  Both states render to the same strings the preview and the
export use, e.g.::

    brightness(100%) saturate(100%) invert(0%) grayscale(0%)
    rotate(90deg) scale(-1, 1)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class FilterChannel(Enum):
    """Adjustable visual property of the editor.

    Each member carries ``(label, css_function, default, maximum)``.
    """

    BRIGHTNESS = ("Brightness", "brightness", 100, 200)
    SATURATION = ("Saturation", "saturate", 100, 200)
    INVERSION = ("Inversion", "invert", 0, 100)
    GRAYSCALE = ("Grayscale", "grayscale", 0, 100)

    def __init__(self, label: str, css_function: str, default: int, maximum: int) -> None:
        self.label = label
        self.css_function = css_function
        self.default = default
        self.maximum = maximum

    @property
    def key(self) -> str:
        """Lower-case channel name (``"brightness"``, ``"inversion"``, ...)."""
        return self.name.lower()

    @property
    def minimum(self) -> int:
        return 0

    @classmethod
    def from_key(cls, key: str) -> FilterChannel:
        """Look a channel up by key or label, case-insensitively.

        Raises:
            ValueError: If no channel matches
        """
        normalized = key.strip().lower()
        for channel in cls:
            if normalized in (channel.key, channel.label.lower()):
                return channel
        raise ValueError(f"Unknown filter channel: {key}")


FILTER_CHANNELS: tuple[FilterChannel, ...] = tuple(FilterChannel)


class RotateDirection(Enum):
    LEFT = -90
    RIGHT = 90


class FlipAxis(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class SliderSpec:
    """Range control settings for the active filter channel."""

    label: str
    minimum: int
    maximum: int
    value: int

    @property
    def display_value(self) -> str:
        return f"{self.value}%"


@dataclass
class FilterState:
    """Per-channel filter percentages plus the active channel.

    The active channel is the source of truth for which selector looks
    selected; rendering derives from it.
    """

    brightness: int = FilterChannel.BRIGHTNESS.default
    saturation: int = FilterChannel.SATURATION.default
    inversion: int = FilterChannel.INVERSION.default
    grayscale: int = FilterChannel.GRAYSCALE.default
    active_channel: FilterChannel = FilterChannel.BRIGHTNESS

    def get(self, channel: FilterChannel) -> int:
        return getattr(self, channel.key)

    def set(self, channel: FilterChannel, value: int) -> None:
        setattr(self, channel.key, value)

    def slider(self) -> SliderSpec:
        """Slider settings matching the active channel's bound and value."""
        channel = self.active_channel
        return SliderSpec(
            label=channel.label,
            minimum=channel.minimum,
            maximum=channel.maximum,
            value=self.get(channel),
        )

    def values(self) -> tuple[int, int, int, int]:
        return self.brightness, self.saturation, self.inversion, self.grayscale

    def is_identity(self) -> bool:
        return all(self.get(channel) == channel.default for channel in FILTER_CHANNELS)

    def css(self) -> str:
        """Filter string in channel order, e.g. ``brightness(50%) saturate(100%) ...``."""
        return " ".join(
            f"{channel.css_function}({self.get(channel)}%)" for channel in FILTER_CHANNELS
        )


@dataclass
class TransformState:
    """Rotation in degrees (multiple of 90, unbounded) and flip signs (1 or -1)."""

    rotation_degrees: int = 0
    flip_horizontal: int = 1
    flip_vertical: int = 1

    @property
    def effective_rotation(self) -> int:
        """Rotation wrapped into ``[0, 360)``."""
        return self.rotation_degrees % 360

    def rotate(self, direction: RotateDirection) -> None:
        self.rotation_degrees += direction.value

    def flip(self, axis: FlipAxis) -> None:
        if axis is FlipAxis.HORIZONTAL:
            self.flip_horizontal = -self.flip_horizontal
        else:
            self.flip_vertical = -self.flip_vertical

    def is_identity(self) -> bool:
        return (
            self.effective_rotation == 0 and self.flip_horizontal == 1 and self.flip_vertical == 1
        )

    def css(self) -> str:
        return (
            f"rotate({self.rotation_degrees}deg) "
            f"scale({self.flip_horizontal}, {self.flip_vertical})"
        )
