"""Validation utilities for Imaginator UI inputs."""

import logging

from .models import GenerationParams

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """User-friendly validation error.

    This exception is raised when user input fails validation.
    The message is intended to be displayed directly to the user.
    """

    pass


def validate_generation_params(params: GenerationParams, max_images: int) -> None:
    """Validate generation parameters with user-friendly messages.

    Args:
        params: Generation parameters to validate
        max_images: Upper bound of the image-count selector

    Raises:
        ValidationError: If validation fails with user-friendly message
    """
    try:
        params.validate(max_images)
    except ValueError as e:
        raise ValidationError(str(e)) from e


def validate_prompt_content(prompt: str, max_length: int = 4000) -> None:
    """Validate prompt text content.

    Args:
        prompt: Prompt text to validate
        max_length: Maximum allowed prompt length

    Raises:
        ValidationError: If prompt is too long
    """
    if len(prompt) > max_length:
        raise ValidationError(
            f"Prompt is too long ({len(prompt)} characters). Maximum is {max_length} characters."
        )


def parse_image_count(value) -> int:
    """Convert the image-count control value to an int.

    Raises:
        ValidationError: If the value is not a whole number
    """
    try:
        count = int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Image count must be a whole number, got {value!r}") from e

    if count != float(value):
        raise ValidationError(f"Image count must be a whole number, got {value!r}")
    return count
