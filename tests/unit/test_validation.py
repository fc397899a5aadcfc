"""Unit tests for validation functions."""

import pytest

from imaginator.ui.models import GenerationParams
from imaginator.ui.validation import (
    ValidationError,
    parse_image_count,
    validate_generation_params,
    validate_prompt_content,
)


class TestValidateGenerationParams:
    def test_valid(self):
        validate_generation_params(GenerationParams(prompt="a red cube", count=1), max_images=4)

    def test_converts_value_error(self):
        with pytest.raises(ValidationError, match="describe the image"):
            validate_generation_params(GenerationParams(prompt=" ", count=1), max_images=4)

    def test_count_above_max(self):
        with pytest.raises(ValidationError, match="1-2"):
            validate_generation_params(GenerationParams(prompt="a red cube", count=3), max_images=2)


class TestValidatePromptContent:
    def test_normal_prompt(self):
        validate_prompt_content("a red cube on a marble table")

    def test_too_long(self):
        with pytest.raises(ValidationError, match="too long"):
            validate_prompt_content("x" * 101, max_length=100)

    @pytest.mark.parametrize("prompt", ["error", "None", " null "])
    def test_ordinary_words_accepted(self, prompt):
        validate_prompt_content(prompt)


class TestParseImageCount:
    @pytest.mark.parametrize("value, expected", [(3, 3), ("2", 2), (4.0, 4)])
    def test_whole_numbers(self, value, expected):
        assert parse_image_count(value) == expected

    @pytest.mark.parametrize("value", [None, "many", 2.5])
    def test_rejects_non_integers(self, value):
        with pytest.raises(ValidationError, match="whole number"):
            parse_image_count(value)
