"""Tests for conversion and splitting option models."""

import pytest
from pydantic import ValidationError

from slack_markdown_blocks.config import Settings
from slack_markdown_blocks.models.options import (
    MarkdownToBlocksOptions,
    Mentions,
    SplitBlocksOptions,
)


def test_options_defaults():
    """Colors detected and section blocks preferred by default."""
    options = MarkdownToBlocksOptions()
    assert options.detect_colors is True
    assert options.prefer_section_blocks is True
    assert options.mentions == Mentions()


def test_options_accept_camel_case_keys():
    """camelCase keys from JSON payloads populate the snake_case fields."""
    options = MarkdownToBlocksOptions.model_validate(
        {
            "mentions": {"users": {"jdoe": "U1"}, "userGroups": {"devs": "S1"}},
            "detectColors": False,
            "preferSectionBlocks": False,
        }
    )
    assert options.mentions.users == {"jdoe": "U1"}
    assert options.mentions.user_groups == {"devs": "S1"}
    assert options.detect_colors is False
    assert options.prefer_section_blocks is False


def test_options_are_frozen():
    """Options cannot be mutated after construction."""
    options = MarkdownToBlocksOptions()
    with pytest.raises(ValidationError):
        options.detect_colors = False


def test_split_options_defaults():
    """Slack's documented limits are the defaults."""
    limits = SplitBlocksOptions()
    assert limits.max_blocks == 40
    assert limits.max_characters == 12000
    assert limits.max_section_characters == 3000
    assert limits.max_header_characters == 150


def test_split_options_reject_non_positive_limits():
    """A zero block limit is rejected."""
    with pytest.raises(ValidationError):
        SplitBlocksOptions(max_blocks=0)


def test_options_from_settings():
    """from_settings copies defaults from the Settings object."""
    settings = Settings(detect_colors=False, max_blocks=10, max_characters=5000)
    options = MarkdownToBlocksOptions.from_settings(settings=settings)
    limits = SplitBlocksOptions.from_settings(settings=settings)
    assert options.detect_colors is False
    assert options.prefer_section_blocks is True
    assert limits.max_blocks == 10
    assert limits.max_characters == 5000


@pytest.mark.parametrize(
    "key", ["prefer_section_blocks", "preferSectionBlocks", "preferCompactText"]
)
def test_compact_mode_key_spellings(key):
    """Every accepted spelling of the compact-mode switch is honored."""
    assert MarkdownToBlocksOptions.model_validate({key: False}).prefer_section_blocks is False


@pytest.mark.parametrize(
    "payload",
    [
        {"preferCompact": False},
        {"detect_colours": False},
        {"mentions": {"user": {"jdoe": "U1"}}},
    ],
)
def test_unknown_option_keys_rejected(payload):
    """Misspelled keys raise instead of being silently dropped."""
    with pytest.raises(ValidationError):
        MarkdownToBlocksOptions.model_validate(payload)


def test_unknown_split_option_key_rejected():
    """Split limits reject unknown keys too."""
    with pytest.raises(ValidationError):
        SplitBlocksOptions.model_validate({"maxBlock": 5})
