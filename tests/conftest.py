"""Shared test fixtures."""

import pytest

from slack_markdown_blocks.config import get_settings
from slack_markdown_blocks.models.options import MarkdownToBlocksOptions, Mentions


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Reset cached settings so env overrides in one test don't leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mentions() -> Mentions:
    """Mention maps shared by the resolution tests."""
    return Mentions(
        users={"jdoe": "U12345", "sally": "U67890"},
        channels={"general": "C00001", "random": "C00002"},
        user_groups={"devs": "S99999"},
        teams={"acme": "T11111"},
    )


@pytest.fixture
def rich_options(mentions: Mentions) -> MarkdownToBlocksOptions:
    """Structured (rich_text) mode with mention maps."""
    return MarkdownToBlocksOptions(mentions=mentions, prefer_section_blocks=False)


@pytest.fixture
def section_options(mentions: Mentions) -> MarkdownToBlocksOptions:
    """Compact (mrkdwn section) mode with mention maps."""
    return MarkdownToBlocksOptions(mentions=mentions)
