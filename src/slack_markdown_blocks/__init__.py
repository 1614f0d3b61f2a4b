"""Convert Markdown to Slack Block Kit blocks and split them into postable batches."""

from slack_markdown_blocks.converter import markdown_to_blocks
from slack_markdown_blocks.models import (
    Block,
    MarkdownToBlocksOptions,
    Mentions,
    SplitBlocksOptions,
    SplitBlocksResult,
    blocks_to_dicts,
    parse_blocks,
    serialized_size,
)
from slack_markdown_blocks.plain_text import blocks_to_plain_text
from slack_markdown_blocks.splitter import split_blocks, split_blocks_with_text
from slack_markdown_blocks.validator import InvalidMentionError, validate_options

__all__ = [
    "Block",
    "InvalidMentionError",
    "MarkdownToBlocksOptions",
    "Mentions",
    "SplitBlocksOptions",
    "SplitBlocksResult",
    "blocks_to_dicts",
    "blocks_to_plain_text",
    "markdown_to_blocks",
    "parse_blocks",
    "serialized_size",
    "split_blocks",
    "split_blocks_with_text",
    "validate_options",
]
