"""Block Kit models and conversion/splitting options."""

from slack_markdown_blocks.models.blocks import (
    Block,
    ContextBlock,
    DividerBlock,
    HeaderBlock,
    ImageBlock,
    ImageElement,
    PlainTextObject,
    RichTextBlock,
    RichTextElement,
    RichTextList,
    RichTextPreformatted,
    RichTextQuote,
    RichTextSection,
    SectionBlock,
    TableBlock,
    TableColumn,
    TextObject,
    blocks_to_dicts,
    parse_blocks,
    serialized_size,
)
from slack_markdown_blocks.models.elements import (
    BROADCAST_RANGES,
    RichTextBroadcast,
    RichTextChannel,
    RichTextColor,
    RichTextDate,
    RichTextEmoji,
    RichTextLink,
    RichTextSectionElement,
    RichTextStyle,
    RichTextTeam,
    RichTextText,
    RichTextUser,
    RichTextUserGroup,
)
from slack_markdown_blocks.models.options import (
    MarkdownToBlocksOptions,
    Mentions,
    SplitBlocksOptions,
    SplitBlocksResult,
)

__all__ = [
    "BROADCAST_RANGES",
    "Block",
    "ContextBlock",
    "DividerBlock",
    "HeaderBlock",
    "ImageBlock",
    "ImageElement",
    "MarkdownToBlocksOptions",
    "Mentions",
    "PlainTextObject",
    "RichTextBlock",
    "RichTextBroadcast",
    "RichTextChannel",
    "RichTextColor",
    "RichTextDate",
    "RichTextElement",
    "RichTextEmoji",
    "RichTextLink",
    "RichTextList",
    "RichTextPreformatted",
    "RichTextQuote",
    "RichTextSection",
    "RichTextSectionElement",
    "RichTextStyle",
    "RichTextTeam",
    "RichTextText",
    "RichTextUser",
    "RichTextUserGroup",
    "SectionBlock",
    "SplitBlocksOptions",
    "SplitBlocksResult",
    "TableBlock",
    "TableColumn",
    "TextObject",
    "blocks_to_dicts",
    "parse_blocks",
    "serialized_size",
]
