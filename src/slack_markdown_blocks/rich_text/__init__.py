"""Rich text element construction: token resolution and style flattening."""

from slack_markdown_blocks.rich_text.inline import (
    coalesce_text,
    inline_text,
    map_inline_node,
    map_inline_nodes,
)
from slack_markdown_blocks.rich_text.styles import apply_style, merge_styles, normalize_style
from slack_markdown_blocks.rich_text.tokens import (
    MATCHERS,
    Token,
    TokenKind,
    lookup_channel,
    lookup_mention,
    resolve_text,
    scan,
)

__all__ = [
    "MATCHERS",
    "Token",
    "TokenKind",
    "apply_style",
    "coalesce_text",
    "inline_text",
    "lookup_channel",
    "lookup_mention",
    "map_inline_node",
    "map_inline_nodes",
    "merge_styles",
    "normalize_style",
    "resolve_text",
    "scan",
]
