"""Render inline Markdown nodes as a Slack mrkdwn string.

Used for section blocks, where Slack expects a single mrkdwn text object
rather than typed rich_text elements.
"""

from collections.abc import Iterable

from slack_markdown_blocks.models.elements import (
    RichTextBroadcast,
    RichTextChannel,
    RichTextTeam,
    RichTextUser,
    RichTextUserGroup,
)
from slack_markdown_blocks.models.options import MarkdownToBlocksOptions
from slack_markdown_blocks.rich_text.inline import coalesce_text, image_alt, inline_text
from slack_markdown_blocks.rich_text.tokens import (
    TokenKind,
    lookup_channel,
    lookup_mention,
    scan,
)

# Wrapper node type -> mrkdwn delimiter
_DELIMITERS = {
    "emphasis": "_",
    "strong": "*",
    "strikethrough": "~",
}


def inline_nodes_to_mrkdwn(nodes: Iterable[dict], options: MarkdownToBlocksOptions) -> str:
    """Render a run of inline nodes to mrkdwn."""
    return "".join(inline_node_to_mrkdwn(node, options) for node in coalesce_text(nodes))


def inline_node_to_mrkdwn(node: dict, options: MarkdownToBlocksOptions) -> str:
    node_type = node.get("type")
    if node_type == "text":
        return convert_text_to_mrkdwn(node.get("raw", ""), options)
    if node_type == "inline_html":
        # Slack-specific tags like <!date^...> pass through untouched
        return node.get("raw", "")
    if node_type in _DELIMITERS:
        delimiter = _DELIMITERS[node_type]
        return f"{delimiter}{inline_nodes_to_mrkdwn(node.get('children', []), options)}{delimiter}"
    if node_type == "codespan":
        return f"`{node.get('raw', '')}`"
    if node_type == "link":
        url = node.get("attrs", {}).get("url", "")
        return f"<{url}|{inline_text(node.get('children', []))}>"
    if node_type == "image":
        url = node.get("attrs", {}).get("url", "")
        return f"<{url}|{image_alt(node)}>"
    if node_type in ("softbreak", "linebreak"):
        return "\n"
    return ""


def mention_to_mrkdwn(element) -> str:
    """Bracketed mrkdwn form of a resolved mention element."""
    if isinstance(element, RichTextBroadcast):
        return f"<!{element.range}>"
    if isinstance(element, RichTextUser):
        return f"<@{element.user_id}>"
    if isinstance(element, RichTextUserGroup):
        return f"<!subteam^{element.usergroup_id}>"
    if isinstance(element, RichTextTeam):
        return f"<!subteam^{element.team_id}>"
    if isinstance(element, RichTextChannel):
        return f"<#{element.channel_id}>"
    raise TypeError(f"Not a mention element: {type(element).__name__}")


def convert_text_to_mrkdwn(text: str, options: MarkdownToBlocksOptions) -> str:
    """Rewrite mapped bare @name / #name tokens into Slack's bracketed form.

    Everything else (existing <@U..> references, colors, emoji, dates and
    unmapped names) is left as-is.
    """
    parts: list[str] = []
    for part in scan(text):
        if isinstance(part, str):
            parts.append(part)
            continue
        resolved = None
        if part.kind is TokenKind.BARE_MENTION:
            resolved = lookup_mention(part.match.group(1), options.mentions)
        elif part.kind is TokenKind.BARE_CHANNEL:
            resolved = lookup_channel(part.match.group(1), options.mentions)
        parts.append(mention_to_mrkdwn(resolved) if resolved is not None else part.raw)
    return "".join(parts)
