"""Map mistune inline AST nodes to rich text section elements."""

from collections.abc import Iterable

from slack_markdown_blocks.models.elements import (
    RichTextLink,
    RichTextSectionElement,
    RichTextStyle,
    RichTextText,
)
from slack_markdown_blocks.models.options import MarkdownToBlocksOptions
from slack_markdown_blocks.rich_text.styles import apply_style
from slack_markdown_blocks.rich_text.tokens import resolve_text

# Wrapper node type -> style it introduces on its children
WRAPPER_STYLES: dict[str, RichTextStyle] = {
    "emphasis": RichTextStyle(italic=True),
    "strong": RichTextStyle(bold=True),
    "strikethrough": RichTextStyle(strike=True),
}

_BREAKS = frozenset({"softbreak", "linebreak"})


def coalesce_text(nodes: Iterable[dict]) -> list[dict]:
    """Merge adjacent text and line-break nodes into single text nodes.

    mistune emits a separate text node wherever an inline rule was tried and
    failed (``<`` in ``<@U123>``, escaped characters), which would otherwise
    cut tokens in half before resolution.
    """
    merged: list[dict] = []
    for node in nodes:
        node_type = node.get("type")
        if node_type == "text" or node_type in _BREAKS:
            raw = node.get("raw", "") if node_type == "text" else "\n"
            if merged and merged[-1].get("type") == "text":
                merged[-1] = {"type": "text", "raw": merged[-1]["raw"] + raw}
            else:
                merged.append({"type": "text", "raw": raw})
        else:
            merged.append(node)
    return merged


def inline_text(nodes: Iterable[dict]) -> str:
    """Flatten inline nodes to their plain text content (no markup)."""
    parts: list[str] = []
    for node in nodes:
        node_type = node.get("type")
        if node_type in _BREAKS:
            parts.append("\n")
        elif "children" in node:
            parts.append(inline_text(node["children"]))
        else:
            parts.append(node.get("raw", ""))
    return "".join(parts)


def image_alt(node: dict) -> str:
    """Alt text of an image node, defaulting to "Image"."""
    return inline_text(node.get("children", [])) or "Image"


def map_inline_nodes(
    nodes: Iterable[dict], options: MarkdownToBlocksOptions
) -> list[RichTextSectionElement]:
    """Map a run of inline nodes to a flat list of styled elements."""
    elements: list[RichTextSectionElement] = []
    for node in coalesce_text(nodes):
        elements.extend(map_inline_node(node, options))
    return elements


def map_inline_node(
    node: dict, options: MarkdownToBlocksOptions
) -> list[RichTextSectionElement]:
    node_type = node.get("type")
    if node_type in ("text", "inline_html"):
        return resolve_text(node.get("raw", ""), None, options)
    if node_type in WRAPPER_STYLES:
        children = map_inline_nodes(node.get("children", []), options)
        return apply_style(children, WRAPPER_STYLES[node_type])
    if node_type == "codespan":
        return resolve_text(node.get("raw", ""), RichTextStyle(code=True), options)
    if node_type == "link":
        url = node.get("attrs", {}).get("url", "")
        return [RichTextLink(url=url, text=inline_text(node.get("children", [])) or None)]
    if node_type == "image":
        url = node.get("attrs", {}).get("url", "")
        return [RichTextLink(url=url, text=image_alt(node))]
    if node_type in _BREAKS:
        return [RichTextText(text="\n")]
    return []
