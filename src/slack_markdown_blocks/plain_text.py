"""Plain-text fallback for a batch of blocks.

Slack shows the message ``text`` in notifications and in clients that cannot
render blocks. The rendering is advisory: it keeps the content readable but
does not try to represent every block losslessly.
"""

from slack_markdown_blocks.models.blocks import (
    Block,
    ContextBlock,
    DividerBlock,
    HeaderBlock,
    ImageBlock,
    ImageElement,
    RichTextBlock,
    RichTextElement,
    RichTextList,
    RichTextPreformatted,
    RichTextQuote,
    RichTextSection,
    SectionBlock,
    TableBlock,
)
from slack_markdown_blocks.models.elements import (
    RichTextBroadcast,
    RichTextChannel,
    RichTextColor,
    RichTextDate,
    RichTextEmoji,
    RichTextLink,
    RichTextSectionElement,
    RichTextTeam,
    RichTextText,
    RichTextUser,
    RichTextUserGroup,
)

DIVIDER_TEXT = "---"
BULLET = "•"
CELL_SEPARATOR = " | "


def element_to_text(element: RichTextSectionElement) -> str:
    """Render one inline element; references use Slack's bracketed form."""
    if isinstance(element, RichTextText):
        return element.text
    if isinstance(element, RichTextLink):
        return f"<{element.url}|{element.text}>" if element.text else f"<{element.url}>"
    if isinstance(element, RichTextUser):
        return f"<@{element.user_id}>"
    if isinstance(element, RichTextChannel):
        return f"<#{element.channel_id}>"
    if isinstance(element, RichTextUserGroup):
        return f"<!subteam^{element.usergroup_id}>"
    if isinstance(element, RichTextTeam):
        return f"<!subteam^{element.team_id}>"
    if isinstance(element, RichTextBroadcast):
        return f"<!{element.range}>"
    if isinstance(element, RichTextEmoji):
        return f":{element.name}:"
    if isinstance(element, RichTextDate):
        fallback = element.fallback or str(element.timestamp)
        return f"<!date^{element.timestamp}^{element.format}|{fallback}>"
    if isinstance(element, RichTextColor):
        return element.value
    return ""


def _elements_to_text(elements: list[RichTextSectionElement]) -> str:
    return "".join(element_to_text(element) for element in elements)


def _list_to_text(rich_list: RichTextList) -> str:
    pad = "  " * (rich_list.indent or 0)
    start = (rich_list.offset or 0) + 1
    lines = []
    for position, item in enumerate(rich_list.elements, start=start):
        prefix = f"{position}." if rich_list.style == "ordered" else BULLET
        lines.append(f"{pad}{prefix} {_elements_to_text(item.elements)}")
    return "\n".join(lines)


def _container_to_text(container: RichTextElement) -> str:
    if isinstance(container, RichTextList):
        return _list_to_text(container)
    if isinstance(container, RichTextQuote):
        text = _elements_to_text(container.elements)
        return "\n".join(f"> {line}" for line in text.split("\n"))
    if isinstance(container, (RichTextSection, RichTextPreformatted)):
        return _elements_to_text(container.elements)
    return ""


def _rich_text_to_text(block: RichTextBlock) -> str:
    return "\n".join(_container_to_text(container) for container in block.elements)


def block_to_text(block: Block) -> str:
    """Render a single block to plain text ("" if it has no text content)."""
    if isinstance(block, HeaderBlock):
        return block.text.text
    if isinstance(block, SectionBlock):
        parts = [block.text.text] if block.text is not None else []
        parts.extend(field.text for field in block.fields or [])
        return "\n".join(parts)
    if isinstance(block, RichTextBlock):
        return _rich_text_to_text(block)
    if isinstance(block, TableBlock):
        return "\n".join(
            CELL_SEPARATOR.join(_rich_text_to_text(cell) for cell in row) for row in block.rows
        )
    if isinstance(block, DividerBlock):
        return DIVIDER_TEXT
    if isinstance(block, ImageBlock):
        return block.title.text if block.title is not None else block.alt_text
    if isinstance(block, ContextBlock):
        return " ".join(
            item.alt_text if isinstance(item, ImageElement) else item.text
            for item in block.elements
        )
    return ""


def blocks_to_plain_text(blocks: list[Block]) -> str:
    """Render blocks to one string, separating non-empty blocks with a blank line."""
    rendered = (block_to_text(block) for block in blocks)
    return "\n\n".join(text for text in rendered if text.strip())
