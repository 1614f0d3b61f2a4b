"""Markdown to Slack Block Kit conversion.

Parses Markdown with mistune (GFM tables and strikethrough) and maps the
top-level nodes to blocks. Inline content that has no block of its own
(structured-mode paragraphs, lists, code, quotes, raw HTML) is collected in
a pending rich_text block that is flushed whenever a standalone block is
emitted or a node kind in ``_BREAK_AFTER`` has been mapped.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

import mistune

from slack_markdown_blocks.models.blocks import (
    Block,
    DividerBlock,
    HeaderBlock,
    ImageBlock,
    PlainTextObject,
    RichTextBlock,
    RichTextElement,
    RichTextList,
    RichTextPreformatted,
    RichTextQuote,
    RichTextSection,
    SectionBlock,
    TableBlock,
    TextObject,
)
from slack_markdown_blocks.models.elements import (
    RichTextSectionElement,
    RichTextStyle,
    RichTextText,
)
from slack_markdown_blocks.models.options import MarkdownToBlocksOptions
from slack_markdown_blocks.mrkdwn import inline_nodes_to_mrkdwn
from slack_markdown_blocks.preprocess import unwrap_formatted_list_items
from slack_markdown_blocks.rich_text.inline import image_alt, inline_text, map_inline_nodes
from slack_markdown_blocks.rich_text.tokens import resolve_text
from slack_markdown_blocks.validator import validate_options

logger = logging.getLogger(__name__)

# Node kinds whose rich_text output always ends the pending block
_BREAK_AFTER = frozenset({"list", "block_code", "block_quote"})

# List item children that carry the item's own text
_ITEM_TEXT_NODES = frozenset({"paragraph", "block_text"})


def _create_parser() -> mistune.Markdown:
    return mistune.create_markdown(renderer=None, plugins=["strikethrough", "table"])


class RichTextBuffer:
    """Pending rich_text containers plus the finished block list."""

    def __init__(self) -> None:
        self.blocks: list[Block] = []
        self._pending: list[RichTextElement] = []

    def append(self, element: RichTextElement) -> None:
        self._pending.append(element)

    def flush(self) -> None:
        """Close the pending containers into one rich_text block."""
        if self._pending:
            self.blocks.append(RichTextBlock(elements=list(self._pending)))
            self._pending.clear()

    def emit(self, block: Block) -> None:
        """Append a standalone block, flushing pending containers first."""
        self.flush()
        self.blocks.append(block)


@dataclass
class _ListFrame:
    """One list being walked by the depth-first list traversal."""

    node: dict
    indent: int
    items: Iterator[dict]
    run: list[RichTextSection] = field(default_factory=list)
    emitted: int = 0  # Items already closed into earlier runs

    @property
    def ordered(self) -> bool:
        return bool(self.node.get("attrs", {}).get("ordered"))

    def close_run(self, results: list[RichTextList]) -> None:
        """Emit the items collected so far as one rich_text_list."""
        if not self.run:
            return
        offset = None
        if self.ordered:
            offset = self.node.get("attrs", {}).get("start", 1) - 1 + self.emitted
        results.append(
            RichTextList(
                style="ordered" if self.ordered else "bullet",
                indent=self.indent,
                offset=offset or None,
                elements=list(self.run),
            )
        )
        self.emitted += len(self.run)
        self.run.clear()


class BlockConverter:
    """Maps a mistune AST to Block Kit blocks for one conversion call."""

    def __init__(self, options: MarkdownToBlocksOptions):
        self.options = options
        self.buffer = RichTextBuffer()

    def convert(self, tokens: list[dict]) -> list[Block]:
        for node in tokens:
            node_type = node.get("type")
            handler = getattr(self, f"_map_{node_type}", None)
            if handler is None:
                continue
            handler(node)
            if node_type in _BREAK_AFTER:
                self.buffer.flush()
        self.buffer.flush()
        return self.buffer.blocks

    # Helpers

    def _section_elements(self, nodes: list[dict]) -> list[RichTextSectionElement]:
        return map_inline_nodes(nodes, self.options)

    def _mrkdwn(self, nodes: list[dict]) -> str:
        return inline_nodes_to_mrkdwn(nodes, self.options)

    @staticmethod
    def _image_block(node: dict) -> ImageBlock:
        attrs = node.get("attrs", {})
        title = attrs.get("title")
        return ImageBlock(
            image_url=attrs.get("url", ""),
            alt_text=image_alt(node),
            title=PlainTextObject(text=title) if title else None,
        )

    # Node handlers

    def _map_heading(self, node: dict) -> None:
        children = node.get("children", [])
        text = inline_text(children)
        if not text.strip():
            return
        level = node.get("attrs", {}).get("level", 1)
        if level <= 2:
            self.buffer.emit(HeaderBlock(text=PlainTextObject(text=text)))
        elif self.options.prefer_section_blocks:
            mrkdwn = TextObject(type="mrkdwn", text=f"*{self._mrkdwn(children)}*")
            self.buffer.emit(SectionBlock(text=mrkdwn))
        else:
            bold = RichTextText(text=text, style=RichTextStyle(bold=True))
            self.buffer.emit(RichTextBlock(elements=[RichTextSection(elements=[bold])]))

    def _map_paragraph(self, node: dict) -> None:
        children = node.get("children", [])
        if len(children) == 1 and children[0].get("type") == "image":
            self.buffer.emit(self._image_block(children[0]))
        elif self.options.prefer_section_blocks:
            text = self._mrkdwn(children)
            if text:
                self.buffer.emit(SectionBlock(text=TextObject(type="mrkdwn", text=text)))
        else:
            elements = self._section_elements(children)
            if elements:
                self.buffer.append(RichTextSection(elements=elements))

    def _map_list(self, node: dict) -> None:
        for rich_text_list in self._unwind_list(node):
            self.buffer.append(rich_text_list)

    def _unwind_list(self, node: dict) -> list[RichTextList]:
        """Flatten nested lists into sibling rich_text_list elements.

        Walks depth-first with an explicit stack. An item with nested lists
        closes the current run of siblings, its nested lists follow at
        indent + 1, then the remaining siblings continue at the original indent.
        """
        results: list[RichTextList] = []
        stack = [_ListFrame(node=node, indent=0, items=iter(node.get("children", [])))]
        while stack:
            frame = stack[-1]
            item = next(frame.items, None)
            if item is None:
                frame.close_run(results)
                stack.pop()
                continue

            item_children = item.get("children", [])
            elements: list[RichTextSectionElement] = []
            for child in item_children:
                if child.get("type") in _ITEM_TEXT_NODES:
                    elements.extend(self._section_elements(child.get("children", [])))
            if elements:
                frame.run.append(RichTextSection(elements=elements))

            nested = [child for child in item_children if child.get("type") == "list"]
            if nested:
                frame.close_run(results)
                for nested_list in reversed(nested):
                    stack.append(
                        _ListFrame(
                            node=nested_list,
                            indent=frame.indent + 1,
                            items=iter(nested_list.get("children", [])),
                        )
                    )
        return results

    def _map_block_code(self, node: dict) -> None:
        code = node.get("raw", "").removesuffix("\n")
        self.buffer.append(RichTextPreformatted(elements=[RichTextText(text=code)]))

    def _map_block_quote(self, node: dict) -> None:
        elements: list[RichTextSectionElement] = []
        for child in node.get("children", []):
            if child.get("type") == "paragraph":
                elements.extend(self._section_elements(child.get("children", [])))
        if elements:
            self.buffer.append(RichTextQuote(elements=elements))

    def _map_thematic_break(self, node: dict) -> None:
        self.buffer.emit(DividerBlock())

    def _map_image(self, node: dict) -> None:
        self.buffer.emit(self._image_block(node))

    def _map_table(self, node: dict) -> None:
        rows: list[list[dict]] = []
        for part in node.get("children", []):
            if part.get("type") == "table_head":
                rows.append(part.get("children", []))
            elif part.get("type") == "table_body":
                rows.extend(row.get("children", []) for row in part.get("children", []))
        table_rows = [[self._table_cell(cell) for cell in row] for row in rows]
        self.buffer.emit(TableBlock(rows=table_rows))

    def _table_cell(self, cell: dict) -> RichTextBlock:
        # Containers may not be empty, so a blank cell holds an empty text run
        elements = self._section_elements(cell.get("children", [])) or [RichTextText(text="")]
        return RichTextBlock(elements=[RichTextSection(elements=elements)])

    def _map_block_html(self, node: dict) -> None:
        # Slack tags such as <!date^...> at the start of a line parse as HTML blocks
        raw = node.get("raw", "").strip("\n")
        elements = resolve_text(raw, None, self.options)
        if elements:
            self.buffer.append(RichTextSection(elements=elements))


def _coerce_options(
    options: MarkdownToBlocksOptions | dict | None,
) -> MarkdownToBlocksOptions:
    if options is None:
        return MarkdownToBlocksOptions()
    if isinstance(options, MarkdownToBlocksOptions):
        return options
    return MarkdownToBlocksOptions.model_validate(options)


def markdown_to_blocks(
    markdown: str, options: MarkdownToBlocksOptions | dict | None = None
) -> list[Block]:
    """Convert Markdown text to a list of Slack Block Kit blocks.

    Args:
        markdown: Markdown source (GFM tables and strikethrough supported).
        options: Mention maps and mode switches, as a model or a plain dict.

    Returns:
        Blocks in document order. Pass them to ``split_blocks`` before posting
        if the message may exceed Slack's limits.

    Raises:
        InvalidMentionError: A mention map ID does not match its format.
        pydantic.ValidationError: ``options`` is structurally invalid.
    """
    opts = _coerce_options(options)
    validate_options(opts)

    tokens = _create_parser()(unwrap_formatted_list_items(markdown))
    blocks = BlockConverter(opts).convert(tokens)
    logger.debug(
        "Converted markdown to blocks",
        extra={"markdown_chars": len(markdown), "block_count": len(blocks)},
    )
    return blocks
