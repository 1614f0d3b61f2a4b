"""Split block lists into batches that fit Slack's per-message limits.

A message may hold at most ``max_blocks`` blocks and ``max_characters`` of
compact block JSON. Splits happen at natural boundaries: between blocks,
then between a rich_text block's containers, then between the lines of a
code block. Blocks that cannot be divided (tables, images, ...) are sent
whole in a batch of their own even when oversized. Nothing is dropped and
document order is preserved.
"""

import json
import logging

from slack_markdown_blocks.models.blocks import (
    Block,
    HeaderBlock,
    PlainTextObject,
    RichTextBlock,
    RichTextElement,
    RichTextPreformatted,
    SectionBlock,
    TextObject,
    serialized_size,
)
from slack_markdown_blocks.models.elements import RichTextText
from slack_markdown_blocks.models.options import SplitBlocksOptions, SplitBlocksResult
from slack_markdown_blocks.plain_text import blocks_to_plain_text

logger = logging.getLogger(__name__)

# A space is an acceptable break point only in the last 20% of the window
_SPACE_SPLIT_RATIO = 0.8

# Encoded size of the brackets around a batch
_BATCH_FRAMING = 2


class _SizedGroup:
    """Items whose JSON encodings are joined with commas inside fixed framing.

    Tracks the encoded size incrementally instead of re-serializing the
    growing group for every candidate.
    """

    def __init__(self, framing: int, max_size: int, max_items: int | None = None):
        self.framing = framing
        self.max_size = max_size
        self.max_items = max_items
        self.items: list = []
        self.size = framing

    def fits(self, item_size: int) -> bool:
        if self.max_items is not None and len(self.items) + 1 > self.max_items:
            return False
        separator = 1 if self.items else 0
        return self.size + separator + item_size <= self.max_size

    def add(self, item, item_size: int) -> None:
        self.size += item_size + (1 if self.items else 0)
        self.items.append(item)

    def drain(self) -> list:
        items = self.items
        self.items = []
        self.size = self.framing
        return items


# Text chunking


def _find_split_point(text: str, limit: int) -> tuple[int, int]:
    """Return (cut, skip): keep ``text[:cut]``, resume at ``cut + skip``."""
    newline = text.rfind("\n", 0, limit + 1)
    if newline > 0:
        return newline, 1
    space = text.rfind(" ", 0, limit + 1)
    if space > limit * _SPACE_SPLIT_RATIO:
        return space, 1
    return limit, 0


def chunk_text(text: str, limit: int) -> list[str]:
    """Split text into pieces of at most ``limit`` characters.

    Prefers the last newline in the window, then the last space in the final
    20% of the window, then a hard cut. The separator at a break is dropped.
    """
    chunks: list[str] = []
    remaining = text
    while len(remaining) > limit:
        cut, skip = _find_split_point(remaining, limit)
        chunks.append(remaining[:cut])
        remaining = remaining[cut + skip :]
    if remaining or not chunks:
        chunks.append(remaining)
    return chunks


def _split_section(block: SectionBlock, limit: int) -> list[Block]:
    chunks = chunk_text(block.text.text, limit)
    first = block.model_copy(
        update={"text": block.text.model_copy(update={"text": chunks[0]})}
    )
    rest = [SectionBlock(text=TextObject(type=block.text.type, text=chunk)) for chunk in chunks[1:]]
    return [first, *rest]


def _split_header(block: HeaderBlock, header_limit: int, section_limit: int) -> list[Block]:
    text = block.text.text
    cut, skip = _find_split_point(text, header_limit)
    first = block.model_copy(
        update={"text": block.text.model_copy(update={"text": text[:cut]})}
    )
    remainder = text[cut + skip :]
    if not remainder:
        return [first]
    # Header text is plain, so the overflow stays plain_text
    rest = [
        SectionBlock(text=TextObject(type="plain_text", text=chunk))
        for chunk in chunk_text(remainder, section_limit)
    ]
    return [first, *rest]


def split_long_text_blocks(blocks: list[Block], options: SplitBlocksOptions) -> list[Block]:
    """Break section and header blocks whose text exceeds Slack's text limits.

    The first piece keeps the original block's block_id, accessory and fields;
    continuation pieces are bare section blocks.
    """
    result: list[Block] = []
    for block in blocks:
        if (
            isinstance(block, SectionBlock)
            and block.text is not None
            and len(block.text.text) > options.max_section_characters
        ):
            result.extend(_split_section(block, options.max_section_characters))
        elif (
            isinstance(block, HeaderBlock)
            and len(block.text.text) > options.max_header_characters
        ):
            result.extend(
                _split_header(
                    block, options.max_header_characters, options.max_section_characters
                )
            )
        else:
            result.append(block)
    return result


# Rich text subdivision


def _rich_text_framing() -> int:
    return serialized_size(RichTextBlock(elements=[]))


def _element_size(element: RichTextElement) -> int:
    return serialized_size(element)


def _split_preformatted(
    element: RichTextPreformatted, max_chars: int
) -> list[RichTextPreformatted]:
    """Split a code container line by line into fragments that each fit.

    A single line longer than the limit is kept whole.
    """
    texts = [e.text for e in element.elements if isinstance(e, RichTextText)]
    if not texts:
        return [element]
    lines = "".join(texts).split("\n")
    if len(lines) <= 1:
        return [element]

    def fragment(text: str) -> RichTextPreformatted:
        return RichTextPreformatted(elements=[RichTextText(text=text)], border=element.border)

    framing = serialized_size(RichTextBlock(elements=[fragment("")]))
    fragments: list[RichTextPreformatted] = []
    current: list[str] = []
    size = framing
    for line in lines:
        # JSON-escaped length; joining lines adds an escaped newline ("\n" = 2 chars)
        line_size = len(json.dumps(line, ensure_ascii=False)) - 2
        added = line_size + (2 if current else 0)
        if current and size + added > max_chars:
            fragments.append(fragment("\n".join(current)))
            current = []
            size = framing
            added = line_size
        current.append(line)
        size += added
    if current:
        fragments.append(fragment("\n".join(current)))
    return fragments


def split_rich_text_block(block: RichTextBlock, max_chars: int) -> list[RichTextBlock]:
    """Split an oversized rich_text block into smaller rich_text blocks.

    Containers are regrouped greedily; a container that is too large alone is
    split by lines if it is preformatted, otherwise emitted by itself. The
    first piece keeps ``block_id`` and is sized with it.
    """
    if not block.elements:
        return [block]

    framing = _rich_text_framing()
    first_framing = serialized_size(RichTextBlock(elements=[], block_id=block.block_id))
    group = _SizedGroup(first_framing, max_chars)
    result: list[RichTextBlock] = []

    def close_group() -> None:
        if group.items:
            result.append(RichTextBlock(elements=group.drain()))
        if result:
            group.framing = group.size = framing

    for element in block.elements:
        size = _element_size(element)
        if group.fits(size):
            group.add(element, size)
            continue
        close_group()
        if group.framing + size <= max_chars:
            group.add(element, size)
        elif isinstance(element, RichTextPreformatted):
            budget = max_chars - (group.framing - framing)
            for piece in _split_preformatted(element, budget):
                result.append(RichTextBlock(elements=[piece]))
            close_group()
        else:
            result.append(RichTextBlock(elements=[element]))
            close_group()
    close_group()

    if block.block_id is not None and result:
        result[0] = result[0].model_copy(update={"block_id": block.block_id})
    return result


# Batching


def split_blocks(
    blocks: list[Block], options: SplitBlocksOptions | dict | None = None
) -> list[list[Block]]:
    """Split blocks into batches that each fit within Slack's message limits.

    Args:
        blocks: Blocks from ``markdown_to_blocks`` (or any Block Kit blocks).
        options: Limits; defaults are 40 blocks and 12000 JSON characters.

    Returns:
        Batches in document order. Always at least one batch; empty input
        gives ``[[]]``.
    """
    opts = _coerce_options(options)
    if not blocks:
        return [[]]

    blocks = split_long_text_blocks(blocks, opts)
    sizes = [serialized_size(block) for block in blocks]

    total = _BATCH_FRAMING + sum(sizes) + len(blocks) - 1
    if len(blocks) <= opts.max_blocks and total <= opts.max_characters:
        return [list(blocks)]

    batches: list[list[Block]] = []
    batch = _SizedGroup(
        framing=_BATCH_FRAMING, max_size=opts.max_characters, max_items=opts.max_blocks
    )

    def close_batch() -> None:
        if batch.items:
            batches.append(batch.drain())

    for block, size in zip(blocks, sizes):
        if batch.fits(size):
            batch.add(block, size)
            continue
        close_batch()
        if batch.fits(size):
            batch.add(block, size)
            continue

        if isinstance(block, RichTextBlock):
            for piece in split_rich_text_block(block, opts.max_characters - _BATCH_FRAMING):
                piece_size = serialized_size(piece)
                if not batch.fits(piece_size):
                    close_batch()
                batch.add(piece, piece_size)
        else:
            logger.warning(
                "Block exceeds message size limit and cannot be split; sending whole",
                extra={
                    "block_type": block.type,
                    "block_chars": size,
                    "max_characters": opts.max_characters,
                },
            )
            batch.add(block, size)
    close_batch()

    logger.debug(
        "Split blocks into batches",
        extra={"block_count": len(blocks), "batch_count": len(batches)},
    )
    return batches or [[]]


def split_blocks_with_text(
    blocks: list[Block], options: SplitBlocksOptions | dict | None = None
) -> list[SplitBlocksResult]:
    """Split blocks and pair each batch with a plain-text fallback.

    The text is suitable for the ``text`` argument of chat.postMessage, which
    Slack shows in notifications and to clients that cannot render blocks.
    """
    return [
        SplitBlocksResult(text=blocks_to_plain_text(batch), blocks=batch)
        for batch in split_blocks(blocks, options)
    ]


def _coerce_options(options: SplitBlocksOptions | dict | None) -> SplitBlocksOptions:
    if options is None:
        return SplitBlocksOptions()
    if isinstance(options, SplitBlocksOptions):
        return options
    return SplitBlocksOptions.model_validate(options)
