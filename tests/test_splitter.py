"""Tests for splitting blocks into Slack-sized batches."""

import logging

import pytest

from slack_markdown_blocks.models.blocks import (
    DividerBlock,
    HeaderBlock,
    ImageBlock,
    PlainTextObject,
    RichTextBlock,
    RichTextPreformatted,
    RichTextSection,
    SectionBlock,
    TableBlock,
    TextObject,
    serialized_size,
)
from slack_markdown_blocks.models.elements import RichTextText
from slack_markdown_blocks.models.options import SplitBlocksOptions
from slack_markdown_blocks.splitter import (
    chunk_text,
    split_blocks,
    split_blocks_with_text,
    split_rich_text_block,
)


def _section(text: str, **kwargs) -> SectionBlock:
    return SectionBlock(text=TextObject(type="mrkdwn", text=text), **kwargs)


def _rich_section(text: str) -> RichTextSection:
    return RichTextSection(elements=[RichTextText(text=text)])


def _flatten(batches: list[list]) -> list:
    return [block for batch in batches for block in batch]


# Text chunking


def test_chunk_text_prefers_newline():
    """The last newline in the window is the break point."""
    assert chunk_text("aaa\nbbbbbb", 8) == ["aaa", "bbbbbb"]


def test_chunk_text_space_near_end_of_window():
    """A space in the last 20% of the window is used and dropped."""
    assert chunk_text("a" * 9 + " " + "b" * 5, 10) == ["a" * 9, "b" * 5]


def test_chunk_text_hard_cut_when_space_too_early():
    """A space early in the window is ignored in favor of a hard cut."""
    assert chunk_text("ab " + "c" * 20, 10) == ["ab " + "c" * 7, "c" * 10, "c" * 3]


def test_chunk_text_short_and_empty():
    """Text within the limit is returned as a single chunk."""
    assert chunk_text("short", 10) == ["short"]
    assert chunk_text("", 10) == [""]


# Batching


def test_empty_input_gives_one_empty_batch():
    """No blocks still yields one (empty) batch."""
    assert split_blocks([]) == [[]]


def test_under_limits_single_batch():
    """Small messages come back as one batch, unchanged."""
    blocks = [_section("one"), DividerBlock(), _section("two")]
    assert split_blocks(blocks) == [blocks]


def test_exactly_max_blocks_single_batch():
    """Forty small blocks still fit one message."""
    blocks = [_section(f"Block {i}") for i in range(40)]
    assert split_blocks(blocks) == [blocks]


def test_block_count_limit():
    """Fifty blocks need two batches of at most forty."""
    blocks = [_section(f"Block {i}") for i in range(50)]
    batches = split_blocks(blocks)
    assert len(batches) == 2
    assert all(len(batch) <= 40 for batch in batches)
    assert sum(len(batch) for batch in batches) == 50


def test_custom_max_blocks():
    """A lower block limit gives evenly filled batches."""
    blocks = [_section(f"Block {i}") for i in range(15)]
    batches = split_blocks(blocks, SplitBlocksOptions(max_blocks=5))
    assert [len(batch) for batch in batches] == [5, 5, 5]


def test_options_as_camel_case_dict():
    """Options may be passed as a plain dict using JSON key names."""
    blocks = [_section(f"Block {i}") for i in range(15)]
    assert len(split_blocks(blocks, {"maxBlocks": 5})) == 3


def test_character_limit():
    """Each batch's compact JSON stays within the character limit."""
    blocks = [_section("x" * 3000) for _ in range(10)]
    batches = split_blocks(blocks)
    assert len(batches) > 1
    assert all(serialized_size(batch) <= 12000 for batch in batches)
    assert len(_flatten(batches)) == 10


def test_custom_character_limit():
    """A small character limit forces many small batches."""
    blocks = [_section(f"Some text for block {i}") for i in range(20)]
    batches = split_blocks(blocks, SplitBlocksOptions(max_characters=200))
    assert all(serialized_size(batch) <= 200 for batch in batches)
    assert _flatten(batches) == blocks


def test_order_preserved():
    """Concatenating the batches reproduces the input order."""
    blocks = [_section(f"Block {i}") for i in range(60)]
    assert _flatten(split_blocks(blocks)) == blocks


def test_mixed_block_types_fit_one_batch():
    """Different block kinds are batched together when they fit."""
    blocks = [
        HeaderBlock(text=PlainTextObject(text="Title")),
        _section("Body"),
        DividerBlock(),
        RichTextBlock(elements=[_rich_section("rich")]),
        ImageBlock(image_url="https://example.com/a.png", alt_text="a"),
    ]
    batches = split_blocks(blocks)
    assert len(batches) == 1
    assert len(batches[0]) == 5


def test_batches_are_stable_when_resplit():
    """Splitting an already split batch changes nothing."""
    blocks = [_section("x" * 2000) for _ in range(30)]
    for batch in split_blocks(blocks):
        assert split_blocks(batch) == [batch]


# Oversized blocks


def test_rich_text_split_between_containers():
    """An oversized rich_text block is divided at container boundaries."""
    sections = [_rich_section(f"{i}" + "y" * 900) for i in range(10)]
    block = RichTextBlock(elements=sections)
    batches = split_blocks([block], SplitBlocksOptions(max_characters=5000))
    assert len(batches) > 1
    assert all(serialized_size(batch) <= 5000 for batch in batches)
    assert all(isinstance(b, RichTextBlock) for b in _flatten(batches))
    regrouped = [element for b in _flatten(batches) for element in b.elements]
    assert regrouped == sections


def test_code_block_split_by_lines():
    """An oversized code container is split between lines."""
    code = "\n".join(f"line {i:03d} " + "x" * 10 for i in range(100))
    block = RichTextBlock(
        elements=[RichTextPreformatted(elements=[RichTextText(text=code)], border=1)]
    )
    batches = split_blocks([block], SplitBlocksOptions(max_characters=500))
    assert len(batches) > 1
    assert all(serialized_size(batch) <= 500 for batch in batches)
    fragments = [element for b in _flatten(batches) for element in b.elements]
    assert all(isinstance(f, RichTextPreformatted) and f.border == 1 for f in fragments)
    assert "\n".join(f.elements[0].text for f in fragments) == code


def test_single_long_code_line_kept_whole():
    """A code line that alone exceeds the limit is not cut."""
    block = RichTextBlock(
        elements=[RichTextPreformatted(elements=[RichTextText(text="q" * 1000)])]
    )
    batches = split_blocks([block], SplitBlocksOptions(max_characters=500))
    assert batches == [[block]]


def test_split_rich_text_block_keeps_block_id_on_first():
    """Only the first piece carries the original block_id."""
    block = RichTextBlock(
        block_id="rt-1",
        elements=[_rich_section("a" * 300), _rich_section("b" * 300)],
    )
    pieces = split_rich_text_block(block, 400)
    assert len(pieces) == 2
    assert pieces[0].block_id == "rt-1"
    assert pieces[1].block_id is None


@pytest.mark.parametrize("length", range(100, 130))
def test_block_id_counted_when_packing_first_piece(length):
    """Containers packed up to the limit leave room for the kept block_id."""
    block = RichTextBlock(
        block_id="keep-me",
        elements=[_rich_section(f"{i}" + "w" * length) for i in range(3)],
    )
    batches = split_blocks([block], SplitBlocksOptions(max_characters=400))
    assert all(serialized_size(batch) <= 400 for batch in batches)
    pieces = _flatten(batches)
    assert pieces[0].block_id == "keep-me"
    assert [element for piece in pieces for element in piece.elements] == block.elements


def test_oversized_atomic_block_sent_alone(caplog):
    """A table too large for any message goes alone, with a warning."""
    cell = RichTextBlock(elements=[_rich_section("z" * 300)])
    table = TableBlock(rows=[[cell, cell]])
    blocks = [_section("before"), table, _section("after")]

    with caplog.at_level(logging.WARNING, logger="slack_markdown_blocks.splitter"):
        batches = split_blocks(blocks, SplitBlocksOptions(max_characters=200))

    assert batches == [[blocks[0]], [table], [blocks[2]]]
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert warnings[0].block_type == "table"
    assert warnings[0].max_characters == 200


# Long section and header text


def test_long_section_text_split():
    """Section text over 3000 characters becomes several sections."""
    block = _section(
        "x" * 3500,
        block_id="s-1",
        accessory={"type": "button", "text": {"type": "plain_text", "text": "Go"}},
    )
    [batch] = split_blocks([block])
    assert [len(b.text.text) for b in batch] == [3000, 500]
    assert batch[0].block_id == "s-1"
    assert batch[0].accessory == block.accessory
    assert batch[1].block_id is None
    assert batch[1].accessory is None
    assert batch[1].text.type == "mrkdwn"


def test_long_section_text_splits_at_space():
    """Word boundaries near the limit are used as break points."""
    block = _section("word " * 700)
    [batch] = split_blocks([block])
    assert len(batch) == 2
    assert all(len(b.text.text) <= 3000 for b in batch)
    assert not batch[0].text.text.endswith(" ")


def test_long_header_text_overflows_to_section():
    """Header text over 150 characters continues in a plain_text section."""
    block = HeaderBlock(text=PlainTextObject(text="H" * 200))
    [batch] = split_blocks([block])
    assert isinstance(batch[0], HeaderBlock)
    assert len(batch[0].text.text) == 150
    assert batch[1] == SectionBlock(text=TextObject(type="plain_text", text="H" * 50))


@pytest.mark.parametrize("text", ["H" * 150, "short"])
def test_header_within_limit_untouched(text):
    """Headers within the limit pass through unchanged."""
    block = HeaderBlock(text=PlainTextObject(text=text))
    assert split_blocks([block]) == [[block]]


# Fallback text


def test_split_blocks_with_text_pairs_batches():
    """Each batch is paired with a non-empty plain-text rendering."""
    blocks = [_section(f"Block {i}") for i in range(45)]
    results = split_blocks_with_text(blocks)
    assert len(results) == 2
    assert [r.blocks for r in results] == split_blocks(blocks)
    assert results[0].text.startswith("Block 0\n\nBlock 1")
    assert all(r.text for r in results)
