"""Slack Block Kit block models.

Covers the block types produced by the converter (header, section, image,
divider, rich_text, table) plus context blocks, which callers may mix in
before splitting. Optional fields default to None and are dropped on
serialization, so the JSON size measured by the splitter matches what Slack
receives.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from slack_markdown_blocks.models.elements import RichTextSectionElement


class TextObject(BaseModel):
    """A composition text object (mrkdwn or plain_text)."""

    type: Literal["mrkdwn", "plain_text"]
    text: str
    emoji: bool | None = None
    verbatim: bool | None = None


class PlainTextObject(BaseModel):
    type: Literal["plain_text"] = "plain_text"
    text: str
    emoji: bool | None = None


class ImageElement(BaseModel):
    type: Literal["image"] = "image"
    image_url: str
    alt_text: str


# Rich text containers


class RichTextSection(BaseModel):
    type: Literal["rich_text_section"] = "rich_text_section"
    elements: list[RichTextSectionElement]


class RichTextList(BaseModel):
    type: Literal["rich_text_list"] = "rich_text_list"
    style: Literal["bullet", "ordered"]
    indent: int | None = None
    offset: int | None = None  # Ordered lists: number of items preceding this run
    border: int | None = None
    elements: list[RichTextSection]


class RichTextPreformatted(BaseModel):
    type: Literal["rich_text_preformatted"] = "rich_text_preformatted"
    elements: list[RichTextSectionElement]
    border: int | None = None


class RichTextQuote(BaseModel):
    type: Literal["rich_text_quote"] = "rich_text_quote"
    elements: list[RichTextSectionElement]
    border: int | None = None


RichTextElement = Annotated[
    Union[RichTextSection, RichTextList, RichTextPreformatted, RichTextQuote],
    Field(discriminator="type"),
]


# Top-level blocks


class SectionBlock(BaseModel):
    type: Literal["section"] = "section"
    text: TextObject | None = None
    fields: list[TextObject] | None = None
    accessory: dict[str, Any] | None = None
    block_id: str | None = None


class HeaderBlock(BaseModel):
    type: Literal["header"] = "header"
    text: PlainTextObject
    block_id: str | None = None


class ImageBlock(BaseModel):
    type: Literal["image"] = "image"
    image_url: str
    alt_text: str
    title: PlainTextObject | None = None
    block_id: str | None = None


class ContextBlock(BaseModel):
    type: Literal["context"] = "context"
    elements: list[ImageElement | TextObject]
    block_id: str | None = None


class DividerBlock(BaseModel):
    type: Literal["divider"] = "divider"
    block_id: str | None = None


class RichTextBlock(BaseModel):
    type: Literal["rich_text"] = "rich_text"
    elements: list[RichTextElement]
    block_id: str | None = None


class TableColumn(BaseModel):
    width: int | None = None


class TableBlock(BaseModel):
    """Table whose rows are lists of cells; each cell is a rich_text block."""

    type: Literal["table"] = "table"
    columns: list[TableColumn] | None = None
    rows: list[list[RichTextBlock]]
    block_id: str | None = None


Block = Annotated[
    Union[
        SectionBlock,
        HeaderBlock,
        ImageBlock,
        ContextBlock,
        DividerBlock,
        RichTextBlock,
        TableBlock,
    ],
    Field(discriminator="type"),
]

_BLOCK_LIST_ADAPTER: TypeAdapter[list[Block]] = TypeAdapter(list[Block])


def parse_blocks(data: list[dict]) -> list[Block]:
    """Validate raw Block Kit dicts into block models."""
    return _BLOCK_LIST_ADAPTER.validate_python(data)


def blocks_to_dicts(blocks: list[Block]) -> list[dict]:
    """Dump blocks to JSON-ready dicts with unset optional fields omitted."""
    return [block.model_dump(mode="json", exclude_none=True) for block in blocks]


def serialized_size(value: BaseModel | list[Block]) -> int:
    """Length of the compact JSON encoding Slack would receive.

    Accepts a single model or a list of blocks.
    """
    if isinstance(value, BaseModel):
        return len(value.model_dump_json(exclude_none=True))
    return len(_BLOCK_LIST_ADAPTER.dump_json(value, exclude_none=True).decode())
