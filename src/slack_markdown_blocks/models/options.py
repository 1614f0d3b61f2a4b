"""Caller-supplied options for conversion and splitting."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from slack_markdown_blocks.config import Settings, get_settings
from slack_markdown_blocks.models.blocks import Block


class Mentions(BaseModel):
    """Name to ID lookup tables used to resolve bare @name and #name tokens.

    Read-only for the duration of a conversion.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")

    users: dict[str, str] = Field(default_factory=dict)  # username -> U/W ID
    channels: dict[str, str] = Field(default_factory=dict)  # channel name -> C ID
    user_groups: dict[str, str] = Field(default_factory=dict, alias="userGroups")  # -> S ID
    teams: dict[str, str] = Field(default_factory=dict)  # team name -> T ID


class MarkdownToBlocksOptions(BaseModel):
    """Options for markdown_to_blocks. Accepts snake_case or camelCase keys."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")

    mentions: Mentions = Field(default_factory=Mentions)
    detect_colors: bool = Field(default=True, alias="detectColors")
    # Paragraphs and H3+ headings become mrkdwn section blocks instead of rich_text
    prefer_section_blocks: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "prefer_section_blocks", "preferSectionBlocks", "preferCompactText"
        ),
    )

    @classmethod
    def from_settings(
        cls, mentions: Mentions | None = None, settings: Settings | None = None
    ) -> "MarkdownToBlocksOptions":
        """Build options from environment-driven settings."""
        settings = settings or get_settings()
        return cls(
            mentions=mentions or Mentions(),
            detect_colors=settings.detect_colors,
            prefer_section_blocks=settings.prefer_section_blocks,
        )


DEFAULT_MAX_BLOCKS = 40
DEFAULT_MAX_CHARACTERS = 12000
DEFAULT_MAX_SECTION_CHARACTERS = 3000
DEFAULT_MAX_HEADER_CHARACTERS = 150


class SplitBlocksOptions(BaseModel):
    """Capacity limits for a single message."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")

    max_blocks: int = Field(default=DEFAULT_MAX_BLOCKS, ge=1, alias="maxBlocks")
    max_characters: int = Field(
        default=DEFAULT_MAX_CHARACTERS, ge=1, alias="maxCharacters"
    )  # Compact JSON length of the whole batch
    max_section_characters: int = Field(
        default=DEFAULT_MAX_SECTION_CHARACTERS, ge=1, alias="maxSectionCharacters"
    )
    max_header_characters: int = Field(
        default=DEFAULT_MAX_HEADER_CHARACTERS, ge=1, alias="maxHeaderCharacters"
    )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "SplitBlocksOptions":
        """Build limits from environment-driven settings."""
        settings = settings or get_settings()
        return cls(
            max_blocks=settings.max_blocks,
            max_characters=settings.max_characters,
            max_section_characters=settings.max_section_characters,
            max_header_characters=settings.max_header_characters,
        )


class SplitBlocksResult(BaseModel):
    """One postable message: plain-text fallback plus its blocks."""

    text: str
    blocks: list[Block]
