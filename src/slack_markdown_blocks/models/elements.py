"""Rich text section elements: the inline tokens inside a rich_text container.

Every element carries a ``type`` discriminant and an optional ``style``.
A style is only attached when at least one flag is true.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class RichTextStyle(BaseModel):
    """Inline style flags. Unset flags are omitted from the JSON payload."""

    bold: bool | None = None
    italic: bool | None = None
    strike: bool | None = None
    code: bool | None = None

    def is_empty(self) -> bool:
        """True when no flag is set to True."""
        return not (self.bold or self.italic or self.strike or self.code)


class RichTextText(BaseModel):
    type: Literal["text"] = "text"
    text: str
    style: RichTextStyle | None = None


class RichTextLink(BaseModel):
    type: Literal["link"] = "link"
    url: str
    text: str | None = None
    unsafe: bool | None = None
    style: RichTextStyle | None = None


class RichTextEmoji(BaseModel):
    type: Literal["emoji"] = "emoji"
    name: str  # Shortcode without colons, e.g. "wave"
    unicode: str | None = None
    style: RichTextStyle | None = None


class RichTextDate(BaseModel):
    type: Literal["date"] = "date"
    timestamp: int  # Unix seconds
    format: str  # Slack date tokens, e.g. "{date_short}"
    url: str | None = None
    fallback: str | None = None
    style: RichTextStyle | None = None


class RichTextUser(BaseModel):
    type: Literal["user"] = "user"
    user_id: str
    style: RichTextStyle | None = None


class RichTextUserGroup(BaseModel):
    type: Literal["usergroup"] = "usergroup"
    usergroup_id: str
    style: RichTextStyle | None = None


class RichTextTeam(BaseModel):
    type: Literal["team"] = "team"
    team_id: str
    style: RichTextStyle | None = None


class RichTextChannel(BaseModel):
    type: Literal["channel"] = "channel"
    channel_id: str
    style: RichTextStyle | None = None


BroadcastRange = Literal["here", "channel", "everyone"]

BROADCAST_RANGES: tuple[str, ...] = ("here", "channel", "everyone")


class RichTextBroadcast(BaseModel):
    type: Literal["broadcast"] = "broadcast"
    range: BroadcastRange
    style: RichTextStyle | None = None


class RichTextColor(BaseModel):
    type: Literal["color"] = "color"
    value: str  # "#RRGGBB"
    style: RichTextStyle | None = None


RichTextSectionElement = Annotated[
    Union[
        RichTextText,
        RichTextLink,
        RichTextEmoji,
        RichTextDate,
        RichTextUser,
        RichTextUserGroup,
        RichTextTeam,
        RichTextChannel,
        RichTextBroadcast,
        RichTextColor,
    ],
    Field(discriminator="type"),
]
