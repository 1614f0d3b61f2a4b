"""Inline token resolution for Slack-specific syntax inside text runs.

Text is scanned left to right against an ordered list of independent
matchers. At each step the earliest match wins; matches starting at the same
offset are decided by matcher priority (list order). Recognized tokens:

1. Broadcast: <!here> | <!channel> | <!everyone>
2. User mention: <@U123>
3. Color: #1a2b3c
4. Channel: <#C123>
5. Team / subteam: <!subteam^S123>
6. Date: <!date^1620000000^{date_short}|fallback>
7. Emoji: :wave:
8. Bare mention: @name (resolved through the mention maps)
9. Bare channel: #name (resolved through the channel map)

Unresolved bare mentions and text between tokens are kept verbatim.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from slack_markdown_blocks.models.elements import (
    BROADCAST_RANGES,
    RichTextBroadcast,
    RichTextChannel,
    RichTextColor,
    RichTextDate,
    RichTextEmoji,
    RichTextSectionElement,
    RichTextStyle,
    RichTextTeam,
    RichTextText,
    RichTextUser,
    RichTextUserGroup,
)
from slack_markdown_blocks.models.options import MarkdownToBlocksOptions, Mentions
from slack_markdown_blocks.rich_text.styles import normalize_style


class TokenKind(str, Enum):
    """Token kinds in matching priority order."""

    BROADCAST = "broadcast"
    USER = "user"
    COLOR = "color"
    CHANNEL = "channel"
    TEAM = "team"
    DATE = "date"
    EMOJI = "emoji"
    BARE_MENTION = "bare_mention"
    BARE_CHANNEL = "bare_channel"


@dataclass(frozen=True)
class TokenMatcher:
    kind: TokenKind
    pattern: re.Pattern[str]


# Bare names may contain dots and dashes but never end on one, so "@jdoe."
# at the end of a sentence still resolves "jdoe".
MATCHERS: tuple[TokenMatcher, ...] = (
    TokenMatcher(TokenKind.BROADCAST, re.compile(r"<!(here|channel|everyone)>")),
    TokenMatcher(TokenKind.USER, re.compile(r"<@([\w.-]+)>")),
    TokenMatcher(TokenKind.COLOR, re.compile(r"#[0-9a-fA-F]{6}")),
    TokenMatcher(TokenKind.CHANNEL, re.compile(r"<#([\w.-]+)>")),
    TokenMatcher(TokenKind.TEAM, re.compile(r"<!subteam\^([\w.-]+)>")),
    TokenMatcher(TokenKind.DATE, re.compile(r"<!date\^(\d+)\^([^|>]+)\|([^>]+)>")),
    TokenMatcher(TokenKind.EMOJI, re.compile(r":([\w+-]+):")),
    TokenMatcher(TokenKind.BARE_MENTION, re.compile(r"@([\w.-]*\w)")),
    TokenMatcher(TokenKind.BARE_CHANNEL, re.compile(r"#([\w.-]*\w)")),
)


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    match: re.Match[str]

    @property
    def raw(self) -> str:
        return self.match.group(0)


def scan(text: str) -> Iterator[str | Token]:
    """Yield literal runs (str) and Tokens covering ``text`` in order.

    Each matcher's next match is cached and only re-searched once the cursor
    has moved past its start.
    """
    pos = 0
    pending: list[re.Match[str] | None] = [m.pattern.search(text) for m in MATCHERS]
    while pos < len(text):
        best: int | None = None
        for index, matcher in enumerate(MATCHERS):
            found = pending[index]
            if found is not None and found.start() < pos:
                found = pending[index] = matcher.pattern.search(text, pos)
            if found is None:
                continue
            if best is None or found.start() < pending[best].start():
                best = index
        if best is None:
            break
        found = pending[best]
        if found.start() > pos:
            yield text[pos : found.start()]
        yield Token(MATCHERS[best].kind, found)
        pos = found.end()
    if pos < len(text):
        yield text[pos:]


def lookup_mention(name: str, mentions: Mentions) -> RichTextSectionElement | None:
    """Resolve a bare @name: broadcast, then user, user group, team."""
    if name in BROADCAST_RANGES:
        return RichTextBroadcast(range=name)
    if mentions.users.get(name):
        return RichTextUser(user_id=mentions.users[name])
    if mentions.user_groups.get(name):
        return RichTextUserGroup(usergroup_id=mentions.user_groups[name])
    if mentions.teams.get(name):
        return RichTextTeam(team_id=mentions.teams[name])
    return None


def lookup_channel(name: str, mentions: Mentions) -> RichTextSectionElement | None:
    """Resolve a bare #name through the channel map."""
    if mentions.channels.get(name):
        return RichTextChannel(channel_id=mentions.channels[name])
    return None


def _resolve_token(
    token: Token, options: MarkdownToBlocksOptions
) -> RichTextSectionElement | None:
    """Convert a token into an element, or None to keep it as literal text."""
    match = token.match
    if token.kind is TokenKind.BROADCAST:
        return RichTextBroadcast(range=match.group(1))
    if token.kind is TokenKind.USER:
        return RichTextUser(user_id=match.group(1))
    if token.kind is TokenKind.COLOR:
        return RichTextColor(value=match.group(0)) if options.detect_colors else None
    if token.kind is TokenKind.CHANNEL:
        return RichTextChannel(channel_id=match.group(1))
    if token.kind is TokenKind.TEAM:
        return RichTextTeam(team_id=match.group(1))
    if token.kind is TokenKind.DATE:
        return RichTextDate(
            timestamp=int(match.group(1)),
            format=match.group(2),
            fallback=match.group(3),
        )
    if token.kind is TokenKind.EMOJI:
        return RichTextEmoji(name=match.group(1))
    if token.kind is TokenKind.BARE_MENTION:
        return lookup_mention(match.group(1), options.mentions)
    return lookup_channel(match.group(1), options.mentions)


def resolve_text(
    text: str,
    style: RichTextStyle | None,
    options: MarkdownToBlocksOptions,
) -> list[RichTextSectionElement]:
    """Split a text run into text and token elements, all carrying ``style``.

    Code-styled runs are returned as a single literal element without scanning.
    """
    style = normalize_style(style)
    if style is not None and style.code:
        return [RichTextText(text=text, style=style)] if text else []

    elements: list[RichTextSectionElement] = []
    for part in scan(text):
        if isinstance(part, str):
            elements.append(RichTextText(text=part, style=style))
            continue
        element = _resolve_token(part, options)
        if element is None:
            elements.append(RichTextText(text=part.raw, style=style))
        elif style is not None:
            elements.append(element.model_copy(update={"style": style}))
        else:
            elements.append(element)
    return elements
