"""Eager validation of mention map IDs, run once before conversion."""

import re

from slack_markdown_blocks.models.options import MarkdownToBlocksOptions


class InvalidMentionError(ValueError):
    """A mention map entry holds an ID that does not match its family's format."""

    def __init__(self, family: str, name: str, identifier: str, requirement: str):
        self.family = family
        self.name = name
        self.identifier = identifier
        super().__init__(
            f"Invalid {family} ID for '{name}': '{identifier}'. {requirement}"
        )


# (Mentions attribute, family label, pattern, requirement message)
_ID_RULES: tuple[tuple[str, str, re.Pattern[str], str], ...] = (
    (
        "users",
        "User",
        re.compile(r"[UW][A-Z0-9]+"),
        "Must start with U or W and contain only alphanumeric characters.",
    ),
    (
        "channels",
        "Channel",
        re.compile(r"C[A-Z0-9]+"),
        "Must start with C and contain only alphanumeric characters.",
    ),
    (
        "user_groups",
        "User Group",
        re.compile(r"S[A-Z0-9]+"),
        "Must start with S and contain only alphanumeric characters.",
    ),
    (
        "teams",
        "Team",
        re.compile(r"T[A-Z0-9]+"),
        "Must start with T and contain only alphanumeric characters.",
    ),
)


def validate_options(options: MarkdownToBlocksOptions | None) -> None:
    """Check every mention ID against its family's format.

    Raises:
        InvalidMentionError: On the first ID that does not match.
    """
    if options is None:
        return
    for attribute, family, pattern, requirement in _ID_RULES:
        for name, identifier in getattr(options.mentions, attribute).items():
            if not pattern.fullmatch(identifier):
                raise InvalidMentionError(family, name, identifier, requirement)
