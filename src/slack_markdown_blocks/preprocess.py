"""Markdown clean-up applied before parsing.

LLM output and chat pastes often wrap a whole list line in emphasis, e.g.
``**1. Ship it**`` or ``~- dropped~``. CommonMark reads those as a paragraph
with literal list markers. Moving the marker outside the emphasis turns them
back into styled list items.
"""

import re

_WRAPPED_LIST_ITEM = re.compile(
    r"^(?P<indent>[ \t]*)"
    r"(?P<mark>\*\*|__|~~|\*|_|~)"
    r"(?P<marker>(?:\d{1,9}[.)]|[-*+])[ \t]+)"
    r"(?P<body>\S.*?)"
    r"(?P=mark)[ \t]*$"
)
_FENCE = re.compile(r"^[ \t]{0,3}(```|~~~)")


def _unwrap_list_item(match: re.Match[str]) -> str:
    mark = match.group("mark")
    if mark == "~":
        mark = "~~"  # single-tilde strikethrough is not GFM
    body = match.group("body").rstrip()
    return f"{match.group('indent')}{match.group('marker')}{mark}{body}{mark}"


def unwrap_formatted_list_items(markdown: str) -> str:
    """Move list markers out of emphasis that wraps an entire line.

    Lines inside fenced code blocks are left untouched.
    """
    lines = markdown.split("\n")
    fence: str | None = None
    for index, line in enumerate(lines):
        fence_match = _FENCE.match(line)
        if fence_match:
            if fence is None:
                fence = fence_match.group(1)
            elif fence_match.group(1) == fence:
                fence = None
            continue
        if fence is not None:
            continue
        lines[index] = _WRAPPED_LIST_ITEM.sub(_unwrap_list_item, line)
    return "\n".join(lines)
