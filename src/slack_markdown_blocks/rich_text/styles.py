"""Style merging for nested emphasis, strong and strikethrough runs.

Nested inline formatting is flattened: each element carries the union of the
styles wrapping it instead of being nested inside a styled container.
"""

from collections.abc import Iterable

from slack_markdown_blocks.models.elements import RichTextSectionElement, RichTextStyle

_FLAGS = ("bold", "italic", "strike", "code")


def normalize_style(style: RichTextStyle | None) -> RichTextStyle | None:
    """Keep only true flags; return None when nothing is set."""
    if style is None or style.is_empty():
        return None
    return RichTextStyle(**{flag: True for flag in _FLAGS if getattr(style, flag)})


def merge_styles(
    inner: RichTextStyle | None, outer: RichTextStyle | None
) -> RichTextStyle | None:
    """Overlay ``outer`` on ``inner``.

    Flags set on the outer style win; flags it leaves unset keep the inner value.
    """
    merged: dict[str, bool] = {}
    for style in (inner, outer):
        if style is None:
            continue
        for flag in _FLAGS:
            value = getattr(style, flag)
            if value is not None:
                merged[flag] = value
    return normalize_style(RichTextStyle(**merged))


def apply_style(
    elements: Iterable[RichTextSectionElement], style: RichTextStyle | None
) -> list[RichTextSectionElement]:
    """Return copies of ``elements`` with ``style`` merged into each one."""
    styled: list[RichTextSectionElement] = []
    for element in elements:
        merged = merge_styles(element.style, style)
        if merged == element.style:
            styled.append(element)
        else:
            styled.append(element.model_copy(update={"style": merged}))
    return styled
