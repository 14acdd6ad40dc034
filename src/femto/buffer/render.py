"""Tab expansion and buffer/rendered column conversion."""

from __future__ import annotations

TAB_STOP = 2
TAB = 0x09
SPACE = 0x20


def render_line(chars: bytes, tab_stop: int = TAB_STOP) -> bytes:
    """Expand every tab to spaces up to the next multiple of ``tab_stop``."""

    if TAB not in chars:
        return bytes(chars)

    out = bytearray()
    for byte in chars:
        if byte == TAB:
            out.append(SPACE)
            while len(out) % tab_stop != 0:
                out.append(SPACE)
        else:
            out.append(byte)
    return bytes(out)


def buffer_to_rendered_column(chars: bytes, col: int, tab_stop: int = TAB_STOP) -> int:
    """Rendered column of the cell that buffer column ``col`` starts at."""

    rendered = 0
    for byte in chars[: max(0, col)]:
        if byte == TAB:
            rendered += (tab_stop - 1) - (rendered % tab_stop)
        rendered += 1
    return rendered


def rendered_to_buffer_column(
    chars: bytes, rendered_col: int, tab_stop: int = TAB_STOP
) -> int:
    """Buffer column whose rendered span contains ``rendered_col``.

    Not an exact inverse of :func:`buffer_to_rendered_column`: a target
    inside a tab's padding resolves to the tab itself.
    """

    current = 0
    for index, byte in enumerate(chars):
        if byte == TAB:
            current += (tab_stop - 1) - (current % tab_stop)
        current += 1
        if current > rendered_col:
            return index
    return len(chars)


__all__ = [
    "TAB_STOP",
    "render_line",
    "buffer_to_rendered_column",
    "rendered_to_buffer_column",
]
