"""Scroll offset arithmetic for fixed-height panes.

A scroll offset is the index of the first visible line. All functions here
are pure and safe to call from renderers and state transitions alike.
"""


def max_scroll(content_length: int, viewport_height: int) -> int:
    """Largest valid offset for content of the given length."""
    if viewport_height <= 0:
        return 0
    return max(0, content_length - viewport_height)


def clamp_scroll(offset: int, content_length: int, viewport_height: int) -> int:
    return min(max(0, offset), max_scroll(content_length, viewport_height))


def reconcile_scroll(
    cursor_index: int,
    content_length: int,
    viewport_height: int,
    current_offset: int,
) -> int:
    """Return the offset that keeps `cursor_index` visible.

    Scrolls up when the cursor is above the window, down when it is below,
    and otherwise keeps the current offset. The result is always within
    [0, max_scroll(content_length, viewport_height)]. A non-positive viewport
    shows nothing and always yields 0.

    Example:
        >>> reconcile_scroll(10, 20, 5, 0)
        6
    """
    if viewport_height <= 0:
        return 0

    if cursor_index < current_offset:
        offset = cursor_index
    elif cursor_index >= current_offset + viewport_height:
        offset = cursor_index - viewport_height + 1
    else:
        offset = current_offset

    return clamp_scroll(offset, content_length, viewport_height)


def visible_window(
    content_length: int, viewport_height: int, offset: int
) -> tuple[int, int]:
    """Return the [start, end) slice bounds shown for the given offset."""
    if viewport_height <= 0:
        return (0, 0)
    start = clamp_scroll(offset, content_length, viewport_height)
    return (start, min(content_length, start + viewport_height))
