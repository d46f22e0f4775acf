from __future__ import annotations

from typing import Optional, Tuple

from .archive import Archive, File
from .constants import MARKER, MARKER_END, MIN_MARKER_LEN, NEWLINE_MARKER


def parse(text: str) -> Archive:
    """Parse txtar ``text`` into an :class:`Archive`.

    Every input is a valid archive. Lines before the first marker line
    ``-- NAME --`` become the comment; each marker starts a file whose data
    runs until the next marker or the end of the input. A missing newline at
    the end of the input is treated as present.
    """
    found = _find_marker(text, 0)
    if found is None:
        return Archive(comment=close_last_line(text))

    start, name, after = found
    archive = Archive(comment=text[:start])
    while True:
        found = _find_marker(text, after)
        if found is None:
            archive.files.append(File(name, close_last_line(text[after:])))
            return archive
        start, next_name, next_after = found
        archive.files.append(File(name, text[after:start]))
        name, after = next_name, next_after


def _find_marker(text: str, pos: int) -> Optional[Tuple[int, str, int]]:
    """Find the next marker line at or after the line starting at ``pos``.

    Returns (marker_start, name, offset_after_marker_line) or None.
    """
    i = pos
    while True:
        if text.startswith(MARKER, i):
            nl = text.find("\n", i)
            if nl < 0:
                stop = after = len(text)
            else:
                stop, after = nl, nl + 1
            name = _marker_name(text, i, stop)
            if name is not None:
                return i, name, after
        j = text.find(NEWLINE_MARKER, i)
        if j < 0:
            return None
        i = j + 1


def _marker_name(text: str, start: int, stop: int) -> Optional[str]:
    # text[start:stop] is one line without its "\n"
    if stop > start and text[stop - 1] == "\r":
        stop -= 1
    if stop - start < MIN_MARKER_LEN:
        return None
    if not text.startswith(MARKER, start, stop) or not text.endswith(MARKER_END, start, stop):
        return None
    return text[start + len(MARKER):stop - len(MARKER_END)].strip()


def close_last_line(s: str) -> str:
    """Return ``s`` with a closing newline added when its last line lacks one."""
    if s and not s.endswith("\n"):
        return s + "\n"
    return s
