from __future__ import annotations

import io

from .archive import Archive
from .constants import MARKER, MARKER_END


def format(archive: Archive) -> str:
    """Render ``archive`` as txtar text.

    The comment and file data are written verbatim; only the marker lines are
    generated. ``parse(format(a)) == a`` holds as long as the comment and all
    data are empty or newline-terminated and no name or data line would itself
    read back as a marker line.
    """
    out = io.StringIO()
    out.write(archive.comment)
    for f in archive.files:
        out.write(MARKER)
        out.write(f.name)
        out.write(MARKER_END)
        out.write("\n")
        out.write(f.data)
    return out.getvalue()
