from __future__ import annotations

import re

from .errors import UnsafePathError


_DRIVE_RE = re.compile(r"^[A-Za-z]:")


def norm_path(name: str) -> str:
    """Map an archive file name to a canonical forward-slash relative path.

    Names are opaque strings inside an archive; this is only applied when a
    name has to become a location on disk.

    Rules:
    - Convert backslashes to slashes
    - Strip leading/trailing slashes
    - Remove empty and '.' segments
    - Reject '..' segments, drive letters and names that normalize to nothing
    """
    p = name.replace("\\", "/")
    if _DRIVE_RE.match(p):
        raise UnsafePathError(f"Name may not carry a drive letter: {name!r}")
    parts = [q for q in p.strip("/").split("/") if q not in ("", ".")]
    for q in parts:
        if q == "..":
            raise UnsafePathError(f"Name may not contain '..': {name!r}")
    if not parts:
        raise UnsafePathError(f"Name does not denote a file: {name!r}")
    return "/".join(parts)
