from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .errors import FileNotInArchive


@dataclass
class File:
    """A single file entry of an archive."""

    name: str
    data: str = ""


@dataclass
class Archive:
    """A txtar archive: a leading comment followed by an ordered list of files.

    ``files`` is a plain list owned by the caller. Duplicate names are allowed
    and entry order is significant, so lookups always return the first match.
    """

    comment: str = ""
    files: List[File] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> "Archive":
        from .parser import parse

        return parse(text)

    def to_text(self) -> str:
        from .formatter import format

        return format(self)

    def get(self, name: str) -> Optional[File]:
        """Return the first file named ``name`` or None."""
        return find(self, name)

    def contains(self, name: str) -> bool:
        return find(self, name) is not None

    def names(self) -> List[str]:
        return [f.name for f in self.files]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.contains(name)

    def __getitem__(self, name: str) -> File:
        f = find(self, name)
        if f is None:
            raise FileNotInArchive(name)
        return f

    def __iter__(self) -> Iterator[File]:
        return iter(self.files)


def find(archive: Archive, name: str) -> Optional[File]:
    """Return the first file in ``archive`` whose name equals ``name``.

    The comparison is exact; no whitespace is trimmed from ``name``.
    """
    for f in archive.files:
        if f.name == name:
            return f
    return None
