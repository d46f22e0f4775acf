"""
txtar: a trivial text-based file archive format.

A txtar archive is zero or more comment lines followed by a sequence of file
entries. Each entry starts with a marker line of the form "-- FILENAME --" and
is followed by zero or more content lines; the comment or file content ends at
the next marker line. Surrounding white space around the file name is
stripped. A missing newline on the final line is treated as present, and there
are no possible syntax errors.

    comment1
    comment2
    -- file1 --
    This is file 1
    -- file2 --
    this is file2

The format is meant for small trees of text files such as test fixtures: easy
to write by hand and readable in diffs. Binary data, file modes and special
files are out of scope.

- parse()/format() convert between text and Archive
- Archive.get()/find() look up files by exact name
- txtar.fileio reads and writes archives on disk; txtar.cli is the command line tool
"""

from .archive import Archive, File, find
from .formatter import format
from .parser import parse

__version__ = "0.1"

__all__ = [
    "Archive",
    "File",
    "find",
    "format",
    "parse",
    "constants",
    "fileio",
    "cli",
]
