from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import Iterable, List, TextIO, Tuple, Union

from .archive import Archive, File
from .constants import ENCODING
from .errors import NotTextError
from .formatter import format
from .parser import close_last_line, parse


PathLike = Union[str, "os.PathLike[str]"]


def load(fp: TextIO) -> Archive:
    """Read ``fp`` to the end and parse it."""
    return parse(fp.read())


def loads(text: str) -> Archive:
    return parse(text)


def dump(archive: Archive, fp: TextIO) -> None:
    fp.write(format(archive))


def dumps(archive: Archive) -> str:
    return format(archive)


def read_archive(path: PathLike) -> Archive:
    """Read and parse the archive stored at ``path``.

    The file is decoded as UTF-8 without newline translation so that CRLF
    content survives untouched.
    """
    with open(path, "r", encoding=ENCODING, newline="") as fh:
        return load(fh)


def _target_mode(dst: Path) -> int:
    # mkstemp creates 0600 files; keep an existing archive's mode, else honor the umask
    try:
        return stat.S_IMODE(os.stat(dst).st_mode)
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_archive(path: PathLike, archive: Archive) -> None:
    """Write ``archive`` to ``path``, replacing any existing file.

    The text goes to a temporary file in the same directory first and is then
    moved over ``path``, so readers never observe a partially written archive.
    """
    dst = Path(path)
    text = format(archive)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{dst.name}.", suffix=".tmp", dir=str(dst.parent))
    try:
        os.chmod(tmp_name, _target_mode(dst))
        with os.fdopen(fd, "w", encoding=ENCODING, newline="") as fh:
            fh.write(text)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, str(dst))
    except BaseException:
        try:
            os.remove(tmp_name)
        except FileNotFoundError:
            pass
        raise


def read_text_file(path: PathLike) -> str:
    try:
        with open(path, "r", encoding=ENCODING, newline="") as fh:
            return fh.read()
    except UnicodeDecodeError as exc:
        raise NotTextError(f"{path}: not {ENCODING} text ({exc.reason})") from exc


def collect_inputs(inputs: Iterable[PathLike]) -> List[Tuple[str, str]]:
    """Expand files and directories into (archive name, filesystem path) pairs.

    A file is stored under its base name; a directory contributes every regular
    file beneath it, named relative to the directory's parent and walked in
    sorted order. "." and ".." take the name of the directory they resolve to.
    Symlinked directories are not followed.
    """
    out: List[Tuple[str, str]] = []
    for raw in inputs:
        p = Path(raw)
        if p.is_dir():
            base = p.name
            if base in ("", ".", ".."):
                base = p.resolve().name
            for root, dirnames, filenames in os.walk(str(p)):
                dirnames[:] = sorted(d for d in dirnames if not os.path.islink(os.path.join(root, d)))
                for fn in sorted(filenames):
                    full = os.path.join(root, fn)
                    if not os.path.isfile(full):
                        continue
                    parts = os.path.relpath(full, start=str(p)).split(os.sep)
                    if base:
                        parts.insert(0, base)
                    out.append(("/".join(parts), full))
        else:
            out.append((p.name, str(p)))
    return out


def archive_from_paths(inputs: Iterable[PathLike], *, comment: str = "") -> Archive:
    """Build an archive holding the text files found under ``inputs``.

    File data and the comment get a closing newline when they lack one, so
    the result formats to text that parses back to the same archive. Raises
    NotTextError when a file does not decode as UTF-8 and OSError when an
    input cannot be read.
    """
    archive = Archive(comment=close_last_line(comment))
    for name, full in collect_inputs(inputs):
        archive.files.append(File(name, close_last_line(read_text_file(full))))
    return archive
