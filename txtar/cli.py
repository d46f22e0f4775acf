from __future__ import annotations

import os
import sys
import argparse
from typing import List, Optional

from txtar.archive import Archive
from txtar.constants import ENCODING
from txtar.errors import TxtarError, UnsafePathError
from txtar.fileio import archive_from_paths, read_archive, read_text_file, write_archive
from txtar.formatter import format
from txtar.parser import parse
from txtar.pathutil import norm_path


def _open_archive(archive: str) -> Archive:
    """Parse an archive from a path, or from stdin when ``archive`` is '-'."""
    if archive == "-":
        # no newline translation, matching read_archive
        return parse(sys.stdin.buffer.read().decode(ENCODING))
    return read_archive(archive)


def _next_nonconflicting_path(path: str) -> str:
    if not os.path.lexists(path):
        return path
    base_dir = os.path.dirname(path)
    root, ext = os.path.splitext(os.path.basename(path))
    i = 1
    while True:
        candidate = os.path.join(base_dir, f"{root} ({i}){ext}")
        if not os.path.lexists(candidate):
            return candidate
        i += 1


def cmd_create(output: str, inputs: list[str], *, comment: Optional[str] = None, comment_file: Optional[str] = None, quiet: bool = False) -> bool:
    """Create an archive from filesystem paths.

    Args:
        output: Path of the archive to write, or '-' for stdout.
        inputs: Files or directories to store.
        comment: Literal comment text placed before the first file.
        comment_file: File whose contents become the comment (wins over ``comment``).
        quiet: Suppress per-file progress lines.
    """
    text = comment or ""
    if comment_file is not None:
        text = read_text_file(comment_file)
    arc = archive_from_paths(inputs, comment=text)

    if output == "-":
        sys.stdout.write(format(arc))
        sys.stdout.flush()
        return True

    if not quiet:
        for f in arc.files:
            print(f"  adding: {f.name}")
    write_archive(output, arc)
    total = sum(len(f.data) for f in arc.files)
    print(f"Done: {len(arc.files)} files, {total} characters written to {output}")
    return True


def cmd_list(archive: str) -> bool:
    """List archive files as '<characters>\\t<name>' lines, in archive order."""
    arc = _open_archive(archive)
    for f in arc.files:
        print(f"{len(f.data)}\t{f.name}")
    return True


def cmd_comment(archive: str) -> bool:
    arc = _open_archive(archive)
    sys.stdout.write(arc.comment)
    sys.stdout.flush()
    return True


def cmd_cat(archive: str, name: str) -> bool:
    """Write the data of the first file called ``name`` to stdout."""
    arc = _open_archive(archive)
    f = arc.get(name)
    if f is None:
        print(f"Error: no file named {name!r} in {archive}", file=sys.stderr)
        return False
    sys.stdout.write(f.data)
    sys.stdout.flush()
    return True


def cmd_extract(archive: str, *, outdir: str = ".", names: Optional[list[str]] = None, exists: str = "rename", quiet: bool = False) -> bool:
    """Extract files from an archive into ``outdir``.

    Archive names are mapped to relative paths with :func:`norm_path`; entries
    whose names cannot be mapped safely are skipped with a warning and make the
    command report failure, as do requested names missing from the archive.
    ``exists`` selects what happens when a destination already exists:
    overwrite, skip, rename (append ' (n)' before the extension) or fail.
    """
    arc = _open_archive(archive)
    files = arc.files
    ok = True
    if names:
        wanted = set(names)
        files = [f for f in files if f.name in wanted]
        present = {f.name for f in files}
        for name in names:
            if name not in present:
                print(f"Warning: no file named {name!r} in {archive}", file=sys.stderr)
                ok = False

    written = skipped = renamed = refused = 0
    for f in files:
        try:
            rel = norm_path(f.name)
        except UnsafePathError as exc:
            print(f"Warning: {exc}; skipping", file=sys.stderr)
            refused += 1
            ok = False
            continue

        dst = os.path.join(outdir or ".", *rel.split("/"))
        if os.path.isdir(dst):
            raise RuntimeError(f"Cannot overwrite directory with file: {dst}")
        actual_dst = dst
        if os.path.lexists(dst):
            if exists == "skip":
                if not quiet:
                    print(f"    skipping: {f.name} (exists)")
                skipped += 1
                continue
            if exists == "fail":
                raise FileExistsError(f"Destination exists: {dst}")
            if exists == "rename":
                actual_dst = _next_nonconflicting_path(dst)

        os.makedirs(os.path.dirname(actual_dst) or ".", exist_ok=True)
        with open(actual_dst, "w", encoding=ENCODING, newline="") as fh:
            fh.write(f.data)
        written += 1
        if not quiet:
            print(f"  extracting: {f.name}")
        if actual_dst != dst:
            renamed += 1
            if not quiet:
                print(f"       note: renamed to {actual_dst}")

    print(f"Done: {written} written, {skipped} skipped, {renamed} renamed, {refused} refused")
    return ok


def cmd_fmt(archive: str, *, check: bool = False) -> bool:
    """Rewrite ``archive`` in canonical form.

    With ``check`` nothing is written and the result tells whether the file
    already is canonical.
    """
    with open(archive, "r", encoding=ENCODING, newline="") as fh:
        text = fh.read()
    arc = parse(text)
    canonical = format(arc)
    if canonical == text:
        if not check:
            print(f"{archive}: already formatted")
        return True
    if check:
        print(f"{archive}: needs formatting")
        return False
    write_archive(archive, arc)
    print(f"{archive}: formatted")
    return True


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="txtar",
        description="txtar plain-text archive tool",
        epilog="Archives are UTF-8 text: a comment followed by '-- NAME --' file sections.",
    )
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_create = sub.add_parser("create", help="Create archive")
    ap_create.add_argument("output", help="Output archive path ('-' for stdout)")
    ap_create.add_argument("inputs", nargs="+", help="Input files/directories")
    grp = ap_create.add_mutually_exclusive_group()
    grp.add_argument("--comment", help="Comment text placed before the first file")
    grp.add_argument("--comment-file", help="Read the comment from this file")
    ap_create.add_argument("--quiet", help="limit outputs to summaries only", action="store_true")

    ap_list = sub.add_parser("list", help="List archive files")
    ap_list.add_argument("archive", help="Archive path ('-' for stdin)")

    ap_comment = sub.add_parser("comment", help="Print the archive comment")
    ap_comment.add_argument("archive", help="Archive path ('-' for stdin)")

    ap_cat = sub.add_parser("cat", help="Print the contents of one file")
    ap_cat.add_argument("archive", help="Archive path ('-' for stdin)")
    ap_cat.add_argument("name", help="File name as written in the archive")

    ap_extract = sub.add_parser("extract", help="Extract files")
    ap_extract.add_argument("archive", help="Archive path ('-' for stdin)")
    ap_extract.add_argument("names", nargs="*", help="Specific file names to extract")
    ap_extract.add_argument("--outdir", default=".", help="Output directory")
    ap_extract.add_argument("--quiet", help="limit outputs to summaries only", action="store_true")
    ap_extract.add_argument(
        "--exists",
        choices=["overwrite", "skip", "rename", "fail"],
        default="rename",
        help=(
            "What to do if a destination file exists: overwrite, skip, "
            "rename (append ' (n)' before extension), or fail (abort). Default: rename"
        ),
    )

    ap_fmt = sub.add_parser("fmt", help="Rewrite an archive in canonical form")
    ap_fmt.add_argument("archive", help="Archive path")
    ap_fmt.add_argument("--check", action="store_true", help="Only report whether the archive needs formatting")

    args = ap.parse_args(argv)
    try:
        if args.cmd == "create":
            success = cmd_create(args.output, args.inputs, comment=args.comment, comment_file=args.comment_file, quiet=args.quiet)
        elif args.cmd == "list":
            success = cmd_list(args.archive)
        elif args.cmd == "comment":
            success = cmd_comment(args.archive)
        elif args.cmd == "cat":
            success = cmd_cat(args.archive, args.name)
        elif args.cmd == "extract":
            success = cmd_extract(args.archive, outdir=args.outdir, names=args.names, exists=args.exists, quiet=args.quiet)
        elif args.cmd == "fmt":
            success = cmd_fmt(args.archive, check=args.check)
        else:
            raise RuntimeError("Unknown command")
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except (ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except (TxtarError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
