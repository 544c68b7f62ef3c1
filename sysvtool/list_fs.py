"""
list_fs.py  –  SysV band image directory lister
========================================================

Opens a TI/LMI SysV (68K) band image, checks the superblock and lists a
directory in ``ls -l`` style, or prints the whole tree below it.  Names
with bytes outside ASCII are shown as ``\\xNN`` escapes.

Usage
-----
```bash
sysv-ls band.img                 # root directory
sysv-ls band.img /usr/lib        # some other directory
sysv-ls band.img / --tree        # everything, as a tree
sysv-ls band.img /etc -v         # with a block-by-block debug trace
```

Limitations
~~~~~~~~~~~
* Read-only.  The image is opened ``rb`` and never modified.
* Files needing triple indirection (over ~64 MiB) cannot be read.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import FrozenSet, List

from .directory import DirEntry, list_directory, resolve_path, scan_directory
from .errors import NotDirectoryError, UnixToolError
from .image import DiskImage
from .inode import FileType, Inode, read_inode
from .logsetup import setup_logging
from .superblock import load_superblock

# ──────────────────────────────────────────────────────────────────────────────
# Helper functions
# ──────────────────────────────────────────────────────────────────────────────

TYPE_CHARS = {
    FileType.DIR: "d",
    FileType.CHAR: "c",
    FileType.BLOCK: "b",
    FileType.FIFO: "p",
}
PERM_BITS = [
    (0o400, "r"), (0o200, "w"), (0o100, "x"),
    (0o040, "r"), (0o020, "w"), (0o010, "x"),
    (0o004, "r"), (0o002, "w"), (0o001, "x"),
]


def format_perms(inode: Inode) -> str:
    """Ten-character permission string, e.g. ``drwxr-xr-x``."""
    out = [TYPE_CHARS.get(inode.type, "-")]
    for bit, ch in PERM_BITS:
        out.append(ch if inode.mode & bit else "-")
    return "".join(out)


def format_mtime(stamp: int) -> str:
    return time.strftime("%b %e  %Y", time.localtime(stamp))


def format_entry(entry: DirEntry, inode: Inode) -> str:
    return (f"{format_perms(inode)}  {inode.nlink:2d} {inode.uid:06o}  {inode.gid:06o}  "
            f"{inode.size:7d} {format_mtime(inode.mtime)} {entry.name}")


def _print_tree(image: DiskImage, directory: Inode, indent: str = "",
                ancestors: FrozenSet[int] = frozenset()) -> None:
    """Recursively pretty‑print the directory structure below `directory`."""
    # directories already on the way down are not entered again
    ancestors = ancestors | {directory.number}
    entries: List[DirEntry] = sorted(
        (e for e in scan_directory(image, directory) if e.name not in (".", "..")),
        key=lambda e: e.name)
    for idx, entry in enumerate(entries):
        child = read_inode(image, entry.inode)
        last = idx == len(entries) - 1
        branch = "└── " if last else "├── "
        child_indent = "    " if last else "│   "
        if child.is_dir and child.number in ancestors:
            print(f"{indent}{branch}{entry.name}/ -> [loop to inode {child.number}]")
            continue
        print(f"{indent}{branch}{entry.name}{'/' if child.is_dir else ''}")
        if child.is_dir:
            _print_tree(image, child, indent + child_indent, ancestors)


# ──────────────────────────────────────────────────────────────────────────────
# Main driver
# ──────────────────────────────────────────────────────────────────────────────

def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="List a directory of a SysV band image")
    parser.add_argument("image", type=Path, help="Path to the band image")
    parser.add_argument("path", nargs="?", default="/",
                        help="Directory inside the image (default: /)")
    parser.add_argument("-t", "--tree", action="store_true",
                        help="Print the directory tree instead of a listing")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Trace inode and block reads on stderr")
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        with DiskImage.open(args.image) as image:
            load_superblock(image)
            if args.tree:
                root = resolve_path(image, args.path)
                if not root.is_dir:
                    raise NotDirectoryError(args.path)
                print(args.path)
                _print_tree(image, root)
            else:
                listing = list_directory(image, args.path)
                print(f"{args.path}:")
                for entry, inode in listing:
                    print(format_entry(entry, inode))
    except FileNotFoundError:
        sys.exit(f"Error: image '{args.image}' not found")
    except UnixToolError as exc:
        sys.exit(f"unixtool: ls: {exc}")


if __name__ == "__main__":
    main()
