"""
Directory scanning and path resolution.

A directory's data is a run of 16-byte entries: a big-endian inode number
followed by a 14-byte name that is zero padded but not necessarily zero
terminated.  A 1024-byte block holds 64 entries.
"""

from __future__ import annotations

import logging
import os
import struct
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .blockmap import read_file_block
from .errors import InvalidPathError, NotDirectoryError, PathNotFoundError
from .image import BLOCK_SIZE, DiskImage
from .inode import ROOT_INODE, Inode, read_inode

log = logging.getLogger(__name__)

NAME_LEN = 14
DIRENT_FORMAT = f">H{NAME_LEN}s"
DIRENT_SIZE = struct.calcsize(DIRENT_FORMAT)
DIRENTS_PER_BLOCK = BLOCK_SIZE // DIRENT_SIZE
assert DIRENT_SIZE == 16 and DIRENTS_PER_BLOCK == 64


@dataclass(frozen=True)
class DirEntry:
    inode: int
    raw_name: bytes            # all 14 bytes as stored

    @property
    def name(self) -> str:
        """Printable name; bytes outside ASCII come out as \\xNN escapes."""
        return self.raw_name.split(b"\0", 1)[0].decode("ascii", errors="backslashreplace")

    def matches(self, wanted: bytes) -> bool:
        """Fixed-width compare: `wanted` is zero padded to 14 bytes first."""
        if len(wanted) > NAME_LEN:
            return False
        return self.raw_name == wanted.ljust(NAME_LEN, b"\0")


def iter_entries(block: bytes) -> Iterator[DirEntry]:
    """Entries of one directory block, up to the first free slot."""
    for inum, raw_name in struct.iter_unpack(DIRENT_FORMAT, block[:DIRENTS_PER_BLOCK * DIRENT_SIZE]):
        if inum == 0:
            return
        yield DirEntry(inum, raw_name)


def scan_directory(image: DiskImage, directory: Inode) -> Iterator[DirEntry]:
    """
    Every entry of `directory`, block by block in logical order.

    The scan ends at the first unallocated block, or after the first block
    that was not completely filled with entries.
    """
    index = 0
    while True:
        block = read_file_block(image, directory, index)
        if block is None:
            return
        count = 0
        for entry in iter_entries(block):
            count += 1
            yield entry
        if count < DIRENTS_PER_BLOCK:
            return
        index += 1


def lookup(image: DiskImage, directory: Inode, name: str) -> Optional[DirEntry]:
    wanted = os.fsencode(name)
    if len(wanted) > NAME_LEN:
        return None
    for entry in scan_directory(image, directory):
        if entry.matches(wanted):
            return entry
    return None


def split_path(path: str) -> List[str]:
    if not path.startswith("/"):
        raise InvalidPathError(f"Invalid path: {path!r} (image paths start with '/')")
    return [part for part in path.split("/") if part]


def resolve_path(image: DiskImage, path: str) -> Inode:
    """
    Walk `path` from the root directory and return the inode it names.

    Raises PathNotFoundError when a component is missing and
    NotDirectoryError when a non-directory sits in the middle of the path.
    """
    parts = split_path(path)
    current = read_inode(image, ROOT_INODE)
    walked = ""
    for part in parts:
        if not current.is_dir:
            raise NotDirectoryError(walked or "/")
        walked += "/" + part
        log.debug("pathpart: %s (directory inode %d)", part, current.number)
        # lookup() refuses names that cannot fit in an entry
        entry = lookup(image, current, part)
        if entry is None:
            raise PathNotFoundError(walked)
        current = read_inode(image, entry.inode)
    return current


def list_directory(image: DiskImage, path: str) -> List[Tuple[DirEntry, Inode]]:
    """Entries of the directory at `path`, each with its decoded inode."""
    directory = resolve_path(image, path)
    if not directory.is_dir:
        raise NotDirectoryError(path)
    return [(entry, read_inode(image, entry.inode)) for entry in scan_directory(image, directory)]
