"""
On-disk inode decoding.

An inode is a 64-byte record in the i-list, which starts so that inode
``n`` lives at byte ``0x7C0 + n * 0x40`` of the image (inode 1 is the first
record of block 2).  Layout, all big-endian::

    0   mode     halfword   type nibble + 12 permission bits
    2   nlink    halfword
    4   uid      halfword
    6   gid      halfword
    8   size     word
    12  addr     40 bytes   13 three-byte block addresses + 1 pad byte
    52  atime    word
    56  mtime    word
    60  ctime    word
"""

from __future__ import annotations

import enum
import logging
import struct
from dataclasses import dataclass
from typing import Tuple, Union

from .byteorder import addr3
from .image import DiskImage

log = logging.getLogger(__name__)

INODE_TABLE_BASE = 0x7C0
INODE_SIZE = 0x40
ROOT_INODE = 2
NADDR = 13
NDIRECT = 10
SINGLE_SLOT = 10
DOUBLE_SLOT = 11

INODE_FORMAT = ">HHHHI40sIII"
assert struct.calcsize(INODE_FORMAT) == INODE_SIZE


class FileType(enum.IntEnum):
    NONE = 0
    FIFO = 1
    CHAR = 2
    DIR = 4
    BLOCK = 6
    FILE = 8


def decode_mode(mode: int) -> Tuple[int, Union[FileType, int]]:
    """
    Split the on-disk mode halfword into (permission bits, object type).

    Seen as the raw host-order halfword the permissions are its high byte
    shifted down plus its low nibble shifted up, and the type is bits 4-7;
    in big-endian terms that is the low 12 bits and the top nibble.
    """
    perms = mode & 0o7777
    code = (mode >> 12) & 0xF
    try:
        ftype: Union[FileType, int] = FileType(code)
    except ValueError:
        ftype = code
    return perms, ftype


def inode_offset(number: int) -> int:
    if number < 1:
        raise ValueError(f"inode numbers start at 1, got {number}")
    return INODE_TABLE_BASE + number * INODE_SIZE


@dataclass(frozen=True)
class Inode:
    number: int
    mode: int                          # permission bits only
    type: Union[FileType, int]
    nlink: int
    uid: int
    gid: int
    size: int
    addr: Tuple[int, ...]
    atime: int
    mtime: int
    ctime: int

    @property
    def is_dir(self) -> bool:
        return self.type == FileType.DIR

    @property
    def is_regular(self) -> bool:
        return self.type == FileType.FILE


def parse_inode(number: int, raw: bytes) -> Inode:
    """Decode one 64-byte inode record."""
    (mode, nlink, uid, gid, size, addr_bytes,
     atime, mtime, ctime) = struct.unpack_from(INODE_FORMAT, raw)
    perms, ftype = decode_mode(mode)
    addr = tuple(addr3(addr_bytes, i * 3) for i in range(NADDR))
    return Inode(
        number=number, mode=perms, type=ftype,
        nlink=nlink, uid=uid, gid=gid, size=size, addr=addr,
        atime=atime, mtime=mtime, ctime=ctime,
    )


def read_inode(image: DiskImage, number: int) -> Inode:
    """Read inode `number` straight from the image (nothing is cached)."""
    offset = inode_offset(number)
    inode = parse_inode(number, image.read_at(offset, INODE_SIZE))
    log.debug("inode %d @0x%x: type %s mode %05o owner %06o:%06o size %d",
              number, offset, int(inode.type), inode.mode, inode.uid, inode.gid, inode.size)
    return inode
