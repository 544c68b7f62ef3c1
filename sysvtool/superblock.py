from __future__ import annotations

import argparse
import logging
import struct
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from .byteorder import be32, swap_word
from .errors import BadMagicError, UnixToolError
from .image import BLOCK_SIZE, DiskImage

log = logging.getLogger(__name__)

SUPERBLOCK_BLOCK = 1
# FsMAGIC 0xFD187E20 as stored by the 68K host, compared without swapping
SUPERBLOCK_MAGIC = 0x207E18FD

NICFREE = 50   # free block list slots
NICINOD = 100  # free inode list slots

# Everything up to the magic number, big-endian and packed
SUPERBLOCK_FORMAT = f">HIH{NICFREE}IH{NICINOD}H4BI4HIH6s6s572x"
MAGIC_OFF = 1016
TYPE_OFF = 1020
assert struct.calcsize(SUPERBLOCK_FORMAT) == MAGIC_OFF


@dataclass(frozen=True)
class SuperBlock:
    isize: int                # blocks in the i-list
    fsize: int                # blocks in the volume
    nfree: int
    free: Tuple[int, ...]
    ninode: int
    inode: Tuple[int, ...]
    flock: int
    ilock: int
    fmod: int
    readonly: int
    time: int                 # last superblock update
    dinfo: Tuple[int, ...]
    tfree: int                # total free blocks
    tinode: int               # total free inodes
    fname: bytes
    fpack: bytes
    magic: int
    type: int

    @property
    def volume_name(self) -> str:
        return self.fname.rstrip(b"\0").decode("latin-1")

    @property
    def pack_name(self) -> str:
        return self.fpack.rstrip(b"\0").decode("latin-1")


def parse_superblock(raw: bytes) -> SuperBlock:
    """Decode a 1024-byte superblock.  The magic number is not checked here."""
    if len(raw) != BLOCK_SIZE:
        raise ValueError(f"superblock must be {BLOCK_SIZE} bytes, got {len(raw)}")
    v = struct.unpack_from(SUPERBLOCK_FORMAT, raw)
    isize, fsize, nfree = v[0:3]
    free = v[3:3 + NICFREE]
    pos = 3 + NICFREE
    ninode = v[pos]
    inode = v[pos + 1:pos + 1 + NICINOD]
    pos += 1 + NICINOD
    flock, ilock, fmod, readonly, stamp = v[pos:pos + 5]
    dinfo = v[pos + 5:pos + 9]
    tfree, tinode, fname, fpack = v[pos + 9:pos + 13]
    magic = swap_word(be32(raw, MAGIC_OFF))
    fstype = be32(raw, TYPE_OFF)
    return SuperBlock(
        isize=isize, fsize=fsize, nfree=nfree, free=tuple(free),
        ninode=ninode, inode=tuple(inode),
        flock=flock, ilock=ilock, fmod=fmod, readonly=readonly, time=stamp,
        dinfo=tuple(dinfo), tfree=tfree, tinode=tinode,
        fname=fname, fpack=fpack, magic=magic, type=fstype,
    )


def load_superblock(image: DiskImage) -> SuperBlock:
    """Read block 1 and refuse the image unless the magic number matches."""
    sb = parse_superblock(image.read_block(SUPERBLOCK_BLOCK))
    if sb.magic != SUPERBLOCK_MAGIC:
        raise BadMagicError(sb.magic)
    log.info("%s: superblock ok, %d blocks, %d i-list blocks", image.name, sb.fsize, sb.isize)
    return sb


def print_superblock_summary(sb: SuperBlock) -> None:
    print("[SUPERBLOCK @ block 1]")
    print(f"  Volume Name   : {sb.volume_name}")
    print(f"  Pack Name     : {sb.pack_name}")
    print(f"  Volume Size   : {sb.fsize} blocks")
    print(f"  I-list Size   : {sb.isize} blocks")
    print(f"  Free Blocks   : {sb.tfree}")
    print(f"  Free Inodes   : {sb.tinode}")
    print(f"  Last Update   : {time.ctime(sb.time).strip()}")
    print(f"  Flags         : flock={sb.flock} ilock={sb.ilock} fmod={sb.fmod} readonly={sb.readonly}")
    print(f"  Magic         : 0x{sb.magic:08X}")
    print(f"  Type          : {sb.type}")


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Check and summarise the superblock of a SysV band image")
    parser.add_argument("image", type=Path, help="Path to the band image")
    args = parser.parse_args(argv)

    try:
        with DiskImage.open(args.image) as image:
            sb = load_superblock(image)
    except FileNotFoundError:
        sys.exit(f"Error: image '{args.image}' not found")
    except UnixToolError as exc:
        sys.exit(f"unixtool: {exc}")

    print_superblock_summary(sb)


if __name__ == "__main__":
    main()
