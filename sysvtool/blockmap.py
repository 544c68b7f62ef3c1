"""
Logical-to-physical block mapping.

Slots 0-9 of ``Inode.addr`` address the first ten blocks directly.  Slot 10
points at a table of 256 block numbers (logical blocks 10..265), slot 11 at a
table of 256 such tables (266..65801).  Slot 12 would be triple indirection,
which is not supported.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from .byteorder import be32
from .errors import IndirectionLimitExceeded
from .image import BLOCK_SIZE
from .inode import DOUBLE_SLOT, NDIRECT, SINGLE_SLOT, Inode

log = logging.getLogger(__name__)

NINDIR = BLOCK_SIZE // 4                  # 256 block numbers per table
SINGLE_START = NDIRECT                    # 10
DOUBLE_START = SINGLE_START + NINDIR      # 266
DOUBLE_END = DOUBLE_START + NINDIR * NINDIR  # 65802


class BlockReader(Protocol):
    def read_block(self, block: int) -> bytes: ...


@dataclass(frozen=True)
class BlockPlan:
    """Which inode slot to start from, then which entry to take per table."""
    slot: int
    path: Tuple[int, ...]


def plan_block(index: int) -> BlockPlan:
    if index < 0:
        raise ValueError(f"negative logical block {index}")
    if index < SINGLE_START:
        return BlockPlan(index, ())
    if index < DOUBLE_START:
        return BlockPlan(SINGLE_SLOT, (index - SINGLE_START,))
    if index < DOUBLE_END:
        rel = index - DOUBLE_START
        return BlockPlan(DOUBLE_SLOT, (rel // NINDIR, rel % NINDIR))
    raise IndirectionLimitExceeded(index)


def indirect_entry(reader: BlockReader, table: int, entry: int) -> int:
    """Entry `entry` of the indirect block `table` (256 big-endian words)."""
    return be32(reader.read_block(table), entry * 4)


def resolve_block(reader: BlockReader, inode: Inode, index: int) -> Optional[int]:
    """
    Physical block holding logical block `index` of `inode`, or None at EOF.

    A zero address at any level means the block was never allocated, which
    ends the file.
    """
    plan = plan_block(index)
    block = inode.addr[plan.slot]
    trail = [f"inode_block_read({index})"]
    for entry in plan.path:
        if block == 0:
            break
        table = block
        block = indirect_entry(reader, table, entry)
        trail.append(f"{table}({entry})")
    if block == 0:
        log.debug("%s => EOF", " => ".join(trail))
        return None
    trail.append(f"disk_block_read({block})")
    log.debug("%s", " => ".join(trail))
    return block


def read_file_block(reader: BlockReader, inode: Inode, index: int) -> Optional[bytes]:
    """Contents of logical block `index`, or None past the allocated extent."""
    block = resolve_block(reader, inode, index)
    if block is None:
        return None
    return reader.read_block(block)
