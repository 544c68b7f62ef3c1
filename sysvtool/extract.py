"""Copy a file out of the image."""

from __future__ import annotations

import io
import logging
from typing import BinaryIO, Callable, Optional

from .blockmap import read_file_block
from .errors import ImageIOError, NotRegularFileError, UnexpectedEndOfFile
from .image import BLOCK_SIZE, DiskImage
from .inode import Inode

log = logging.getLogger(__name__)


def extract(
    image: DiskImage,
    inode: Inode,
    sink: BinaryIO,
    progress: Optional[Callable[[int], object]] = None,
) -> int:
    """
    Write exactly ``inode.size`` bytes of the file to `sink`.

    Blocks are copied in logical order; the last one is cut to the bytes
    that belong to the file.  An unallocated block before the end of the
    file raises UnexpectedEndOfFile, after whatever came before it has
    already been written.
    """
    if not inode.is_regular:
        raise NotRegularFileError(f"inode {inode.number}")

    log.info("Copying %d bytes from inode %d", inode.size, inode.number)
    written = 0
    index = 0
    while written < inode.size:
        chunk = min(BLOCK_SIZE, inode.size - written)
        data = read_file_block(image, inode, index)
        if data is None:
            raise UnexpectedEndOfFile(written, inode.size)
        try:
            sink.write(data[:chunk])
        except OSError as exc:
            raise ImageIOError(f"write failed after {written} bytes: {exc}") from exc
        written += chunk
        index += 1
        if progress is not None:
            progress(chunk)

    log.info("Wrote %d of %d bytes", written, inode.size)
    return written


def read_file(image: DiskImage, inode: Inode) -> bytes:
    buf = io.BytesIO()
    extract(image, inode, buf)
    return buf.getvalue()
