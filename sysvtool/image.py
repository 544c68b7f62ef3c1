"""Block access to a band image file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Union

from .errors import ImageIOError

log = logging.getLogger(__name__)

BLOCK_SIZE = 1024


class DiskImage:
    """
    An opened band image.

    The image is only ever read.  Every offset used by the decoder is an
    absolute byte offset into this file.
    """

    def __init__(self, fh: BinaryIO, name: str = "<image>"):
        self.fh = fh
        self.name = name

    @classmethod
    def open(cls, path: Union[str, Path]) -> "DiskImage":
        # FileNotFoundError is left alone so callers can report the path
        fh = open(path, "rb")
        return cls(fh, str(path))

    def close(self) -> None:
        self.fh.close()

    def __enter__(self) -> "DiskImage":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def read_at(self, offset: int, length: int) -> bytes:
        """Read exactly `length` bytes at `offset`; zero-pad a short tail."""
        try:
            self.fh.seek(offset)
            data = self.fh.read(length)
        except OSError as exc:
            raise ImageIOError(f"{self.name}: read of {length} bytes at 0x{offset:x} failed: {exc}") from exc
        if not data:
            raise ImageIOError(f"{self.name}: offset 0x{offset:x} is beyond the end of the image")
        if len(data) < length:
            log.warning("%s: short read at 0x%x (%d of %d bytes), padding", self.name, offset, len(data), length)
            data += b"\0" * (length - len(data))
        return data

    def read_block(self, block: int) -> bytes:
        """Read one 1024-byte physical block."""
        if block < 0:
            raise ImageIOError(f"{self.name}: invalid block number {block}")
        return self.read_at(block * BLOCK_SIZE, BLOCK_SIZE)
