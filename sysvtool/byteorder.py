"""
Byte-order helpers.

The band images were written by a 68K host, so every halfword and word on
disk is big-endian.  The two odd fields (the packed mode word and the 3-byte
block addresses) are decoded where they are used.
"""

import struct


def swap_word(value: int) -> int:
    """Reverse the byte order of a 32-bit word."""
    return (
        ((value & 0xFF000000) >> 24)
        | ((value & 0x00FF0000) >> 8)
        | ((value & 0x0000FF00) << 8)
        | ((value & 0x000000FF) << 24)
    )


def swap_hword(value: int) -> int:
    """Reverse the byte order of a 16-bit halfword."""
    return ((value & 0x00FF) << 8) | ((value & 0xFF00) >> 8)


# Read a big-endian word from `b` at offset `o`
be32 = lambda b, o: struct.unpack_from(">I", b, o)[0]


def addr3(buf: bytes, offset: int) -> int:
    """Rebuild a 3-byte big-endian disk address."""
    return (buf[offset] << 16) | (buf[offset + 1] << 8) | buf[offset + 2]
