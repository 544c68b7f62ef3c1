import io
import struct

import pytest

from sysvtool.image import BLOCK_SIZE, DiskImage
from sysvtool.inode import INODE_SIZE, INODE_TABLE_BASE, ROOT_INODE, FileType
from sysvtool.superblock import MAGIC_OFF, SUPERBLOCK_MAGIC, TYPE_OFF

MTIME = 1_000_000_000


def pattern(n, seed=0):
    return bytes((i * 7 + seed) % 251 for i in range(n))


class ImageBuilder:
    """Writes just enough of a SysV band image for the decoder to walk."""

    def __init__(self, blocks=64):
        self.buf = bytearray(blocks * BLOCK_SIZE)

    def _grow(self, end):
        if end > len(self.buf):
            self.buf.extend(b"\0" * (end - len(self.buf)))

    def superblock(self, magic=SUPERBLOCK_MAGIC, isize=8, fsize=64, fname=b"band", fpack=b"lmi"):
        base = BLOCK_SIZE
        struct.pack_into(">HI", self.buf, base, isize, fsize)
        struct.pack_into(">IH", self.buf, base + 426, 17, 5)         # tfree, tinode
        struct.pack_into("6s6s", self.buf, base + 432, fname, fpack)
        struct.pack_into("<I", self.buf, base + MAGIC_OFF, magic)
        struct.pack_into(">I", self.buf, base + TYPE_OFF, 2)
        return self

    def inode(self, number, ftype, size=0, addr=(), perms=0o644, nlink=1, uid=0o12, gid=0o3, mtime=MTIME):
        addr = list(addr) + [0] * (13 - len(addr))
        raw_addr = b"".join(a.to_bytes(3, "big") for a in addr) + b"\0"
        mode = (int(ftype) << 12) | perms
        offset = INODE_TABLE_BASE + number * INODE_SIZE
        self._grow(offset + INODE_SIZE)
        struct.pack_into(">HHHHI40sIII", self.buf, offset,
                         mode, nlink, uid, gid, size, raw_addr, mtime, mtime, mtime)
        return self

    def block(self, number, data):
        assert len(data) <= BLOCK_SIZE
        self._grow((number + 1) * BLOCK_SIZE)
        start = number * BLOCK_SIZE
        self.buf[start:start + BLOCK_SIZE] = data.ljust(BLOCK_SIZE, b"\0")
        return self

    def directory(self, number, entries):
        data = b"".join(struct.pack(">H14s", inum, name) for inum, name in entries)
        return self.block(number, data)

    def indirect(self, number, table):
        return self.block(number, struct.pack(f">{len(table)}I", *table))

    def image(self):
        return DiskImage(io.BytesIO(bytes(self.buf)), "<test>")

    def save(self, path):
        path.write_bytes(bytes(self.buf))
        return path


class CountingImage(DiskImage):
    """Records every physical block read."""

    def __init__(self, fh, name="<test>"):
        super().__init__(fh, name)
        self.blocks_read = []

    def read_block(self, block):
        self.blocks_read.append(block)
        return super().read_block(block)


A_TXT = pattern(2000, seed=1)
README = pattern(1025, seed=2)


def build_sample():
    """
    /            inode 2,  block 10
    /bin         inode 10, block 11
    /bin/a.txt   inode 11, blocks 12, 13 (2000 bytes)
    /readme      inode 3,  blocks 14, 15 (1025 bytes)
    /tty         inode 4,  char device
    """
    b = ImageBuilder().superblock()
    b.inode(ROOT_INODE, FileType.DIR, size=5 * 16, addr=[10], perms=0o755, nlink=3)
    b.directory(10, [(2, b"."), (2, b".."), (10, b"bin"), (3, b"readme"), (4, b"tty")])
    b.inode(10, FileType.DIR, size=3 * 16, addr=[11], perms=0o755, nlink=2)
    b.directory(11, [(10, b"."), (2, b".."), (11, b"a.txt")])
    b.inode(11, FileType.FILE, size=2000, addr=[12, 13], perms=0o640)
    b.block(12, A_TXT[:1024]).block(13, A_TXT[1024:])
    b.inode(3, FileType.FILE, size=1025, addr=[14, 15])
    b.block(14, README[:1024]).block(15, README[1024:])
    b.inode(4, FileType.CHAR, perms=0o622)
    return b


@pytest.fixture
def builder():
    return ImageBuilder().superblock()


@pytest.fixture
def sample():
    return build_sample()


@pytest.fixture
def image(sample):
    with sample.image() as img:
        yield img


@pytest.fixture
def counting_image(sample):
    return CountingImage(io.BytesIO(bytes(sample.buf)))


@pytest.fixture
def sample_path(sample, tmp_path):
    return sample.save(tmp_path / "band.img")
