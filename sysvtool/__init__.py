"""Read-only access to TI/LMI SysV (68K) band images."""

from .directory import DirEntry, list_directory, lookup, resolve_path, scan_directory
from .errors import (
    BadMagicError,
    ImageIOError,
    IndirectionLimitExceeded,
    InvalidPathError,
    NotDirectoryError,
    NotRegularFileError,
    PathNotFoundError,
    UnexpectedEndOfFile,
    UnixToolError,
)
from .extract import extract, read_file
from .image import BLOCK_SIZE, DiskImage
from .inode import FileType, Inode, read_inode
from .superblock import SuperBlock, load_superblock

__version__ = "0.1.0"

__all__ = [
    "BLOCK_SIZE",
    "BadMagicError",
    "DirEntry",
    "DiskImage",
    "FileType",
    "ImageIOError",
    "IndirectionLimitExceeded",
    "Inode",
    "InvalidPathError",
    "NotDirectoryError",
    "NotRegularFileError",
    "PathNotFoundError",
    "SuperBlock",
    "UnexpectedEndOfFile",
    "UnixToolError",
    "extract",
    "list_directory",
    "load_superblock",
    "lookup",
    "read_file",
    "read_inode",
    "resolve_path",
    "scan_directory",
]
