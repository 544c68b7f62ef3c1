"""Exceptions raised while decoding a SysV band image."""


class UnixToolError(Exception):
    """Base class for everything the decoder raises on purpose."""


class ImageIOError(UnixToolError):
    """Seek/read failure on the image, or write failure on the destination."""


class BadMagicError(UnixToolError):
    def __init__(self, found: int):
        super().__init__(f"Bad superblock magic: Expected 0x207E18FD, got 0x{found:08X}")
        self.found = found


class InvalidPathError(UnixToolError, ValueError):
    """Image paths are absolute."""


class PathNotFoundError(UnixToolError):
    def __init__(self, path: str):
        super().__init__(f"No such file or directory (in image): {path}")
        self.path = path


class NotDirectoryError(UnixToolError):
    def __init__(self, path: str):
        super().__init__(f"Not a directory (in image): {path}")
        self.path = path


class NotRegularFileError(UnixToolError):
    def __init__(self, path: str):
        super().__init__(f"Not a regular file (in image): {path}")
        self.path = path


class IndirectionLimitExceeded(UnixToolError):
    def __init__(self, index: int):
        super().__init__(f"Further indirection required for logical block {index}")
        self.index = index


class UnexpectedEndOfFile(UnixToolError):
    def __init__(self, written: int, expected: int):
        super().__init__(f"Unexpected end-of-file after {written} of {expected} bytes")
        self.written = written
        self.expected = expected
