#!/usr/bin/env python3
"""
recover_files.py
Copy one regular file out of a SysV band image onto the host.

Usage:
    sysv-read <band.img> </path/in/image> <destination>
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from tqdm import tqdm

from .directory import resolve_path
from .errors import NotRegularFileError, UnexpectedEndOfFile, UnixToolError
from .extract import extract
from .image import DiskImage
from .logsetup import setup_logging
from .superblock import load_superblock


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Copy a file from a SysV band image to the host")
    parser.add_argument("image", type=Path, help="Path to the band image")
    parser.add_argument("source", help="Absolute path of the file inside the image")
    parser.add_argument("destination", type=Path, help="Where to write it on the host")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="No progress bar")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Trace inode and block reads on stderr")
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        with DiskImage.open(args.image) as image:
            load_superblock(image)
            # Walk the path before touching the destination
            inode = resolve_path(image, args.source)
            if not inode.is_regular:
                raise NotRegularFileError(args.source)

            print(f"Copying {inode.size} bytes")
            with open(args.destination, "wb") as out, \
                    tqdm(total=inode.size, unit="B", unit_scale=True,
                         disable=args.quiet, leave=False) as bar:
                written = extract(image, inode, out, progress=bar.update)
    except FileNotFoundError as exc:
        if exc.filename is not None and Path(exc.filename) == args.image:
            sys.exit(f"Error: image '{args.image}' not found")
        sys.exit(f"unixtool: read: {exc}")
    except UnexpectedEndOfFile as exc:
        sys.exit(f"unixtool: read: {exc}; '{args.destination}' is incomplete")
    except OSError as exc:
        sys.exit(f"unixtool: read: {exc}")
    except UnixToolError as exc:
        sys.exit(f"unixtool: read: {exc}")

    print(f"Wrote {written} of {inode.size} bytes")


if __name__ == "__main__":
    main()
