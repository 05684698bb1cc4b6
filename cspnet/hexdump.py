"""Hex dumps of byte blocks, sixteen bytes per line."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from typing import TextIO

_WIDTH = 16


def hex_dump_lines(data: bytes, desc: str | None = None, show_address: bool = False) -> Iterator[str]:
    """Yield the lines of a hex dump, optionally preceded by a description."""
    if desc is not None:
        yield desc
    data = bytes(data)
    for offset in range(0, len(data), _WIDTH):
        chunk = data[offset:offset + _WIDTH]
        prefix = f"  0x{offset:08x} " if show_address else " " * 8
        hexpart = "".join(f" {byte:02x}" for byte in chunk)
        padding = "   " * (_WIDTH - len(chunk))
        text = "".join(chr(byte) if 0x20 <= byte <= 0x7E else "." for byte in chunk)
        yield f"{prefix}{hexpart}{padding}  {text}"


def hex_dump(data: bytes, desc: str | None = None, show_address: bool = False,
             file: TextIO | None = None) -> None:
    """Print a hex dump to file, standard output by default."""
    out = sys.stdout if file is None else file
    for line in hex_dump_lines(data, desc, show_address):
        print(line, file=out)