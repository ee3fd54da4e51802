from __future__ import annotations
import os
from pathlib import PurePath
from typing import Iterable, Tuple, Union

SIZE_COLUMN_WIDTH = 10

Segments = Union[str, "os.PathLike[str]", Iterable[str]]

def format_bytes(num: int, si: bool = False) -> str:
    if num < 0:
        return str(num)
    base = 1000 if si else 1024
    prefixes = "kMGTPE" if si else "KMGTPE"
    suffix = "B" if si else "iB"
    if num < base:
        return f"{num} B"
    x = float(num)
    exp = 0
    while x >= base and exp < len(prefixes):
        x /= base
        exp += 1
    return f"{x:.1f} {prefixes[exp - 1]}{suffix}"

def size_cell(num: int, si: bool = False) -> str:
    s = format_bytes(num, si)
    # "25 B" vs "1.2 KiB" or "1.2 kB": pad so the unit columns line up
    if s.endswith(" B"):
        s = s[:-2] + "  B"
    return f"{s:>{SIZE_COLUMN_WIDTH}}"

def path_segments(path: Segments) -> Tuple[str, ...]:
    if isinstance(path, (str, os.PathLike)):
        return PurePath(path).parts
    return tuple(path)
