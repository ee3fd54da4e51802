from __future__ import annotations
import os
from typing import Dict, List, Optional, Tuple

def file_extension(name: str) -> Optional[str]:
    """Final dot suffix of the base name, without the dot.

    Names with no dot, or whose only dot is a leading one (``.bashrc``),
    have none; ``..bashrc`` has ``bashrc``. A name ending in a bare dot
    (``foo.``) is treated as having none rather than an empty extension.
    """
    stem, dot, ext = os.path.basename(name).rpartition(".")
    if not dot or not stem:
        return None
    return ext or None

class ExtensionAggregator:
    def __init__(self) -> None:
        self._sizes: Dict[str, int] = {}

    def add(self, extension: Optional[str], size: int) -> None:
        if not extension:
            return
        self._sizes[extension] = self._sizes.get(extension, 0) + size

    def add_path(self, path: str, size: int) -> None:
        self.add(file_extension(path), size)

    def get(self, extension: str) -> int:
        return self._sizes.get(extension, 0)

    def items(self) -> List[Tuple[str, int]]:
        return list(self._sizes.items())

    def total(self) -> int:
        return sum(self._sizes.values())

    def __len__(self) -> int:
        return len(self._sizes)
