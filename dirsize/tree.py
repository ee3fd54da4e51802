from __future__ import annotations
from typing import List, Optional
from .models import DirNode
from .utils import Segments, path_segments

class DirTree:
    """Cumulative directory sizes, built one walk entry at a time.

    Every node's size is the sum of all files below it, so the root holds
    the grand total. Only `add_file` changes sizes; `add_dir` just makes
    sure a directory shows up even when nothing is ever found inside it.
    Paths are relative to the root and may be given as a string, a path
    object or a sequence of segments.
    """

    def __init__(self, root_name: str):
        self.root = DirNode(name=root_name)

    @property
    def name(self) -> str:
        return self.root.name

    @property
    def size(self) -> int:
        return self.root.size

    def children(self) -> List[DirNode]:
        return list(self.root.children.values())

    def add_dir(self, path: Segments) -> None:
        node = self.root
        for seg in path_segments(path):
            node = node.child(seg)

    def add_file(self, path: Segments, size: int) -> None:
        self.root.size += size
        # last segment is the file itself
        node = self.root
        for seg in path_segments(path)[:-1]:
            node = node.child(seg)
            node.size += size

    def find(self, path: Segments) -> Optional[DirNode]:
        node = self.root
        for seg in path_segments(path):
            node = node.children.get(seg)
            if node is None:
                return None
        return node
