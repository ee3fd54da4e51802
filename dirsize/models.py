from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, TYPE_CHECKING

if TYPE_CHECKING:
    from .errors import WalkEntryError
    from .extensions import ExtensionAggregator
    from .tree import DirTree

@dataclass
class DirNode:
    name: str
    size: int = 0
    children: Dict[str, "DirNode"] = field(default_factory=dict)

    def child(self, name: str) -> "DirNode":
        node = self.children.get(name)
        if node is None:
            node = DirNode(name=name)
            self.children[name] = node
        return node

@dataclass(frozen=True)
class WalkEntry:
    path: str
    is_dir: bool
    size: int = 0

@dataclass
class ScanResult:
    tree: "DirTree"
    extensions: "ExtensionAggregator"
    errors: List["WalkEntryError"]
    files: int
    dirs: int
    elapsed_sec: float
