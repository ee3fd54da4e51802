from __future__ import annotations
import os
from enum import Enum
from typing import IO, Iterable, List, Optional, Sequence, Tuple
from rich.console import Console, ConsoleOptions, RenderResult
from rich.segment import Segment
from .errors import InvalidSortKey, OutputWriteError
from .models import DirNode
from .tree import DirTree
from .utils import SIZE_COLUMN_WIDTH, size_cell

SEPARATOR = "-" * 10
DEFAULT_SORT = "size"

class SortBy(str, Enum):
    NAME = "name"
    SIZE = "size"

    @classmethod
    def parse(cls, value: str) -> "SortBy":
        try:
            return cls(value.lower())
        except ValueError:
            raise InvalidSortKey(value, [m.value for m in cls]) from None

class RawLine:
    """A line written exactly as given: no tab expansion or control-code stripping."""

    def __init__(self, text: str):
        self.text = text

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        yield Segment(self.text)
        yield Segment.line()

class ReportConsole(Console):
    def on_broken_pipe(self) -> None:
        # rich would redirect stdout and exit; let the caller report it instead
        raise OutputWriteError("cannot write report: broken pipe")

def make_console(file: Optional[IO[str]] = None, stderr: bool = False) -> Console:
    # no markup, emoji codes or wrapping
    return ReportConsole(file=file, stderr=stderr, markup=False, emoji=False,
                         highlight=False, soft_wrap=True)

def select_top_extensions(ext_sizes: Iterable[Tuple[str, int]],
                          limit: int,
                          reverse: bool = False) -> List[Tuple[str, int]]:
    """Keep the `limit` largest extensions, largest first.

    `reverse` only flips the display order of the kept set, it never
    changes which extensions are kept.
    """
    ranked = sorted(ext_sizes, key=lambda x: (-x[1], x[0]))[:max(0, limit)]
    if reverse:
        ranked.reverse()
    return ranked

def sort_children(nodes: Iterable[DirNode], sort_by: SortBy, reverse: bool = False) -> List[DirNode]:
    if sort_by is SortBy.NAME:
        return sorted(nodes, key=lambda n: n.name, reverse=reverse)
    return sorted(nodes, key=lambda n: (n.size, n.name), reverse=reverse)

def format_rows(rows: Sequence[Tuple[Optional[str], str]]) -> List[str]:
    """Align (size, label) rows; a row with no size is written as-is."""
    width = max([SIZE_COLUMN_WIDTH] + [len(s) for s, _ in rows if s is not None])
    out: List[str] = []
    for size, label in rows:
        if size is None:
            out.append(label)
        else:
            out.append(f"{size:>{width}}  {label}")
    return out

def write_lines(console: Console, lines: Iterable[str]) -> None:
    try:
        for line in lines:
            console.print(RawLine(line))
    except OSError as e:
        raise OutputWriteError(f"cannot write report: {e}") from e

def extension_lines(ext_sizes: Iterable[Tuple[str, int]], limit: int,
                    reverse: bool = False, si: bool = False) -> List[str]:
    selected = select_top_extensions(ext_sizes, limit, reverse)
    lines = [f"Top {limit} file types by space usage:"]
    lines += format_rows([(size_cell(size, si), ext) for ext, size in selected])
    lines.append("")
    return lines

def usage_lines(root: str, tree: DirTree, sort_by: SortBy,
                reverse: bool = False, si: bool = False) -> List[str]:
    rows: List[Tuple[Optional[str], str]] = []
    for node in sort_children(tree.children(), sort_by, reverse):
        rows.append((size_cell(node.size, si), os.path.join(root, node.name)))
    if rows:
        rows.append((None, SEPARATOR))
    rows.append((size_cell(tree.size, si), tree.name))
    return format_rows(rows)

def print_top_extensions(console: Console, ext_sizes: Iterable[Tuple[str, int]], limit: int,
                         reverse: bool = False, si: bool = False) -> None:
    write_lines(console, extension_lines(ext_sizes, limit, reverse, si))

def print_space_usage(console: Console, root: str, tree: DirTree, sort_by: SortBy,
                      reverse: bool = False, si: bool = False) -> None:
    write_lines(console, usage_lines(root, tree, sort_by, reverse, si))
