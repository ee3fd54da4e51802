from __future__ import annotations
import logging
import os
import stat as statmod
import time
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Tuple
from .errors import PathStructureError, WalkEntryError
from .extensions import ExtensionAggregator
from .models import ScanResult, WalkEntry
from .tree import DirTree

logger = logging.getLogger(__name__)

ErrorCb = Callable[[WalkEntryError], None]
Walker = Callable[..., Iterator[WalkEntry]]

def _log_error(err: WalkEntryError) -> None:
    logger.warning("Unable to read directory structure: %s", err)

def walk_entries(root: str, on_error: Optional[ErrorCb] = None) -> Iterator[WalkEntry]:
    """Yield the root, then everything below it, depth first.

    Symlinks below the root are reported as files and never followed.
    Entries that fail to stat or list go to `on_error` and are skipped.
    """
    report = on_error or _log_error
    root = os.fspath(root)
    try:
        st = os.stat(root)
    except OSError as e:
        report(WalkEntryError(root, e))
        return

    if not statmod.S_ISDIR(st.st_mode):
        yield WalkEntry(path=root, is_dir=False, size=int(st.st_size))
        return
    yield WalkEntry(path=root, is_dir=True)

    stack: List[str] = [root]
    while stack:
        dir_path = stack.pop()
        try:
            it = os.scandir(dir_path)
        except OSError as e:
            report(WalkEntryError(dir_path, e))
            continue
        with it:
            while True:
                try:
                    entry = next(it)
                except StopIteration:
                    break
                except OSError as e:
                    report(WalkEntryError(dir_path, e))
                    break

                try:
                    st = entry.stat(follow_symlinks=False)
                except OSError as e:
                    report(WalkEntryError(entry.path, e))
                    continue

                if statmod.S_ISDIR(st.st_mode):
                    stack.append(entry.path)
                    yield WalkEntry(path=entry.path, is_dir=True)
                else:
                    yield WalkEntry(path=entry.path, is_dir=False, size=int(st.st_size))

def relative_parts(root: Path, path: str) -> Tuple[str, ...]:
    try:
        return Path(path).relative_to(root).parts
    except ValueError:
        raise PathStructureError(path, root) from None

def scan_path(root: str, walker: Walker = walk_entries) -> ScanResult:
    """Run one walk over `root` and aggregate it.

    Raises PathStructureError if the walker hands back a path outside the root.
    """
    t0 = time.time()
    tree = DirTree(os.fspath(root))
    extensions = ExtensionAggregator()
    errors: List[WalkEntryError] = []
    root_path = Path(root)
    files = 0
    dirs = 0

    def on_error(err: WalkEntryError) -> None:
        errors.append(err)
        _log_error(err)

    for entry in walker(root, on_error=on_error):
        parts = relative_parts(root_path, entry.path)
        if entry.is_dir:
            dirs += 1
            tree.add_dir(parts)
        else:
            files += 1
            tree.add_file(parts, entry.size)
            if parts:
                extensions.add_path(parts[-1], entry.size)

    elapsed = time.time() - t0
    logger.debug("scanned %s: %d files, %d dirs, %d bytes, %d errors in %.2fs",
                 root, files, dirs, tree.size, len(errors), elapsed)
    return ScanResult(
        tree=tree,
        extensions=extensions,
        errors=errors,
        files=files,
        dirs=dirs,
        elapsed_sec=elapsed,
    )
