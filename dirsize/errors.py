from __future__ import annotations
import os
from typing import Union

PathArg = Union[str, "os.PathLike[str]"]

class DirSizeError(Exception):
    """Base class for everything dirsize raises on purpose."""

class WalkEntryError(DirSizeError):
    """A single filesystem entry could not be read. Not fatal."""

    def __init__(self, path: PathArg, cause: OSError):
        self.path = os.fspath(path)
        self.cause = cause
        super().__init__(f"{self.path}: {cause.strerror or cause}")

class PathStructureError(DirSizeError):
    def __init__(self, path: PathArg, root: PathArg):
        self.path = os.fspath(path)
        self.root = os.fspath(root)
        super().__init__(f"{self.path} is not inside scan root {self.root}")

class InvalidSortKey(DirSizeError, ValueError):
    def __init__(self, value: str, choices):
        self.value = value
        self.choices = tuple(choices)
        super().__init__(f"invalid sort key {value!r} (choose from {', '.join(self.choices)})")

class OutputWriteError(DirSizeError):
    """Writing the report failed (closed pipe, full disk...)."""
