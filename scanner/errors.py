"""Fatal errors raised while building a dependency graph."""

from pathlib import Path
from typing import List, Optional


class DependencyGraphError(Exception):
    """Base class for errors that abort a traversal run."""


class ParseError(DependencyGraphError):
    """A source file is lexically or syntactically invalid."""

    def __init__(self, path: Optional[Path], diagnostics: List[str]):
        self.path = path
        self.diagnostics = list(diagnostics)
        where = str(path) if path is not None else "<source>"
        super().__init__(f"failed to parse {where}: {len(self.diagnostics)} syntax error(s)")


class ResolutionError(DependencyGraphError):
    """A relative specifier or entry path does not name a readable file."""

    def __init__(self, specifier: str, path: Path, base_dir: Optional[Path] = None, reason: str = "no such file"):
        self.specifier = specifier
        self.path = path
        self.base_dir = base_dir
        self.reason = reason
        if base_dir is not None:
            message = f"cannot resolve {specifier!r} from {base_dir}: {reason} ({path})"
        else:
            message = f"cannot load {path}: {reason}"
        super().__init__(message)
