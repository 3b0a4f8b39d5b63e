"""Path resolution utilities for mapping require specifiers to files."""

from pathlib import Path
from typing import Optional, Union

from .errors import ResolutionError


DEFAULT_EXTENSION = ".js"


def is_bare_specifier(specifier: str) -> bool:
    """
    Check if a specifier names a package rather than a file.

    Only specifiers starting with ``.`` are treated as file references;
    everything else (``lodash``, ``@scope/pkg``, ``/abs/path``) is bare.
    """
    return not specifier.startswith(".")


def normalize_specifier(specifier: str, extension: str = DEFAULT_EXTENSION) -> str:
    """
    Turn a relative specifier into a file name below the requiring directory.

    Strips a single leading ``.`` and then a single leading ``/``, and
    appends ``extension`` unless the name already ends with it. Each strip
    happens at most once, so ``..`` becomes ``..js`` and ``../x`` becomes
    ``./x.js``.
    """
    name = specifier
    if name.startswith("."):
        name = name[1:]
    if name.startswith("/"):
        name = name[1:]
    if not name.endswith(extension):
        name += extension
    return name


def canonicalize(path: Path, specifier: str = "", base_dir: Optional[Path] = None) -> Path:
    """
    Resolve ``.``/``..`` segments and symlinks against the filesystem.

    Args:
        path: The path to canonicalize.
        specifier: The specifier the path came from, for error messages.
        base_dir: The directory the specifier was resolved against, if any.

    Returns:
        The absolute canonical path of an existing regular file.

    Raises:
        ResolutionError: If the path does not exist or is not a file.
    """
    try:
        resolved = Path(path).resolve(strict=True)
    except (OSError, RuntimeError, ValueError) as e:
        reason = "no such file" if isinstance(e, FileNotFoundError) else str(e)
        raise ResolutionError(specifier or str(path), Path(path), base_dir, reason) from e

    if not resolved.is_file():
        raise ResolutionError(specifier or str(path), resolved, base_dir, "not a regular file")

    return resolved


def resolve_specifier(
    base_dir: Path,
    specifier: str,
    extension: str = DEFAULT_EXTENSION,
) -> Union[Path, str]:
    """
    Resolve a require specifier relative to the requiring file's directory.

    Args:
        base_dir: Directory of the file containing the require call.
        specifier: The raw string passed to ``require``.
        extension: Extension appended when the specifier has none.

    Returns:
        The canonical Path for relative specifiers, or the specifier string
        unchanged for bare specifiers.

    Raises:
        ResolutionError: If a relative specifier names no existing file.
    """
    if is_bare_specifier(specifier):
        return specifier

    candidate = Path(base_dir) / normalize_specifier(specifier, extension)
    return canonicalize(candidate, specifier, Path(base_dir))
