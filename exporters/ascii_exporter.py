"""Plain text exporters for module registries."""

from pathlib import Path
from typing import List, Optional, Set, Tuple

from graph.model import ModuleRegistry


# Unicode tree characters
UNICODE_BRANCH = "├── "
UNICODE_LAST = "└── "
UNICODE_VERTICAL = "│   "
UNICODE_SPACE = "    "

# ASCII fallback characters
ASCII_BRANCH = "|-- "
ASCII_LAST = "\\-- "
ASCII_VERTICAL = "|   "
ASCII_SPACE = "    "


def to_listing(registry: ModuleRegistry, base: Optional[Path] = None) -> str:
    """
    List every module as ``id<TAB>path``, ordered by id.

    Args:
        registry: The modules to list.
        base: Optional base path for relative path display.
    """
    return "\n".join(
        f"{module.id}\t{_get_display_path(module.canonical_path, base)}"
        for module in registry.modules()
    )


def to_ascii(
    registry: ModuleRegistry,
    base: Optional[Path] = None,
    style: str = "tree",
    include_external: bool = True,
) -> str:
    """
    Render the dependency tree below the entry module.

    A module that was already drawn earlier is printed again with a ``[*]``
    marker but its dependencies are not repeated.

    Args:
        registry: The registry to export.
        base: Optional base path for relative path display.
        style: Output style - "tree" (Unicode) or "ascii" (pure ASCII).
        include_external: If True, show bare package specifiers.

    Returns:
        ASCII tree string.
    """
    if style == "ascii":
        chars = (ASCII_BRANCH, ASCII_LAST, ASCII_VERTICAL, ASCII_SPACE)
    else:
        chars = (UNICODE_BRANCH, UNICODE_LAST, UNICODE_VERTICAL, UNICODE_SPACE)

    entry = registry.entry
    if entry is None:
        return ""

    lines: List[str] = []
    _render_node(
        registry=registry,
        node=entry.canonical_path,
        base=base,
        prefix="",
        is_last=True,
        chars=chars,
        seen=set(),
        lines=lines,
        is_root=True,
        include_external=include_external,
    )
    return "\n".join(lines)


def _render_node(
    registry: ModuleRegistry,
    node: Path,
    base: Optional[Path],
    prefix: str,
    is_last: bool,
    chars: Tuple[str, str, str, str],
    seen: Set[Path],
    lines: List[str],
    is_root: bool = False,
    include_external: bool = True,
) -> None:
    """Recursively render a module and the modules it requires."""
    branch, last, vertical, space = chars

    module = registry.get(node)
    label = f"{_get_display_path(node, base)} ({module.id})"

    is_repeat = node in seen
    marker = " [*]" if is_repeat else ""

    if is_root:
        lines.append(f"{label}{marker}")
    else:
        connector = last if is_last else branch
        lines.append(f"{prefix}{connector}{label}{marker}")

    if is_repeat:
        return
    seen.add(node)

    children = registry.get_targets(node)
    externals = registry.get_externals(node) if include_external else []
    total_items = len(children) + len(externals)

    new_prefix = "" if is_root else prefix + (space if is_last else vertical)

    for index, child in enumerate(children, start=1):
        _render_node(
            registry=registry,
            node=child,
            base=base,
            prefix=new_prefix,
            is_last=(index == total_items),
            chars=chars,
            seen=seen,
            lines=lines,
            include_external=include_external,
        )

    for index, specifier in enumerate(externals, start=len(children) + 1):
        connector = last if index == total_items else branch
        lines.append(f"{new_prefix}{connector}{specifier} [EXTERNAL]")


def _get_display_path(node: Path, base: Optional[Path]) -> str:
    """Get the display path for a node."""
    if base is not None:
        try:
            return node.relative_to(base).as_posix()
        except ValueError:
            pass
    return node.as_posix()
