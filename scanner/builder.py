"""Graph builder that walks require references from an entry file."""

import logging
from pathlib import Path

from graph.model import Module, ModuleRegistry
from .parser import parse_file, extract_requires
from .resolver import DEFAULT_EXTENSION, canonicalize, resolve_specifier

logger = logging.getLogger(__name__)


def traverse(
    entry_path: Path,
    registry: ModuleRegistry,
    extension: str = DEFAULT_EXTENSION,
) -> None:
    """
    Add ``entry_path`` and everything it transitively requires to ``registry``.

    Modules are visited depth-first in source order. Each module is
    inserted before any of its dependencies is visited, so ids follow
    first-discovery order and circular requires terminate.

    Args:
        entry_path: File to start from.
        registry: Registry to fill; modules already in it are not revisited.
        extension: Extension inferred for specifiers that lack one.

    Raises:
        ResolutionError: If a file is missing or unreadable.
        ParseError: If a file has a syntax error.
    """
    entry_path = Path(entry_path)
    canonical_path = canonicalize(entry_path)
    if registry.contains(canonical_path):
        return

    tree = parse_file(canonical_path)

    module = Module(id=registry.next_id(), canonical_path=canonical_path, syntax_tree=tree)
    registry.insert(module)
    logger.debug("Discovered module %d: %s", module.id, canonical_path)

    base_dir = entry_path.absolute().parent

    for specifier in extract_requires(tree):
        resolved = resolve_specifier(base_dir, specifier, extension)

        if isinstance(resolved, str):
            logger.debug("Skipping bare specifier %r in %s", specifier, canonical_path)
            registry.add_external(canonical_path, resolved)
            continue

        registry.add_edge(canonical_path, resolved)
        if not registry.contains(resolved):
            traverse(resolved, registry, extension)


def build_graph(entry_path: Path, extension: str = DEFAULT_EXTENSION) -> ModuleRegistry:
    """
    Build the dependency graph reachable from an entry file.

    Args:
        entry_path: The entry JavaScript file.
        extension: Extension inferred for specifiers that lack one.

    Returns:
        ModuleRegistry holding every reachable module, ids in discovery order.
    """
    registry = ModuleRegistry()
    traverse(entry_path, registry, extension)
    logger.info("Found %d module(s) reachable from %s", len(registry), entry_path)
    return registry
