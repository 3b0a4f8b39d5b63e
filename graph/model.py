"""Graph data model for storing discovered CommonJS modules."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class Module:
    """
    One physical source file discovered during a traversal run.

    Identity is the canonical path alone: ``id`` and ``syntax_tree`` are
    payload and take no part in equality or hashing.
    """

    id: int = field(compare=False)
    canonical_path: Path
    syntax_tree: Optional[Any] = field(default=None, compare=False, repr=False)


class ModuleRegistry:
    """
    The set of modules found by one traversal run, keyed by canonical path.

    Ids are handed out in insertion order, so iterating the registry yields
    modules in discovery order. Resolved dependency edges and bare
    (package) specifiers are tracked separately per source module.
    """

    def __init__(self):
        self._modules: Dict[Path, Module] = {}
        self._edges: Dict[Path, List[Path]] = {}
        self._external: Dict[Path, List[str]] = {}  # source -> bare specifiers

    def contains(self, canonical_path: Path) -> bool:
        """Check whether a module with this canonical path is already known."""
        return canonical_path in self._modules

    def next_id(self) -> int:
        """Return the id the next inserted module must carry."""
        return len(self._modules)

    def insert(self, module: Module) -> None:
        """
        Add a module to the registry.

        Raises:
            ValueError: If the path is already registered, or the module's id
                is not the next sequential id.
        """
        if module.canonical_path in self._modules:
            raise ValueError(f"module already registered: {module.canonical_path}")
        if module.id != self.next_id():
            raise ValueError(
                f"expected id {self.next_id()} for {module.canonical_path}, got {module.id}"
            )
        self._modules[module.canonical_path] = module

    def get(self, canonical_path: Path) -> Optional[Module]:
        """Get the module registered for a canonical path, if any."""
        return self._modules.get(canonical_path)

    @property
    def entry(self) -> Optional[Module]:
        """Return the module the traversal started from."""
        return next(iter(self._modules.values()), None)

    def modules(self) -> List[Module]:
        """Return all modules sorted by id."""
        return sorted(self._modules.values(), key=lambda module: module.id)

    def add_edge(self, source: Path, target: Path) -> None:
        """Record that ``source`` requires ``target`` (both canonical paths)."""
        targets = self._edges.setdefault(source, [])
        if target not in targets:
            targets.append(target)

    def add_external(self, source: Path, specifier: str) -> None:
        """Record a bare specifier required by ``source``."""
        specifiers = self._external.setdefault(source, [])
        if specifier not in specifiers:
            specifiers.append(specifier)

    def get_targets(self, source: Path) -> List[Path]:
        """Get the files ``source`` requires, in first-require order."""
        return list(self._edges.get(source, []))

    def get_externals(self, source: Path) -> List[str]:
        """Get the bare specifiers ``source`` requires."""
        return list(self._external.get(source, []))

    def has_externals(self) -> bool:
        """Check if any module requires a bare specifier."""
        return bool(self._external)

    def iter_edges(self) -> Iterator[Tuple[Path, Path]]:
        """Iterate over all edges as (source, target) tuples, sources in id order."""
        for module in self.modules():
            for target in self._edges.get(module.canonical_path, []):
                yield module.canonical_path, target

    def iter_externals(self) -> Iterator[Tuple[Path, str]]:
        """Iterate over all bare requires as (source, specifier) tuples."""
        for module in self.modules():
            for specifier in self._external.get(module.canonical_path, []):
                yield module.canonical_path, specifier

    def __iter__(self) -> Iterator[Module]:
        return iter(self.modules())

    def __len__(self) -> int:
        return len(self._modules)

    def __contains__(self, canonical_path: Path) -> bool:
        return self.contains(canonical_path)

    def __repr__(self) -> str:
        edge_count = sum(len(t) for t in self._edges.values())
        external_count = sum(len(s) for s in self._external.values())
        return f"ModuleRegistry(modules={len(self._modules)}, edges={edge_count}, external={external_count})"
