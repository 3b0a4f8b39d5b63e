"""JSON exporter for module registries (machine-friendly format)."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from graph.model import ModuleRegistry


def to_json(
    registry: ModuleRegistry,
    base: Optional[Path] = None,
    indent: int = 2,
    include_external: bool = True,
) -> str:
    """
    Convert a module registry to JSON format.

    Args:
        registry: The registry to export.
        base: Optional base path for relative path display.
        indent: JSON indentation level.
        include_external: If True, include bare package specifiers.

    Returns:
        JSON string with ``entry``, ``modules``, ``edges`` and ``external`` keys.
    """
    modules: List[Dict[str, Any]] = []
    for module in registry.modules():
        modules.append({"id": module.id, "path": _get_path_str(module.canonical_path, base)})

    edges: List[Dict[str, Any]] = []
    for source, target in registry.iter_edges():
        edges.append({"source": registry.get(source).id, "target": registry.get(target).id})

    data: Dict[str, Any] = {
        "entry": modules[0]["path"] if modules else None,
        "modules": modules,
        "edges": edges,
    }

    if include_external:
        data["external"] = [
            {"source": registry.get(source).id, "specifier": specifier}
            for source, specifier in registry.iter_externals()
        ]

    return json.dumps(data, indent=indent)


def _get_path_str(path: Path, base: Optional[Path]) -> str:
    """Get the string representation of a path."""
    if base is not None:
        try:
            return path.relative_to(base).as_posix()
        except ValueError:
            pass
    return path.as_posix()
