"""Mermaid flowchart exporter for module registries."""

import re
from pathlib import Path
from typing import Dict, Optional

from graph.model import ModuleRegistry


def to_mermaid(
    registry: ModuleRegistry,
    orientation: str = "LR",
    base: Optional[Path] = None,
    include_external: bool = True,
) -> str:
    """
    Convert a module registry to Mermaid flowchart syntax.

    Module nodes are named after their ids (``m0``, ``m1``, ...), so the
    output is stable for a given file tree.

    Args:
        registry: The registry to export.
        orientation: Flowchart orientation (LR, TD, TB, RL, BT).
        base: Optional base path for relative path display.
        include_external: If True, show bare package specifiers.

    Returns:
        Mermaid flowchart string.
    """
    lines = [f"flowchart {orientation}"]

    node_ids: Dict[Path, str] = {}
    for module in registry.modules():
        node_id = f"m{module.id}"
        node_ids[module.canonical_path] = node_id
        lines.append(f'    {node_id}["{_escape_label(_get_label(module.canonical_path, base))}"]')

    external_ids: Dict[str, str] = {}
    if include_external and registry.has_externals():
        for _, specifier in registry.iter_externals():
            if specifier not in external_ids:
                # Suffix keeps ids unique when two specifiers sanitize alike
                external_ids[specifier] = _sanitize_id(f"ext_{specifier}_{len(external_ids)}")

    if external_ids:
        lines.append("")
        lines.append("    %% External packages")
        for specifier, external_id in external_ids.items():
            lines.append(f'    {external_id}["{_escape_label(specifier)} [EXTERNAL]"]')
            lines.append(f"    style {external_id} stroke:#0066cc,stroke-dasharray: 5 5")

    lines.append("")
    for source, target in registry.iter_edges():
        lines.append(f"    {node_ids[source]} --> {node_ids[target]}")

    if include_external:
        for source, specifier in registry.iter_externals():
            lines.append(f"    {node_ids[source]} -.-> {external_ids[specifier]}")

    return "\n".join(lines)


def _sanitize_id(value: str) -> str:
    """Sanitize a string to be a valid Mermaid ID."""
    # Replace path separators, scopes and dots with underscores
    sanitized = re.sub(r"[/\\.\-@]", "_", value)
    sanitized = re.sub(r"[^a-zA-Z0-9_]", "", sanitized)
    if sanitized and not sanitized[0].isalpha():
        sanitized = "n_" + sanitized
    return sanitized or "unknown"


def _escape_label(label: str) -> str:
    """Escape double quotes, which would end a quoted Mermaid label."""
    return label.replace('"', "#quot;")


def _get_label(path: Path, base: Optional[Path]) -> str:
    """Get the display label for a node."""
    if base is not None:
        try:
            return path.relative_to(base).as_posix()
        except ValueError:
            pass
    return path.as_posix()
