"""Exporters for converting a module registry to various output formats."""

from .ascii_exporter import to_ascii, to_listing
from .json_exporter import to_json
from .mermaid_exporter import to_mermaid

__all__ = ["to_ascii", "to_listing", "to_json", "to_mermaid"]
