"""Scanner module for parsing, reference extraction and traversal."""

from .errors import DependencyGraphError, ParseError, ResolutionError
from .parser import parse_file, parse_source, extract_requires
from .resolver import resolve_specifier, canonicalize
from .builder import build_graph, traverse

__all__ = [
    "DependencyGraphError",
    "ParseError",
    "ResolutionError",
    "parse_file",
    "parse_source",
    "extract_requires",
    "resolve_specifier",
    "canonicalize",
    "build_graph",
    "traverse",
]
