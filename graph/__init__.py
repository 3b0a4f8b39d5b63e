"""Module graph data model."""

from .model import Module, ModuleRegistry

__all__ = ["Module", "ModuleRegistry"]
