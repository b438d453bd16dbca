"""Rules engine for fifth-edition character creation: draft validation and derived stats."""

__version__ = "0.1.0"
__all__ = ["adapter", "engine", "entities", "rules", "types"]