"""Role inheritance management, matching operators and helpers for access-control rules."""

__version__ = "0.1.0"
__all__ = ["builtin_operators", "rolemanager", "util"]