"""Helpers for building the location strings embedded in error messages."""

from __future__ import annotations


def append_path_index(path: str, index: int) -> str:
    """Return ``path`` extended with a ``[index]`` segment."""
    return f"{path}[{index}]"


def at_path(path: str) -> str:
    """Format ``path`` as a message suffix, or return ``""`` at the root."""
    return f" @ {path}" if path else ""
