"""Shared utilities for confloader core modules."""
from __future__ import annotations

from .merge import merge_positional, replace_recursive

__all__ = ["merge_positional", "replace_recursive"]
