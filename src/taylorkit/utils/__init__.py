"""Utility helpers for taylorkit."""

from taylorkit.utils.validate import validate_order

__all__ = ["validate_order"]
