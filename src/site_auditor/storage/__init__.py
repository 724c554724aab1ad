"""Storage module for persisting audit reports."""

from .manager import StorageManager

__all__ = ["StorageManager"]
