"""Persistence adapters."""

from .di import PersistenceProvider

__all__ = ["PersistenceProvider"]
