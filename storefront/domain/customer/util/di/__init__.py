"""Customer domain DI."""

from .provider import CustomerProvider

__all__ = ["CustomerProvider"]
