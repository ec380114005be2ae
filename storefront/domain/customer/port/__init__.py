"""Customer domain ports."""

from .cross_app import CrossAppAuthService, NoCrossAppAuth
from .repository import CustomerRepository
from .security_context import SecurityContext

__all__ = [
    "CrossAppAuthService",
    "CustomerRepository",
    "NoCrossAppAuth",
    "SecurityContext",
]
