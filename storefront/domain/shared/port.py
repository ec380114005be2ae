from typing import Protocol


class Port(Protocol):
    """Marker base for domain ports. Adapters live in storefront.infrastructure."""
