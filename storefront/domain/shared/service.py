from abc import ABCMeta
from dataclasses import dataclass
from typing import dataclass_transform


@dataclass_transform()
class _ServiceMeta(ABCMeta):
    """Metaclass that combines ABC with auto-dataclass for Service subclasses."""

    def __new__(mcs, name: str, bases: tuple, namespace: dict):
        cls = super().__new__(mcs, name, bases, namespace)
        if any(isinstance(b, mcs) for b in bases):
            return dataclass(cls)
        return cls


class Service(metaclass=_ServiceMeta):
    """Base class for domain services.

    Collaborators are declared as underscore-prefixed fields and passed
    by keyword, e.g. ``TokenService(_config=config)``. Abstract methods
    keep a base service from being instantiated.
    """

    pass
