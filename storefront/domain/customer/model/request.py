"""Transport-neutral view of an incoming request."""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RequestContext:
    """Headers and parameters the resolver may read a customer token from.

    `headers` should be case-insensitive when built from a real request
    (Starlette's `Headers` is); plain dicts are matched exactly.
    """

    headers: Mapping[str, str] = field(default_factory=dict)
    params: Mapping[str, str] = field(default_factory=dict)
