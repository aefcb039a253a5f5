"""
Single-resolution fetch results.

A fetch resolves to exactly one of:
- Success: carries the decoded records
- Failure: carries the TransportError that stopped it

Example:
    >>> result = await client.fetch_all()
    >>> if result.ok:
    ...     show(result.value)
    ... else:
    ...     log(result.error)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from .errors import TransportError

T = TypeVar("T")

Record = dict[str, Any]


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful resolution.

    Attributes:
        value: The resolved value
    """

    value: T
    ok = True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """Failed resolution.

    Attributes:
        error: Why the fetch failed
    """

    error: TransportError
    ok = False

    def unwrap(self) -> Any:
        raise self.error


FetchResult = Union[Success[list[Record]], Failure]
