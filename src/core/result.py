"""Result type for operations with expected failures.

Expected domain failures (incomplete payloads, broken tenant configuration,
provider rejections) are returned as ``Err`` values instead of being raised,
so that callers must handle them explicitly::

    match await use_case.calculate_taxes(payload, auth_data, cache):
        case Ok(value):
            ...
        case Err(error):
            ...
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


class UnwrapError(Exception):
    """Raised when ``unwrap`` is called on an ``Err``."""


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful variant holding a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        return Ok(f(self.value))


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed variant holding an error."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise UnwrapError(f"Called unwrap() on Err: {self.error!r}")

    def map(self, f: Callable[[object], object]) -> Err[E]:
        _ = f
        return self


type Result[T, E] = Ok[T] | Err[E]
