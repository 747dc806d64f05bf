"""Result values returned by the read-side stores.

A read either yields `Ok(value)` or `Err(kind, message)`; callers branch on
`is_ok()` or call `unwrap()` to get the value or the matching exception.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from storefront.shared.errors import BackendError, NotFound, StorefrontError, Unauthenticated

T = TypeVar("T")


class ErrorKind(Enum):
    NOT_FOUND = "not_found"
    UNAUTHENTICATED = "unauthenticated"
    BACKEND = "backend"


_EXCEPTIONS = {
    ErrorKind.NOT_FOUND: NotFound,
    ErrorKind.UNAUTHENTICATED: Unauthenticated,
    ErrorKind.BACKEND: BackendError,
}


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str = ""

    def is_ok(self) -> bool:
        return False

    def unwrap(self):
        raise self.as_exception()

    def as_exception(self) -> StorefrontError:
        return _EXCEPTIONS[self.kind](self.message)

    @classmethod
    def from_exception(cls, exc: Exception) -> "Err":
        for kind, exc_cls in _EXCEPTIONS.items():
            if isinstance(exc, exc_cls):
                return cls(kind=kind, message=str(exc))
        return cls(kind=ErrorKind.BACKEND, message=str(exc))


Result = Ok[T] | Err
