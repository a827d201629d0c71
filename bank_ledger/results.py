"""
Operation Results

Core ledger operations return Ok(value) on success or Err(error) on failure.
The error is a LedgerError instance, so a caller that prefers exceptions
can call unwrap() and let it propagate.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .errors import ErrorKind, LedgerError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying the operation's value"""
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def has_kind(self, kind: ErrorKind) -> bool:
        return False


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying the error that stopped the operation"""
    error: LedgerError

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    def unwrap(self):
        """Raise the carried error"""
        raise self.error

    def has_kind(self, kind: ErrorKind) -> bool:
        return self.error.kind == kind


Result = Union[Ok[T], Err]
