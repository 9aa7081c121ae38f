# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-14
# Description: Outcome.py
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")

# Failure kinds reported by the service clients
KIND_TRANSPORT = "transport"
KIND_STATUS = "status"
KIND_MALFORMED = "malformed"
KIND_EMPTY = "empty"


@dataclass(frozen=True)
class Success(Generic[T]):
    """External call succeeded; `data` holds the useful payload."""
    data: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """External call failed; `kind` is one of the KIND_* constants."""
    kind: str
    message: str
    cause: Any = None

    @property
    def ok(self) -> bool:
        return False


Outcome = Union[Success[T], Failure]
