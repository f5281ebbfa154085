"""Result types for railway-oriented programming.

Operations that can fail without it being exceptional (an HTTP lookup that
times out, an insert the table store rejects) return a Result instead of
raising. Callers pattern-match on the outcome, which keeps failure paths
explicit and easy to assert on in tests.

Usage:
    def resolve(ip: str) -> Result[GeoLocation, ExternalServiceError]:
        if not ip:
            return Failure(error=ExternalServiceError(...))
        return Success(value=GeoLocation.local())

    match resolve("10.0.0.5"):
        case Success(value=location):
            print(location.country)
        case Failure(error=error):
            print(error.message)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful outcome.

    Attributes:
        value: The produced value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed outcome.

    Attributes:
        error: The error describing what went wrong.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
