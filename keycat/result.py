"""Result type for catalogue lookups and validations.

Lookups that may not find anything and size selections that may be rejected
return a Success or a Failure instead of raising, so callers always have to
look at the outcome.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


class KeyCatError(ValueError):
    """Raised when a Failure is unwrapped."""

    def __init__(self: "KeyCatError", error: Any) -> None:
        super().__init__(str(error))
        self.error = error


@dataclass(frozen=True)
class Success(Generic[T]):
    """A lookup or validation that produced a value."""

    value: T

    def unwrap(self: "Success[T]") -> T:
        """Get the value."""
        return self.value

    def unwrap_or(self: "Success[T]", _default: Any) -> T:
        """Get the value, ignoring the default."""
        return self.value

    def map_error(self: "Success[T]", _f: Callable[[Any], Any]) -> "Success[T]":
        """Successes carry no error to replace."""
        return self


@dataclass(frozen=True)
class Failure(Generic[E]):
    """A lookup or validation that was rejected, with the reason."""

    error: E

    def unwrap(self: "Failure[E]") -> Any:
        """Raise the carried error as a KeyCatError."""
        raise KeyCatError(self.error)

    def unwrap_or(self: "Failure[E]", default: T) -> T:
        """Return the default instead of a value."""
        return default

    def map_error(self: "Failure[E]", f: Callable[[E], Any]) -> "Failure[Any]":
        """Replace the error, e.g. to report the caller's original input.

        Args:
        ----
            f: Function to apply to the error

        Returns:
        -------
            New Failure with transformed error

        """
        return Failure(f(self.error))


Result = Success[T] | Failure[E]
