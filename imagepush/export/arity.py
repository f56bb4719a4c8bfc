"""Explicit arity check for collections."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from imagepush.types import ArityError

T = TypeVar("T")


@dataclass(frozen=True)
class ArityResult(Generic[T]):
    """Tagged outcome of an exactly-one check.

    Attributes:
        count: Number of items observed.
        value: The single item when the check passed.
        error: Why the check failed, or None on success.
    """

    count: int
    value: T | None = None
    error: ArityError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def exactly_one(items: Sequence[T]) -> ArityResult[T]:
    """Check that ``items`` holds exactly one element.

    Args:
        items: Sequence to inspect.

    Returns:
        ArityResult carrying the single element, or ArityError.EMPTY /
        ArityError.TOO_MANY.
    """
    count = len(items)
    if count == 0:
        return ArityResult(count=0, error=ArityError.EMPTY)
    if count > 1:
        return ArityResult(count=count, error=ArityError.TOO_MANY)
    return ArityResult(count=1, value=items[0])


__all__ = ["ArityResult", "exactly_one"]
