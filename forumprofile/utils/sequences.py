"""Small helpers over iterables."""

from typing import Callable, Iterable, TypeVar

T = TypeVar("T")


def find_first(iterable: Iterable[T], predicate: Callable[[T], bool]) -> T | None:
    """Return the first element for which the predicate is true, else None."""
    for item in iterable:
        if predicate(item):
            return item
    return None


def reduce_no_seed(iterable: Iterable[T], combine: Callable[[T, T], T]) -> T | None:
    """
    Like functools.reduce, but the first element is the initial value.

    Returns None for an empty iterable.
    """
    iterator = iter(iterable)
    try:
        accumulated = next(iterator)
    except StopIteration:
        return None
    for item in iterator:
        accumulated = combine(accumulated, item)
    return accumulated


def clamp(value, lower, upper):
    """Return value limited to the closed interval [lower, upper]."""
    assert lower <= upper, f"empty interval [{lower}, {upper}]"
    if value < lower:
        return lower
    if value > upper:
        return upper
    return value


def any_match(iterable: Iterable[T], predicate: Callable[[T], bool]) -> bool:
    """True if any element satisfies the predicate. Stops at the first match."""
    for item in iterable:
        if predicate(item):
            return True
    return False


def all_match(iterable: Iterable[T], predicate: Callable[[T], bool]) -> bool:
    """True if every element satisfies the predicate. Stops at the first miss."""
    for item in iterable:
        if not predicate(item):
            return False
    return True
