"""Predicate functionals.

Each helper takes a predicate ``f`` (any callable whose result is interpreted
as true or false) and a sequence ``x``.

Examples:
    >>> is_even = lambda v: v % 2 == 0
    >>> keep(is_even, [1, 2, 3, 4])
    [2, 4]
    >>> position(is_even, [1, 2, 3, 4], right=True)
    3
    >>> find(is_even, [1, 3]) is None
    True
"""

import typing as tp

__all__ = [
    "where",
    "keep",
    "discard",
    "find",
    "position",
    "every",
    "some",
]

T = tp.TypeVar("T")
Predicate = tp.Callable[[T], tp.Any]


def where(f: Predicate, x: tp.Iterable[T]) -> tp.List[bool]:
    """Return the truth value of ``f`` for every element of ``x``."""
    return [bool(f(value)) for value in x]


def keep(f: Predicate, x: tp.Iterable[T]) -> tp.List[T]:
    """Return the elements of ``x`` for which ``f`` is true, in order."""
    return [value for value in x if f(value)]


def discard(f: Predicate, x: tp.Iterable[T]) -> tp.List[T]:
    """Return the elements of ``x`` for which ``f`` is false, in order."""
    return [value for value in x if not f(value)]


def position(f: Predicate, x: tp.Sequence[T], right: bool = False) -> tp.Optional[int]:
    """Index of the first element matching ``f``, or the last one if ``right``.

    Evaluation stops at the first match, scanning from the end when ``right``
    is True. Returns None when nothing matches.
    """
    indices = range(len(x) - 1, -1, -1) if right else range(len(x))
    for i in indices:
        if f(x[i]):
            return i
    return None


def find(f: Predicate, x: tp.Sequence[T], right: bool = False) -> tp.Optional[T]:
    """First element matching ``f`` (last one if ``right``), or None.

    None is ambiguous when ``x`` itself may contain None; use
    :func:`position` in that case.
    """
    i = position(f, x, right=right)
    return None if i is None else x[i]


def every(f: Predicate, x: tp.Iterable[T]) -> bool:
    # True for an empty sequence
    return all(f(value) for value in x)


def some(f: Predicate, x: tp.Iterable[T]) -> bool:
    return any(f(value) for value in x)
