"""Folds over whole sequences.

:func:`reduce` collapses a sequence to a single value by repeatedly applying a
binary function, optionally keeping every intermediate value. It works on any
Python objects. :func:`associative_accumulate` is the array counterpart for
associative operators, computed with ``jax.lax.associative_scan`` in
logarithmic depth.

Examples:
    >>> import operator
    >>> reduce(operator.add, [1, 2, 3, 4])
    10
    >>> reduce(operator.add, [1, 2, 3, 4], accumulate=True)
    [1, 3, 6, 10]
    >>> reduce(lambda a, b: f"({a}{b})", "abc", right=True)
    '(a(bc))'
"""

import typing as tp

import jax
import jax.numpy as jnp
import numpy as np

from rollkit.core.errors import InvalidArgument

__all__ = ["reduce", "associative_accumulate"]

_MISSING = object()


def reduce(
    f: tp.Callable[[tp.Any, tp.Any], tp.Any],
    x: tp.Iterable[tp.Any],
    init: tp.Any = _MISSING,
    *,
    accumulate: bool = False,
    right: bool = False,
) -> tp.Any:
    """Fold ``x`` with the binary function ``f``.

    A left fold computes ``f(f(f(init, x0), x1), x2)``. With ``right=True``
    the fold starts from the end and computes ``f(x0, f(x1, f(x2, init)))``.
    When ``init`` is omitted the first element (last for a right fold) seeds
    the fold, so a one-element sequence reduces to that element without
    calling ``f``.

    Args:
        f: Binary function. For a left fold it is called as ``f(acc, value)``,
            for a right fold as ``f(value, acc)``.
        x: Sequence to reduce.
        init: Optional seed value.
        accumulate: If True, return every intermediate value instead of the
            final one. For a right fold element ``i`` is the reduction of
            ``x[i:]``.
        right: Fold from the right.

    Returns:
        The reduced value, or the list of intermediate values when
        ``accumulate`` is True (``len(x)`` entries, one more if ``init`` is
        given).

    Raises:
        InvalidArgument: If ``x`` is empty and no ``init`` is given.
    """
    values = list(x)
    if right:
        values.reverse()
        step = lambda acc, value: f(value, acc)  # noqa: E731
    else:
        step = f

    if init is _MISSING:
        if not values:
            raise InvalidArgument(
                "Cannot reduce an empty sequence without an initial value."
            )
        acc, rest = values[0], values[1:]
    else:
        acc, rest = init, values

    history = [acc]
    for value in rest:
        acc = step(acc, value)
        if accumulate:
            history.append(acc)

    if not accumulate:
        return acc
    return history[::-1] if right else history


def associative_accumulate(
    op: tp.Callable[[jax.Array, jax.Array], jax.Array],
    x: tp.Union[jax.Array, np.ndarray, tp.Sequence[float]],
    reverse: bool = False,
) -> jax.Array:
    """Inclusive prefix reduction of ``x`` with an associative operator.

    Equivalent to ``reduce(op, x, accumulate=True)`` for associative ``op``
    such as ``jnp.add``, ``jnp.multiply``, ``jnp.maximum`` or ``jnp.minimum``,
    but evaluated as a parallel scan. A running maximum, for instance, is the
    peak series used to compute drawdowns.

    Args:
        op: Associative, element-wise binary JAX function.
        x: One-dimensional input array.
        reverse: Accumulate from the end, so that element ``i`` is the
            reduction of ``x[i:]``.

    Returns:
        Array with the same shape as ``x``.

    Raises:
        InvalidArgument: If ``x`` is not a non-empty one-dimensional array.
    """
    values = jnp.asarray(x)
    if values.ndim != 1 or values.shape[0] == 0:
        raise InvalidArgument(
            f"Expected a non-empty one-dimensional array, got shape {values.shape}."
        )
    return jax.lax.associative_scan(op, values, reverse=reverse)
