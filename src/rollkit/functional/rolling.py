"""Rolling window functionals.

This module applies an aggregation function to every fixed-size sliding window
of a sequence. The output is aligned with the input: it always has the same
length, and positions for which no complete window exists are padded.

Window geometry:
    For a window size ``n`` the offset is ``n // 2``. The result of the window
    ``x[i - offset : i - offset + n]`` is stored at position ``i``, for every
    ``i`` in ``[offset, len(x) - n + offset]``. Every window therefore holds
    exactly ``n`` elements.

    For odd ``n`` position ``i`` is the middle element of its window. For even
    ``n`` the window holds ``n / 2`` elements before ``i`` and ``n / 2 - 1``
    after it, so the result lands on the element right of the window's centre.

Padding:
    :func:`roll_apply` pads with ``None`` rather than a numeric marker such as
    ``NaN``, so undefined positions can never be mistaken for results.
    :func:`vmap_roll_apply` returns an explicit boolean ``defined`` mask next to
    its values for the same reason.

Examples:
    >>> from statistics import mean
    >>> from rollkit.functional.rolling import roll_apply
    >>>
    >>> roll_apply([1, 2, 3, 4, 5], 3, mean)
    [None, 2, 3, 4, None]
    >>>
    >>> # Extra arguments are forwarded to the aggregation
    >>> roll_apply([3, 1, 2, 5], 3, sorted, reverse=True)
    [None, [3, 2, 1], [5, 2, 1], None]

See Also:
    - :mod:`rollkit.functional.reduce`: Folds over a whole sequence.
"""

import numbers
import statistics
import typing as tp
from concurrent.futures import ThreadPoolExecutor, as_completed
from functools import partial

import annotated_types as at
import jax
import jax.numpy as jnp
import numpy as np
from pydantic import BaseModel, ConfigDict

from rollkit.core.config import settings
from rollkit.core.errors import InvalidArgument
from rollkit.logger.logger import logger

__all__ = [
    "RollingWindow",
    "roll_apply",
    "rolling_mean",
    "rolling_median",
    "vmap_roll_apply",
]


class RollingWindow(BaseModel):
    """Geometry of a sliding window over a sequence of a given length.

    The model is validated by Pydantic: ``size`` and ``length`` must both be
    strictly positive integers. Everything else is derived from them.

    >>> window = RollingWindow(size=3, length=5)
    >>> window.offset, window.first, window.last
    (1, 1, 3)
    >>> window.bounds(2)
    (1, 4)
    """

    size: tp.Annotated[int, at.Ge(1)]
    length: tp.Annotated[int, at.Ge(1)]

    model_config = ConfigDict(frozen=True, strict=True)

    @property
    def offset(self) -> int:
        """Number of elements a window extends to the left of its position."""
        return self.size // 2

    @property
    def first(self) -> int:
        """First output position with a complete window."""
        return self.offset

    @property
    def last(self) -> int:
        """Last output position with a complete window (``< first`` if none)."""
        return self.length - self.size + self.offset

    @property
    def n_windows(self) -> int:
        """Number of complete windows, 0 when the window exceeds the sequence."""
        return max(0, self.length - self.size + 1)

    def centres(self) -> range:
        """Output positions that receive an aggregation result."""
        return range(self.first, self.last + 1)

    def bounds(self, i: int) -> tp.Tuple[int, int]:
        """Return the ``(start, stop)`` slice of the window stored at position ``i``.

        Raises:
            IndexError: If ``i`` has no complete window.
        """
        if not self.first <= i <= self.last:
            raise IndexError(
                f"Position {i} has no complete window of size {self.size} "
                f"in a sequence of length {self.length}."
            )
        start = i - self.offset
        return start, start + self.size


def _as_sequence(x: tp.Any) -> tp.Any:
    # Anything sliceable with a length (lists, tuples, numpy or jax arrays)
    # is used as is, other iterables are materialised once.
    if hasattr(x, "__len__") and hasattr(x, "__getitem__"):
        return x
    return list(x)


def _window_for(x: tp.Any, n: tp.Any) -> RollingWindow:
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidArgument(f"Window size must be an integer, got {n!r}.")
    if n < 1:
        raise InvalidArgument(f"Window size must be at least 1, got {n}.")
    if len(x) == 0:
        raise InvalidArgument("Cannot roll over an empty sequence.")
    return RollingWindow(size=int(n), length=len(x))


def _resolve_workers(workers: tp.Optional[int]) -> int:
    workers = settings.MAX_WORKERS if workers is None else workers
    if isinstance(workers, bool) or not isinstance(workers, numbers.Integral):
        raise InvalidArgument(f"Workers must be an integer, got {workers!r}.")
    if workers < 1:
        raise InvalidArgument(f"Workers must be at least 1, got {workers}.")
    return int(workers)


def roll_apply(
    x: tp.Sequence[tp.Any],
    n: int,
    f: tp.Callable[..., tp.Any],
    *args: tp.Any,
    workers: tp.Optional[int] = None,
    **kwargs: tp.Any,
) -> tp.List[tp.Optional[tp.Any]]:
    """Apply ``f`` to every sliding window of ``n`` elements of ``x``.

    ``f`` is treated as a black box: it receives a slice of ``x`` of length
    ``n`` followed by ``*args`` and ``**kwargs`` and may return anything. The
    result for the window starting at ``i - n // 2`` is stored at position
    ``i``; positions without a complete window hold ``None``.

    Windows are independent, so they can be evaluated on a thread pool. With
    ``workers > 1`` all windows are submitted to a
    :class:`~concurrent.futures.ThreadPoolExecutor` and collected before
    returning. The output order is positional, whatever the completion order.

    Args:
        x: Input sequence of length N. It is only read, never modified.
        n: Window size, an integer >= 1. A window larger than ``x`` yields an
            output made only of ``None``.
        f: Aggregation called as ``f(window, *args, **kwargs)``.
        *args: Extra positional arguments forwarded to ``f``.
        workers: Number of threads evaluating windows. ``None`` uses
            ``settings.MAX_WORKERS``; 1 evaluates sequentially.
        **kwargs: Extra keyword arguments forwarded to ``f``.

    Returns:
        A list of length N holding the aggregation results and ``None`` padding.

    Raises:
        InvalidArgument: If ``n`` is not an integer >= 1, ``x`` is empty, or
            ``workers`` is not an integer >= 1. Nothing is evaluated in that case.
        Exception: Any exception raised by ``f`` is propagated unchanged. In
            threaded mode windows that have not started yet are cancelled.
    """
    values = _as_sequence(x)
    window = _window_for(values, n)
    workers = _resolve_workers(workers)

    logger.debug(
        f"Rolling {getattr(f, '__name__', f)!s} over {window.length} values: "
        f"size={window.size}, offset={window.offset}, "
        f"windows={window.n_windows}, workers={workers}"
    )

    out: tp.List[tp.Optional[tp.Any]] = [None] * window.length

    if workers == 1 or window.n_windows <= 1:
        for i in window.centres():
            start, stop = window.bounds(i)
            out[i] = f(values[start:stop], *args, **kwargs)
        return out

    with ThreadPoolExecutor(max_workers=workers) as executor:
        future_to_centre = {}
        for i in window.centres():
            start, stop = window.bounds(i)
            future_to_centre[executor.submit(f, values[start:stop], *args, **kwargs)] = i

        for future in as_completed(future_to_centre):
            i = future_to_centre[future]
            try:
                out[i] = future.result()
            except Exception as exc:
                logger.error(f"Aggregation failed for the window at position {i}: {exc}")
                for pending in future_to_centre:
                    pending.cancel()
                raise

    return out


def rolling_mean(
    x: tp.Sequence[float], n: int, workers: tp.Optional[int] = None
) -> tp.List[tp.Optional[float]]:
    """Centred rolling mean of ``x`` padded with ``None``."""
    return roll_apply(x, n, statistics.mean, workers=workers)


def rolling_median(
    x: tp.Sequence[float], n: int, workers: tp.Optional[int] = None
) -> tp.List[tp.Optional[float]]:
    """Centred rolling median of ``x`` padded with ``None``.

    The median is robust to outliers, which makes it the usual choice to smooth
    series with isolated spikes.
    """
    return roll_apply(x, n, statistics.median, workers=workers)


@partial(jax.jit, static_argnames=("n", "f"))
def _vmap_roll_apply(
    x: jax.Array, n: int, f: tp.Callable[[jax.Array], jax.Array]
) -> tp.Tuple[jax.Array, jax.Array]:
    length = x.shape[0]
    offset = n // 2
    n_windows = max(0, length - n + 1)

    values = jnp.zeros(length)
    defined = jnp.zeros(length, dtype=bool)
    if n_windows == 0:
        return values, defined

    # Gather every window as one row of a (n_windows, n) matrix
    starts = jnp.arange(n_windows)
    windows = jax.vmap(lambda s: jax.lax.dynamic_slice(x, (s,), (n,)))(starts)
    results = jax.vmap(f)(windows)

    values = values.at[offset : offset + n_windows].set(results)
    defined = defined.at[offset : offset + n_windows].set(True)
    return values, defined


def vmap_roll_apply(
    x: tp.Union[jax.Array, np.ndarray, tp.Sequence[float]],
    n: int,
    f: tp.Callable[[jax.Array], jax.Array],
) -> tp.Tuple[jax.Array, jax.Array]:
    """Vectorised rolling apply for JAX-traceable aggregations.

    Same window geometry as :func:`roll_apply`, but all windows are gathered
    into a matrix and reduced in one ``jax.vmap`` call under ``jax.jit``. This
    is much faster for long arrays, at the price of requiring ``f`` to be a
    JAX-traceable function mapping a 1D array of length ``n`` to a scalar
    (e.g. ``jnp.mean``, ``jnp.max``, ``jnp.std``). ``n`` and ``f`` are static
    arguments: each new combination triggers one compilation.

    Args:
        x: One-dimensional input array of length N.
        n: Window size, an integer >= 1.
        f: JAX-traceable aggregation over a window.

    Returns:
        A tuple ``(values, defined)`` of arrays of length N. ``values`` holds
        the results as floats and 0.0 where undefined, ``defined`` is the
        boolean mask telling which positions hold a result.

    Raises:
        InvalidArgument: If ``x`` is not one-dimensional, is empty, or ``n``
            is not an integer >= 1.
    """
    values = jnp.asarray(x)
    if values.ndim != 1:
        raise InvalidArgument(
            f"Expected a one-dimensional array, got shape {values.shape}."
        )
    window = _window_for(values, n)
    return _vmap_roll_apply(values, window.size, f)
