"""Mapping functionals.

Thin, eager wrappers around element-wise application:

    - :func:`map_values` calls a function on every element, forwarding extra
      arguments that stay fixed across calls.
    - :func:`zip_map` iterates over several sequences in parallel.
    - :func:`invoke_all` does the opposite and calls several functions on the
      same arguments, which is handy to compute a set of summaries at once.

Examples:
    >>> map_values(round, [1.234, 5.678], 1)
    [1.2, 5.7]
    >>> zip_map(lambda w, v: w * v, [1, 2], [10, 20])
    [10, 40]
    >>> invoke_all({"lo": min, "hi": max}, [3, 1, 2])
    {'lo': 1, 'hi': 3}
"""

import typing as tp

from rollkit.core.errors import InvalidArgument

__all__ = ["map_values", "zip_map", "invoke_all"]


def map_values(
    f: tp.Callable[..., tp.Any], x: tp.Iterable[tp.Any], *args: tp.Any, **kwargs: tp.Any
) -> tp.List[tp.Any]:
    """Return ``[f(v, *args, **kwargs) for v in x]``."""
    return [f(value, *args, **kwargs) for value in x]


def zip_map(
    f: tp.Callable[..., tp.Any], *xs: tp.Sequence[tp.Any], **kwargs: tp.Any
) -> tp.List[tp.Any]:
    """Call ``f`` on the i-th elements of every sequence in ``xs``.

    Unlike :func:`zip`, unequal lengths are an error instead of a silent
    truncation.

    Args:
        f: Function taking one positional argument per sequence.
        *xs: Sequences of equal length.
        **kwargs: Fixed keyword arguments forwarded to every call.

    Returns:
        List of results, one per position.

    Raises:
        InvalidArgument: If no sequence is given or the lengths differ.
    """
    if not xs:
        raise InvalidArgument("zip_map needs at least one sequence.")

    lengths = {len(x) for x in xs}
    if len(lengths) != 1:
        raise InvalidArgument(
            f"All sequences must have the same length, got lengths {sorted(lengths)}."
        )

    return [f(*values, **kwargs) for values in zip(*xs)]


def invoke_all(
    fs: tp.Union[tp.Mapping[str, tp.Callable[..., tp.Any]], tp.Iterable[tp.Callable[..., tp.Any]]],
    *args: tp.Any,
    **kwargs: tp.Any,
) -> tp.Dict[str, tp.Any]:
    """Call every function in ``fs`` with the same arguments.

    Args:
        fs: Mapping of name to function, or an iterable of functions keyed by
            their ``__name__``.
        *args: Positional arguments for every call.
        **kwargs: Keyword arguments for every call.

    Returns:
        Dictionary of results, keyed like ``fs``.

    Raises:
        InvalidArgument: If two functions of an iterable share a name.
    """
    if isinstance(fs, tp.Mapping):
        named = dict(fs)
    else:
        named = {}
        for f in fs:
            name = getattr(f, "__name__", repr(f))
            if name in named:
                raise InvalidArgument(f"Duplicate function name '{name}'.")
            named[name] = f

    return {name: f(*args, **kwargs) for name, f in named.items()}
