"""rollkit: stateless functionals for sequences.

The headline functional is :func:`rollkit.functional.rolling.roll_apply`, which
applies an aggregation to every fixed-size sliding window of a sequence.
"""

from rollkit.core.errors import InvalidArgument, RollkitError
from rollkit.functional.rolling import roll_apply, rolling_mean, rolling_median

__all__ = [
    "InvalidArgument",
    "RollkitError",
    "roll_apply",
    "rolling_mean",
    "rolling_median",
]
