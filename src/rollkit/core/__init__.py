"""Errors and configuration shared by the functionals."""

from rollkit.core.errors import RollkitError, InvalidArgument
from rollkit.core.config import Settings, settings

__all__ = [
    "RollkitError",
    "InvalidArgument",
    "Settings",
    "settings",
]
