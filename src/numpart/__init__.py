# src/numpart/__init__.py
from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("numpart")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .config import has_profile, load_settings
from .recurrences import (
    PartitionSequence,
    is_partition_number,
    partition,
    partition_values,
    pent,
    pentagonal_indices,
    pentagonal_numbers,
    pentagonal_signs,
)
from .runtime import APPLY, CFG
from .utility import UserInputError

__all__ = [
    "APPLY",
    "CFG",
    "PartitionSequence",
    "UserInputError",
    "__version__",
    "has_profile",
    "is_partition_number",
    "load_settings",
    "partition",
    "partition_values",
    "pent",
    "pentagonal_indices",
    "pentagonal_numbers",
    "pentagonal_signs",
]
