"""
Result type for operations that can fail with a reason.

Services return ``Success`` or ``Failure`` instead of raising when the
failure is an expected business outcome the caller maps to a response.
"""

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Success:
    """Operation succeeded, optionally carrying a value."""
    value: Any = None


@dataclass(frozen=True)
class Failure:
    """Operation failed for the given reason."""
    error: str


Result = Union[Success, Failure]
