"""Result type for explicit error handling.

Operations that can fail return ``Ok(value)`` or ``Err(error)`` instead of
raising. Callers check with ``isinstance`` and return the ``Err`` unchanged
when they cannot handle it:

    parsed = parse_package_ref("@acme/cart@1.2.0")
    if isinstance(parsed, Err):
        return parsed
    ref = parsed.value

Pattern matching works too:

    match parse_descriptor("shop:android:5.0.0"):
        case Ok(descriptor):
            ...
        case Err(error):
            console.error(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result carrying ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result carrying ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Union[Ok[T], Err[E]]

