"""
Two-armed result value visible to scripts as ``Ok(value)`` and ``Err(payload)``.

An entry point returning ``Ok(x)`` succeeds with ``x``; returning ``Err(msg)``
rejects with ``msg``. Any other return value is treated as a success payload.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Ok:
    value: Any = None

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True)
class Err:
    payload: Any = None

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True
