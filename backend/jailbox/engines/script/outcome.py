"""
Outcome translation: flatten whatever an entry point returned or raised into
exactly one of Success(text), Rejected(text), Faulted(diagnostic).

Inputs to classify():
    EngineFault(error)  the engine raised (compile error, missing entry point,
                        uncaught script exception)         -> Faulted
    Ok(value)           application success                -> Success(json)
    Err(payload)        application error                  -> Rejected(text)
                        (Faulted when payload is an internal exception)
    anything else       bare value, treated as Ok(value)   -> Success(json)

Payloads first go through to_boundary_value(), which maps an arbitrary Python
object onto the closed variant StructuredValue | PlainText | Unconvertible:
JSON serialization is tried first, then the object's own text form; anything
else is Unconvertible and the outcome is Faulted.

Only Success and Rejected are safe to forward to remote callers. Faulted
carries host detail and must be logged, not forwarded.
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import BucketError, HostFault, UnclassifiableValue
from .result import Err, Ok

logger = logging.getLogger(__name__)

INTERNAL_FAULT = "InternalFault"


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    REJECTED = "rejected"
    FAULTED = "faulted"


@dataclass(frozen=True)
class Success:
    body: str
    kind = OutcomeKind.SUCCESS


@dataclass(frozen=True)
class Rejected:
    reason: str
    kind = OutcomeKind.REJECTED


@dataclass(frozen=True)
class Faulted:
    """Internal defect. ``fault`` names the class of fault, ``diagnostic`` the detail."""

    fault: str
    diagnostic: str
    kind = OutcomeKind.FAULTED


Outcome = Success | Rejected | Faulted


@dataclass(frozen=True)
class EngineFault:
    """An exception raised while compiling, loading or calling a script."""

    error: BaseException


# ---------------------------------------------------------------------------
# Boundary values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StructuredValue:
    json_text: str


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class Unconvertible:
    shape: str


BoundaryValue = StructuredValue | PlainText | Unconvertible


def _shape(value: Any) -> str:
    return type(value).__qualname__


def _defines_str(value: Any) -> bool:
    """True if the value's class (not just object) provides __str__."""
    return any("__str__" in vars(cls) for cls in type(value).__mro__ if cls is not object)


def to_boundary_value(value: Any) -> BoundaryValue:
    if isinstance(value, BaseException):
        return Unconvertible(_shape(value))
    try:
        return StructuredValue(
            json.dumps(value, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
        )
    except (TypeError, ValueError, RecursionError):
        pass
    if isinstance(value, bytes | bytearray):
        try:
            return PlainText(bytes(value).decode("utf-8"))
        except UnicodeDecodeError:
            return Unconvertible(_shape(value))
    if _defines_str(value):
        try:
            return PlainText(str(value))
        except Exception:
            return Unconvertible(_shape(value))
    return Unconvertible(_shape(value))


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def _fault_from_exception(error: BaseException) -> Faulted:
    kind = error.kind if isinstance(error, HostFault) else type(error).__name__
    return Faulted(fault=kind, diagnostic=f"{type(error).__name__}: {error}")


def _unclassifiable(arm: str, bv: Unconvertible) -> Faulted:
    error = UnclassifiableValue(f"{arm} payload of type {bv.shape} cannot be converted to text")
    return _fault_from_exception(error)


def _success(value: Any) -> Outcome:
    bv = to_boundary_value(value)
    if isinstance(bv, StructuredValue):
        return Success(bv.json_text)
    if isinstance(bv, PlainText):
        return Success(json.dumps(bv.text, ensure_ascii=False))
    return _unclassifiable("success", bv)


def _rejection(payload: Any) -> Outcome:
    if isinstance(payload, BaseException):
        if isinstance(payload, BucketError) and not payload.internal:
            return Rejected(str(payload))
        # A real internal exception relabeled as an application error.
        return Faulted(
            fault=INTERNAL_FAULT,
            diagnostic=f"error payload carries internal exception {type(payload).__name__}: {payload}",
        )
    if isinstance(payload, str):
        return Rejected(payload)
    bv = to_boundary_value(payload)
    if isinstance(bv, StructuredValue):
        return Rejected(bv.json_text)
    if isinstance(bv, PlainText):
        return Rejected(bv.text)
    return _unclassifiable("error", bv)


def classify(raw: Any) -> Outcome:
    """Map an engine return value or EngineFault onto exactly one Outcome."""
    if isinstance(raw, EngineFault):
        return _fault_from_exception(raw.error)
    if isinstance(raw, Ok):
        return _success(raw.value)
    if isinstance(raw, Err):
        return _rejection(raw.payload)
    return _success(raw)
