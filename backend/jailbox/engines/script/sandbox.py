"""
RestrictedPython sandbox for script execution.

Allowed: safe builtins (dict, list, str, int, range, sorted, len, ...),
json, datetime/date/time/timedelta, and the context objects
(bucket, log, Ok, Err, file error classes).

Blocked: open, exec, eval, __import__, compile, os, subprocess, process exit.
"""

import json
import operator
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Any

from RestrictedPython import compile_restricted_exec
from RestrictedPython.Eval import default_guarded_getitem, default_guarded_getiter
from RestrictedPython.Guards import (
    full_write_guard,
    guarded_iter_unpack_sequence,
    guarded_unpack_sequence,
    safe_builtins,
    safer_getattr,
)

from .errors import CompileError

# Exceptions that would stop the host process rather than the invocation.
_BLOCKED_BUILTINS = ("SystemExit", "KeyboardInterrupt", "GeneratorExit")

_INPLACE_OPS = {
    "+=": operator.iadd,
    "-=": operator.isub,
    "*=": operator.imul,
    "/=": operator.itruediv,
    "//=": operator.ifloordiv,
    "%=": operator.imod,
    "|=": operator.ior,
    "&=": operator.iand,
}


@dataclass(frozen=True)
class CompiledScript:
    code: Any
    filename: str
    warnings: list[str] = field(default_factory=list)


def _inplacevar(op: str, x: Any, y: Any) -> Any:
    fn = _INPLACE_OPS.get(op)
    if fn is None:
        raise SyntaxError(f"In-place operator {op!r} is not allowed")
    return fn(x, y)


def _make_safe_builtins() -> dict[str, Any]:
    b = dict(safe_builtins)
    for name in _BLOCKED_BUILTINS:
        b.pop(name, None)
    return b


def _make_guard_globals() -> dict[str, Any]:
    """Guards required by RestrictedPython's rewritten bytecode."""
    return {
        "_getattr_": safer_getattr,
        "_getiter_": default_guarded_getiter,
        "_getitem_": default_guarded_getitem,
        "_iter_unpack_sequence_": guarded_iter_unpack_sequence,
        "_unpack_sequence_": guarded_unpack_sequence,
        "_write_": full_write_guard,
        "_inplacevar_": _inplacevar,
    }


def _make_extra_globals() -> dict[str, Any]:
    """Extra safe symbols: json, datetime, date, time, timedelta."""
    return {
        "json": json,
        "datetime": datetime,
        "date": date,
        "time": time,
        "timedelta": timedelta,
    }


def compile_script(script: str, filename: str = "<script>") -> CompiledScript:
    """
    Compile script with RestrictedPython.

    Raises CompileError carrying every diagnostic when the source is rejected.
    Warnings are kept on the returned CompiledScript.
    """
    result = compile_restricted_exec(script, filename)
    if result.errors or result.code is None:
        raise CompileError(list(result.errors) or ["RestrictedPython: compile failed"])
    return CompiledScript(code=result.code, filename=filename, warnings=list(result.warnings))


def build_restricted_globals(context_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Build the globals dict for exec(compiled, globals): safe builtins, guards,
    extra (json, datetime), and context (bucket, log, Ok, Err, error classes).
    """
    safe = _make_safe_builtins()
    g: dict[str, Any] = {
        "__builtins__": safe,
        "__name__": "script",
        "__metaclass__": type,
    }
    g.update(_make_guard_globals())
    g.update(_make_extra_globals())
    # Container/utility builtins that safe_builtins leaves out.
    import builtins  # local import to avoid polluting globals

    for name in ("list", "dict", "set", "tuple", "len", "range", "min", "max", "sum", "abs", "sorted", "enumerate", "any", "all"):
        obj = safe.get(name, getattr(builtins, name, None))
        if obj is not None:
            g[name] = obj
    g.update(context_dict)
    return g
