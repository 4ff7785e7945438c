"""
Script engine (Python, RestrictedPython).

Exports: ScriptHost, ScriptContext, CapabilityBucket, classify and the outcome types.
"""

from .context import ScriptContext
from .errors import (
    AccessDenied,
    BucketError,
    CompileError,
    HostFault,
    InvocationFault,
    IOFailure,
    NotFound,
    UnclassifiableValue,
)
from .host import ENTRY_POINTS, HostState, Invocation, ScriptHost
from .modules import CapabilityBucket
from .outcome import EngineFault, Faulted, Outcome, OutcomeKind, Rejected, Success, classify
from .result import Err, Ok
from .sandbox import build_restricted_globals, compile_script

__all__ = [
    "ENTRY_POINTS",
    "AccessDenied",
    "BucketError",
    "CapabilityBucket",
    "CompileError",
    "EngineFault",
    "Err",
    "Faulted",
    "HostFault",
    "HostState",
    "IOFailure",
    "Invocation",
    "InvocationFault",
    "NotFound",
    "Ok",
    "Outcome",
    "OutcomeKind",
    "Rejected",
    "ScriptContext",
    "ScriptHost",
    "Success",
    "UnclassifiableValue",
    "build_restricted_globals",
    "classify",
    "compile_script",
]
