"""
Error types for the script engine.

File layer (raised into script code, catchable there):
    BucketError -> AccessDenied, NotFound, IOFailure

Host layer (never seen by scripts, always classified as Faulted):
    HostFault -> CompileError, InvocationFault, UnclassifiableValue
"""


class BucketError(Exception):
    """Base for errors raised by the bucket into script code."""

    kind = "IOFailure"
    # Internal errors are promoted to Faulted even when a script wraps them in Err(...).
    internal = True


class AccessDenied(BucketError):
    kind = "NotAllowed"
    internal = False


class NotFound(BucketError):
    kind = "NotFound"
    internal = False


class IOFailure(BucketError):
    """Read failed on a permitted path; ``cause`` is the underlying OSError/UnicodeError."""

    kind = "IOFailure"
    internal = True

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class HostFault(Exception):
    """Engine-level defect. Terminates the current invocation only."""

    kind = "HostFault"


class CompileError(HostFault):
    kind = "CompileError"

    def __init__(self, diagnostics: list[str]) -> None:
        self.diagnostics = list(diagnostics)
        super().__init__("; ".join(self.diagnostics) or "script compile failed")


class InvocationFault(HostFault):
    kind = "InvocationFault"


class UnclassifiableValue(HostFault):
    kind = "UnclassifiableValue"
