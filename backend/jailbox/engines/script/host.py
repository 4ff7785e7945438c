"""
ScriptHost: compile a script once, run its entry points, classify the result.

One host is bound to one script source and one root boundary for its lifetime.
Each invocation walks idle -> compiling -> ready -> invoking -> done:

- compiling: the RestrictedPython code object is built once and cached (a
  compile failure is cached as well, so it is never retried) and the
  invocation ends as Faulted(CompileError).
- ready: the code runs into a fresh globals dict with a fresh
  CapabilityBucket, then the entry point is looked up.
- invoking: the entry point is called with the fixed argument tuple. There is
  no internal timeout; a runaway script blocks its calling thread.
- done: the return value or raised exception goes through classify().

A scratch scope is acquired before each invocation and released afterwards on
every path.
"""

import logging
import os
import threading
from enum import Enum
from pathlib import Path
from typing import Any

from jailbox.core.scope import ScratchHandle, ScratchScopeManager

from .context import ScriptContext
from .errors import CompileError, InvocationFault
from .outcome import EngineFault, Faulted, Outcome, Rejected, classify
from .sandbox import CompiledScript, build_restricted_globals, compile_script

_log = logging.getLogger(__name__)

# Entry point name -> number of string arguments it takes.
ENTRY_POINTS: dict[str, int] = {"collect": 0, "check": 1}


class HostState(str, Enum):
    IDLE = "idle"
    COMPILING = "compiling"
    READY = "ready"
    INVOKING = "invoking"
    DONE = "done"


def canonical_root(root: str | Path) -> str:
    """Resolve the root boundary once: absolute, symlink-free, must be a directory."""
    real = os.path.realpath(os.fspath(root))
    if not os.path.isdir(real):
        raise ValueError(f"Context directory does not exist: {root}")
    return real


class Invocation:
    """A single run of one entry point. Not reusable."""

    def __init__(self, host: "ScriptHost", entry: str, args: tuple[Any, ...]) -> None:
        self.host = host
        self.entry = entry
        self.args = args
        self.state = HostState.IDLE
        self.outcome: Outcome | None = None

    def _move(self, state: HostState) -> None:
        _log.debug("Invocation %s: %s -> %s", self.entry, self.state.value, state.value)
        self.state = state

    def _check_request(self) -> None:
        arity = ENTRY_POINTS.get(self.entry)
        if arity is None:
            raise InvocationFault(f"unknown entry point {self.entry!r}")
        if len(self.args) != arity:
            raise InvocationFault(
                f"entry point {self.entry!r} takes {arity} argument(s), got {len(self.args)}"
            )
        for arg in self.args:
            if not isinstance(arg, str):
                raise InvocationFault(
                    f"entry point arguments must be strings, not {type(arg).__name__}"
                )

    def _finish(self, raw: Any) -> Outcome:
        outcome = classify(raw)
        self.outcome = outcome
        self._move(HostState.DONE)
        return outcome

    def run(self) -> Outcome:
        if self.state is not HostState.IDLE:
            raise RuntimeError("Invocation has already run")
        host = self.host
        self._move(HostState.COMPILING)
        try:
            self._check_request()
            compiled = host.compiled()
        except (CompileError, InvocationFault) as e:
            return self._finish(EngineFault(e))

        raw: Any
        try:
            with host.scopes.scope() as scratch:
                raw = self._execute(compiled, scratch)
        except OSError as e:
            # Scratch directory could not be created.
            raw = EngineFault(e)
        return self._finish(raw)

    def _execute(self, compiled: CompiledScript, scratch: ScratchHandle) -> Any:
        host = self.host
        ctx = ScriptContext(
            root=host.root, entry=self.entry, scratch=scratch, logger=host.script_logger
        )
        g = build_restricted_globals(ctx.to_dict())
        try:
            exec(compiled.code, g)  # noqa: S102 - restricted environment
            self._move(HostState.READY)
            fn = g.get(self.entry)
            if not callable(fn):
                raise InvocationFault(f"entry point {self.entry!r} is not defined")
            self._move(HostState.INVOKING)
            return fn(*self.args)
        except (KeyboardInterrupt, SystemExit):
            # Not constructible from script code; these come from the host process.
            raise
        except BaseException as e:
            return EngineFault(e)
        finally:
            _log.debug("Invocation %s bucket stats: %s", self.entry, ctx.bucket.stats())


class ScriptHost:
    """
    Run entry points of one RestrictedPython script against one root boundary.

    invoke(entry, args) -> Success | Rejected | Faulted. Never raises for
    script or engine problems; those become Faulted.
    """

    def __init__(
        self,
        source: str,
        root: str | Path,
        *,
        filename: str = "<script>",
        scopes: ScratchScopeManager | None = None,
        script_logger: logging.Logger | None = None,
    ) -> None:
        self.source = source
        self.filename = filename
        self.root = canonical_root(root)
        self.scopes = scopes or ScratchScopeManager()
        self.script_logger = script_logger
        self._compiled: CompiledScript | None = None
        self._compile_error: CompileError | None = None
        self._compile_lock = threading.Lock()

    @classmethod
    def from_path(
        cls,
        script_path: str | Path,
        root: str | Path,
        **kwargs: Any,
    ) -> "ScriptHost":
        path = Path(script_path)
        source = path.read_text(encoding="utf-8")
        return cls(source, root, filename=str(path), **kwargs)

    def compiled(self) -> CompiledScript:
        """Compiled form of the script; raises the cached CompileError on failure."""
        with self._compile_lock:
            if self._compiled is None and self._compile_error is None:
                try:
                    self._compiled = compile_script(self.source, self.filename)
                except CompileError as e:
                    _log.error("Script %s failed to compile: %s", self.filename, e.diagnostics)
                    self._compile_error = e
                else:
                    for w in self._compiled.warnings:
                        _log.warning("Script %s: %s", self.filename, w)
            if self._compile_error is not None:
                raise self._compile_error
            assert self._compiled is not None
            return self._compiled

    def start(self, entry: str, args: tuple[Any, ...] = ()) -> Invocation:
        return Invocation(self, entry, tuple(args))

    def invoke(self, entry: str, args: tuple[Any, ...] = ()) -> Outcome:
        outcome = self.start(entry, args).run()
        if isinstance(outcome, Faulted):
            _log.error(
                "Script %s entry %s faulted (%s): %s",
                self.filename,
                entry,
                outcome.fault,
                outcome.diagnostic,
            )
        elif isinstance(outcome, Rejected):
            _log.info("Script %s entry %s rejected: %s", self.filename, entry, outcome.reason)
        return outcome

    def collect(self) -> Outcome:
        return self.invoke("collect")

    def check(self, user_input: str) -> Outcome:
        return self.invoke("check", (user_input,))
