"""
Health-check helpers for liveness and readiness probes.

Liveness:  is the process alive and not deadlocked?  (cheap, no I/O)
Readiness: can it serve traffic?  (context directory present + script compiles)
"""

import logging
import os

from jailbox.engines.script import CompileError, ScriptHost

logger = logging.getLogger(__name__)


def check_context_dir(host: ScriptHost) -> bool:
    """Root boundary still exists and is a directory."""
    return os.path.isdir(host.root)


def check_script_compiles(host: ScriptHost) -> bool:
    try:
        host.compiled()
        return True
    except CompileError:
        logger.warning("Readiness: script %s does not compile", host.filename)
        return False


def liveness_check() -> tuple[bool, list[str]]:
    return True, []


def readiness_check(host: ScriptHost) -> tuple[bool, list[str]]:
    """Return (ok, failures). failures names each check that did not pass."""
    failures: list[str] = []
    if not check_context_dir(host):
        failures.append("context_dir")
    if not check_script_compiles(host):
        failures.append("script")
    return not failures, failures
