"""
Bucket module for script engine: read, list (read-only, confined to the root).

Every call goes through confine(); a Deny becomes AccessDenied. Permitted
paths are then resolved with realpath and re-checked, so symlinks are
followed only while their target stays inside the root.

list() returns entry names sorted lexicographically so output is reproducible
across filesystems, and omits symlinks whose target lies outside the root.
"""

import logging
import os

from jailbox.core.confine import Deny, confine, is_within

from ..errors import AccessDenied, IOFailure, NotFound

logger = logging.getLogger(__name__)


class CapabilityBucket:
    """
    Script-facing file access. Created fresh per invocation; holds the
    canonical root plus per-call counters (reads, lists, denials).
    """

    def __init__(self, root: str) -> None:
        self._root = root
        self._reads = 0
        self._lists = 0
        self._denials = 0

    def _resolve(self, requested: str) -> str:
        if not isinstance(requested, str):
            raise TypeError(f"path must be a string, not {type(requested).__name__}")
        decision = confine(self._root, requested)
        if isinstance(decision, Deny):
            self._denials += 1
            logger.warning("Denied script path %r: %s", requested, decision.reason)
            raise AccessDenied(f"Access to this path is not allowed: {requested}")
        real = os.path.realpath(decision.path)
        if not is_within(self._root, real):
            self._denials += 1
            logger.warning("Denied script path %r: symlink resolves outside root", requested)
            raise AccessDenied(f"Access to this path is not allowed: {requested}")
        return real

    def read(self, path: str) -> str:
        """Return the text of a file under the root."""
        real = self._resolve(path)
        self._reads += 1
        if not os.path.isfile(real):
            raise NotFound(f"File not found: {path}")
        try:
            with open(real, encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise IOFailure(f"Failed to read file {path}: {e}", cause=e) from e

    def list(self, path: str = "") -> list[str]:
        """Return the sorted entry names of a directory under the root (no recursion)."""
        real = self._resolve(path)
        self._lists += 1
        if not os.path.isdir(real):
            raise NotFound(f"Directory not found: {path}")
        try:
            names = os.listdir(real)
        except OSError as e:
            raise IOFailure(f"Failed to read directory {path}: {e}", cause=e) from e
        # Links leading outside the root are hidden; read() would refuse them.
        return sorted(
            name
            for name in names
            if is_within(self._root, os.path.realpath(os.path.join(real, name)))
        )

    def stats(self) -> dict[str, int]:
        return {"reads": self._reads, "lists": self._lists, "denials": self._denials}
