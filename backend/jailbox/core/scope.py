"""
Per-invocation scratch directories.

acquire() -> ScratchHandle(id, path); release(handle) removes the directory.
release is idempotent; scope() pairs exactly one release with each acquire,
whatever happens inside the block.
"""

import logging
import shutil
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

logger = logging.getLogger(__name__)

SCRATCH_PREFIX = "jailbox-"


@dataclass(frozen=True)
class ScratchHandle:
    id: str
    path: Path


class ScratchScopeManager:
    """Tracks live scratch directories by id. Safe to share between threads."""

    def __init__(self, base_dir: str | Path | None = None) -> None:
        self._base_dir = str(base_dir) if base_dir is not None else None
        self._live: dict[str, Path] = {}
        self._lock = threading.Lock()

    def acquire(self) -> ScratchHandle:
        scratch_id = str(uuid4())
        path = Path(tempfile.mkdtemp(prefix=SCRATCH_PREFIX, dir=self._base_dir))
        with self._lock:
            self._live[scratch_id] = path
        logger.debug("Acquired scratch scope %s at %s", scratch_id, path)
        return ScratchHandle(id=scratch_id, path=path)

    def release(self, handle: ScratchHandle) -> None:
        with self._lock:
            path = self._live.pop(handle.id, None)
        if path is None:
            return
        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Failed to remove scratch scope %s (%s): %s", handle.id, path, e)
        else:
            logger.debug("Released scratch scope %s", handle.id)

    def active(self) -> list[str]:
        with self._lock:
            return sorted(self._live)

    @contextmanager
    def scope(self) -> Iterator[ScratchHandle]:
        handle = self.acquire()
        try:
            yield handle
        finally:
            self.release(handle)
