"""
ScriptContext: bucket, log, Ok/Err and the file error classes for one script execution.
"""

import logging
from typing import Any

from jailbox.core.scope import ScratchHandle

from .errors import AccessDenied, BucketError, IOFailure, NotFound
from .modules import CapabilityBucket, make_log_module
from .result import Err, Ok


class ScriptContext:
    """
    Injects bucket, log, Ok, Err and the bucket error types into the script namespace.
    Built per invocation; shares nothing with other invocations except the root string.
    """

    def __init__(
        self,
        *,
        root: str,
        entry: str,
        scratch: ScratchHandle | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.entry = entry
        self.scratch = scratch
        self.bucket = CapabilityBucket(root)
        log_extra: dict[str, Any] = {"script_entry": entry}
        if scratch is not None:
            log_extra["scratch_id"] = scratch.id
        self.log = make_log_module(logger_instance=logger, extra=log_extra)

    def to_dict(self) -> dict[str, Any]:
        """Namespace for exec(compiled, globals)."""
        return {
            "bucket": self.bucket,
            "log": self.log,
            "Ok": Ok,
            "Err": Err,
            "BucketError": BucketError,
            "AccessDenied": AccessDenied,
            "NotFound": NotFound,
            "IOFailure": IOFailure,
        }
