"""
Script context modules: bucket, log.
"""

from jailbox.engines.script.modules.bucket import CapabilityBucket
from jailbox.engines.script.modules.log import make_log_module

__all__ = [
    "CapabilityBucket",
    "make_log_module",
]
