"""
Engines: Script (RestrictedPython) hosted against a confined data directory.
"""

from jailbox.engines.script import ScriptHost, classify

__all__ = [
    "ScriptHost",
    "classify",
]
