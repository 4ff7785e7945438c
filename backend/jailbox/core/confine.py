"""
Path confinement: decide whether an untrusted path stays inside a root boundary.

confine(root, requested) -> Permit(path) | Deny(reason)

The decision is purely lexical (no filesystem I/O) and deterministic:

1. ``requested`` is normalized on its own: ``.`` and empty components are
   dropped, ``..`` pops the previous component. A relative path whose ``..``
   would climb above its own start is denied outright; in an absolute path
   ``/..`` stays at ``/``.
2. An absolute result is used as-is; a relative one is joined onto the root.
3. Permit iff the root's component sequence is a prefix of (or equal to) the
   target's component sequence. Component-wise, so ``/data-other`` is not
   inside ``/data``.

Symlinks are not looked at here; callers that touch the filesystem resolve
the permitted path and re-check it with ``is_within`` (see CapabilityBucket).
"""

from dataclasses import dataclass

SEP = "/"
ESCAPES_BOUNDARY = "path escapes boundary"


@dataclass(frozen=True)
class Permit:
    """Access allowed; ``path`` is the resolved absolute path."""

    path: str


@dataclass(frozen=True)
class Deny:
    """Access refused. A normal result, never raised."""

    reason: str


AccessDecision = Permit | Deny


class _Underflow(Exception):
    pass


def _split(path: str, *, absolute: bool) -> list[str]:
    parts: list[str] = []
    for comp in path.split(SEP):
        if comp in ("", "."):
            continue
        if comp == "..":
            if parts:
                parts.pop()
            elif not absolute:
                raise _Underflow(path)
            continue
        parts.append(comp)
    return parts


def _join(parts: list[str]) -> str:
    return SEP + SEP.join(parts)


def canonical_parts(root: str) -> list[str]:
    """Component sequence of an absolute root. Raises ValueError for a relative root."""
    if not root.startswith(SEP):
        raise ValueError(f"root boundary must be absolute: {root!r}")
    return _split(root, absolute=True)


def is_within(root: str, path: str) -> bool:
    """True if absolute ``path`` equals ``root`` or is a descendant of it (lexically)."""
    if not path.startswith(SEP):
        return False
    root_parts = canonical_parts(root)
    target = _split(path, absolute=True)
    return target[: len(root_parts)] == root_parts


def confine(root: str, requested: str) -> AccessDecision:
    root_parts = canonical_parts(root)

    if "\x00" in requested:
        return Deny("path contains NUL byte")

    absolute = requested.startswith(SEP)
    try:
        parts = _split(requested, absolute=absolute)
    except _Underflow:
        return Deny(ESCAPES_BOUNDARY)

    target = parts if absolute else root_parts + parts
    if target[: len(root_parts)] != root_parts:
        return Deny(ESCAPES_BOUNDARY)
    return Permit(_join(target))
