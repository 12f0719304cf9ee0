"""Loose version parsing and comparison."""

import re
from typing import Optional, Tuple

_VERSION_RE = re.compile(r'(\d+)(?:\.(\d+))?(?:\.(\d+))?')
_JAVA_VERSION_RE = re.compile(r'version\s+"?(\d+)(?:\.(\d+))?')


def coerce_version(text: Optional[str]) -> Optional[str]:
    """
    Extract the first X[.Y[.Z]] number from text and pad it to three parts.

    Examples:
        '^7.0.0' -> '7.0.0'
        'gradle-8.2' -> '8.2.0'
        'latest' -> None
    """
    if not text:
        return None

    match = _VERSION_RE.search(str(text))
    if not match:
        return None

    parts = [part or '0' for part in match.groups()]
    return '.'.join(str(int(part)) for part in parts)


def version_tuple(text: Optional[str]) -> Tuple[int, int, int]:
    """Return (major, minor, patch), (0, 0, 0) when text has no version."""
    coerced = coerce_version(text)
    if coerced is None:
        return (0, 0, 0)
    major, minor, patch = (int(part) for part in coerced.split('.'))
    return (major, minor, patch)


def version_gte(a: str, b: str) -> bool:
    """Return True if version a >= version b."""
    return version_tuple(a) >= version_tuple(b)


def version_lt(a: str, b: str) -> bool:
    """Return True if version a < version b."""
    return version_tuple(a) < version_tuple(b)


def major_version(text: Optional[str]) -> int:
    """Return the major component of a version string (0 if unknown)."""
    return version_tuple(text)[0]


def parse_java_version(output: str) -> int:
    """
    Return the Java major version from `java -version` output.

    Legacy '1.x' versions map to x, so '1.8.0_392' gives 8.
    """
    match = _JAVA_VERSION_RE.search(output or '')
    if not match:
        return 0

    major = int(match.group(1))
    if major == 1 and match.group(2):
        return int(match.group(2))
    return major
