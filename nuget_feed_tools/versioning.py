"""
Version comparison logic for NuGet semantic versions.
"""

import re
import logging
from functools import total_ordering
from typing import Tuple

logger = logging.getLogger(__name__)

_VERSION_PATTERN = re.compile(
    r'^(?P<release>\d+(?:\.\d+){0,3})'
    r'(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?'
    r'(?:\+(?P<metadata>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$'
)


@total_ordering
class NuGetVersion:
    """
    A parsed NuGet version.

    Supports major.minor.patch with an optional fourth revision part, a
    pre-release label and build metadata. Build metadata is ignored when
    comparing, and labels compare case-insensitively as NuGet does.
    """

    def __init__(self, version: str):
        if not version or not version.strip():
            raise ValueError("Version string cannot be empty")

        self.original = version
        match = _VERSION_PATTERN.match(version.strip())
        if not match:
            raise ValueError(f"Invalid version format: {version}")

        numbers = [int(part) for part in match.group('release').split('.')]
        numbers.extend([0] * (4 - len(numbers)))
        self.release: Tuple[int, int, int, int] = tuple(numbers)
        self.prerelease = match.group('prerelease') or ""
        self.metadata = match.group('metadata') or ""

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def _prerelease_key(self):
        identifiers = []
        for part in self.prerelease.split('.'):
            # Numeric identifiers sort before alphanumeric ones
            if part.isdigit():
                identifiers.append((0, int(part), ""))
            else:
                identifiers.append((1, 0, part.lower()))
        return identifiers

    def _compare_key(self):
        # A release sorts after every pre-release of the same numbers
        if not self.prerelease:
            return (self.release, 1, [])
        return (self.release, 0, self._prerelease_key())

    def __eq__(self, other):
        if not isinstance(other, NuGetVersion):
            return NotImplemented
        return self._compare_key() == other._compare_key()

    def __lt__(self, other):
        if not isinstance(other, NuGetVersion):
            return NotImplemented
        return self._compare_key() < other._compare_key()

    def __hash__(self):
        return hash((self.release, self.prerelease.lower()))

    def __repr__(self):
        return f"NuGetVersion({self.original!r})"

    def __str__(self):
        return self.original


def compare_versions(version1: str, version2: str) -> int:
    """
    Compare two version strings.

    Args:
        version1: First version string
        version2: Second version string

    Returns:
        -1 if version1 < version2, 0 if equal, 1 if version1 > version2

    Raises:
        ValueError: If either version cannot be parsed
    """
    v1 = NuGetVersion(version1)
    v2 = NuGetVersion(version2)
    if v1 < v2:
        return -1
    if v1 > v2:
        return 1
    return 0


def satisfies_minimum(version: str, min_version: str, min_inclusive: bool = True) -> bool:
    """
    Check a version against a lower bound.

    Versions that cannot be parsed are kept, since the feed is the authority
    on what it publishes.

    Args:
        version: Version string to check
        min_version: Lower bound
        min_inclusive: Whether the bound itself is accepted

    Returns:
        True if the version is at or above (or strictly above) the bound
    """
    try:
        result = compare_versions(version, min_version)
    except ValueError as e:
        logger.debug(f"Keeping version '{version}' that could not be compared with '{min_version}': {e}")
        return True

    return result >= 0 if min_inclusive else result > 0
