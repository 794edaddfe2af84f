# SPDX-License-Identifier: MIT
"""API version comparison following Kubernetes promotion order.

Ordering: major version first, then alpha < beta < stable, then the
pre-release number. A higher major always wins, so v1 < v2alpha1.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Callable, Iterable, Optional, Union

from .apiversion import ApiVersion, ParseError, parse_api_version

VersionLike = Union[str, ApiVersion]


class Ordering(IntEnum):
    """Result of a three-way comparison."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


def _coerce(version: VersionLike) -> ApiVersion:
    return version if isinstance(version, ApiVersion) else parse_api_version(version)


def api_version_key(version: VersionLike) -> tuple[int, int, int]:
    """Return a sort key for an API version, suitable for sorting.

    Stable versions have no pre-release number; they are already separated
    from alpha/beta by the stability rank, so the third slot is just 0.

    Args:
        version: Version string or ApiVersion object

    Returns:
        A (major, stability rank, pre-release) tuple

    Raises:
        ParseError: If a version string is invalid

    Examples:
        >>> sorted(["v1", "v2alpha1", "v1beta1"], key=api_version_key)
        ['v1beta1', 'v1', 'v2alpha1']
    """
    return _coerce(version).sort_key


def compare_api_versions(version1: VersionLike, version2: VersionLike) -> Ordering:
    """Compare two Kubernetes API versions.

    Args:
        version1: First version (string or ApiVersion object)
        version2: Second version (string or ApiVersion object)

    Returns:
        Ordering.LESS, Ordering.EQUAL or Ordering.GREATER. These are also
        the integers -1, 0 and 1.

    Raises:
        ParseError: If either version string is invalid

    Examples:
        >>> compare_api_versions("v1", "v2")
        <Ordering.LESS: -1>
        >>> compare_api_versions("v1beta1", "v1alpha3")
        <Ordering.GREATER: 1>
        >>> compare_api_versions("v1", "v2alpha1")
        <Ordering.LESS: -1>
    """
    key1 = api_version_key(version1)
    key2 = api_version_key(version2)
    if key1 == key2:
        return Ordering.EQUAL
    return Ordering.LESS if key1 < key2 else Ordering.GREATER


def parse_api_versions(
    items: Iterable[VersionLike],
    *,
    skip_invalid: bool = False,
    on_skip: Optional[Callable[[ParseError], None]] = None,
) -> list[ApiVersion]:
    """Parse a sequence of versions, keeping input order.

    Args:
        items: Version strings and/or ApiVersion objects
        skip_invalid: Drop strings that fail to parse instead of raising
        on_skip: Called with the error for each dropped string

    Raises:
        ParseError: On the first unparsable entry, unless skip_invalid is set
    """
    parsed: list[ApiVersion] = []
    for item in items:
        try:
            parsed.append(_coerce(item))
        except ParseError as e:
            if not skip_invalid:
                raise
            if on_skip is not None:
                on_skip(e)
    return parsed


def sort_api_versions(
    items: Iterable[VersionLike],
    *,
    reverse: bool = False,
    skip_invalid: bool = False,
) -> list[ApiVersion]:
    """Sort API versions in ascending order.

    The sort is stable, so versions that compare equal keep their input order.

    Args:
        items: Version strings and/or ApiVersion objects
        reverse: Sort newest first
        skip_invalid: Drop strings that fail to parse instead of raising

    Returns:
        A new list of ApiVersion objects; parsed strings keep their ``raw`` text

    Raises:
        ParseError: On the first unparsable entry, unless skip_invalid is set
    """
    parsed = parse_api_versions(items, skip_invalid=skip_invalid)
    return sorted(parsed, key=api_version_key, reverse=reverse)


def latest_api_version(
    items: Iterable[VersionLike],
    *,
    stable_only: bool = False,
    skip_invalid: bool = False,
) -> Optional[ApiVersion]:
    """Return the newest API version, or None if there is none.

    Examples:
        >>> str(latest_api_version(["v1", "v2beta1"]))
        'v2beta1'
        >>> str(latest_api_version(["v1", "v2beta1"], stable_only=True))
        'v1'
    """
    candidates = parse_api_versions(items, skip_invalid=skip_invalid)
    if stable_only:
        candidates = [v for v in candidates if v.is_stable]
    if not candidates:
        return None
    return max(candidates, key=api_version_key)


class ApiVersionList(list):
    """A list of ApiVersion objects that sorts in API version order."""

    @classmethod
    def from_strings(cls, items: Iterable[str], skip_invalid: bool = False) -> "ApiVersionList":
        """Parse each string, raising ParseError unless skip_invalid is set."""
        return cls(parse_api_versions(items, skip_invalid=skip_invalid))

    def sort(self, *, key=None, reverse: bool = False) -> None:
        super().sort(key=key or api_version_key, reverse=reverse)

    def latest(self) -> Optional[ApiVersion]:
        return latest_api_version(self)

    def latest_stable(self) -> Optional[ApiVersion]:
        return latest_api_version(self, stable_only=True)
