# SPDX-License-Identifier: MIT
"""Kubernetes API version parsing.

Supports the three forms used by Kubernetes API groups:
- Stable: v1, v2, v11
- Alpha: v1alpha1, v2alpha3
- Beta: v1beta1, v11beta11
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional

# Digits are restricted to ASCII so that e.g. Arabic-Indic numerals are rejected
API_VERSION_PATTERN = re.compile(
    r"v(?P<major>0|[1-9][0-9]*)"
    r"(?:(?P<stability>alpha|beta)(?P<prerelease>0|[1-9][0-9]*))?"
)

_DIGITS = re.compile(r"[0-9]+")


class ApiVersionError(Exception):
    """Base class for errors raised by kube_apiversion."""

    pass


class ParseError(ApiVersionError, ValueError):
    """Raised when a string is not a Kubernetes API version."""

    def __init__(self, input: Any, reason: str = ""):
        self.input = input
        self.reason = reason or "does not match v<major>[alpha|beta<n>]"
        self.message = f"Failed to parse kubernetes api version from {input!r}: {self.reason}"
        super().__init__(self.message)


class Stability(IntEnum):
    """Maturity tier of an API version. The value is the ordering rank."""

    ALPHA = 0
    BETA = 1
    STABLE = 2

    def __str__(self) -> str:
        if self is Stability.STABLE:
            return ""
        return self.name.lower()


def _check_number(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


@dataclass(frozen=True, slots=True)
class ApiVersion:
    """Represents a parsed Kubernetes API version.

    Attributes:
        major: Major version number
        stability: Maturity tier (alpha, beta or stable)
        prerelease: Sequence number within the alpha/beta tier, None when stable
        raw: The string this version was parsed from (not used for equality)
    """

    major: int
    stability: Stability = Stability.STABLE
    prerelease: Optional[int] = None
    raw: str = field(default="", compare=False, repr=False)

    def __post_init__(self) -> None:
        # Frozen dataclass, so normalized fields go through object.__setattr__
        object.__setattr__(self, "stability", Stability(self.stability))
        _check_number("major", self.major)
        if self.stability is Stability.STABLE:
            if self.prerelease is not None:
                raise ValueError("stable versions cannot carry a pre-release number")
        elif self.prerelease is None:
            raise ValueError(f"{self.stability.name.lower()} versions require a pre-release number")
        else:
            _check_number("prerelease", self.prerelease)
        if not self.raw:
            object.__setattr__(self, "raw", self.canonical)

    @classmethod
    def stable(cls, major: int) -> "ApiVersion":
        """Build a stable version, e.g. ``v1``."""
        return cls(major=major)

    @classmethod
    def alpha(cls, major: int, prerelease: int) -> "ApiVersion":
        """Build an alpha version, e.g. ``v1alpha2``."""
        return cls(major=major, stability=Stability.ALPHA, prerelease=prerelease)

    @classmethod
    def beta(cls, major: int, prerelease: int) -> "ApiVersion":
        """Build a beta version, e.g. ``v1beta2``."""
        return cls(major=major, stability=Stability.BETA, prerelease=prerelease)

    def __str__(self) -> str:
        """Return the canonical string representation of the version."""
        return self.canonical

    @property
    def canonical(self) -> str:
        """Return the canonical form, independent of how it was written."""
        if self.prerelease is None:
            return f"v{self.major}"
        return f"v{self.major}{self.stability.name.lower()}{self.prerelease}"

    @property
    def is_prerelease(self) -> bool:
        """Return True if this is an alpha or beta version."""
        return self.prerelease is not None

    @property
    def is_stable(self) -> bool:
        return self.stability is Stability.STABLE

    @property
    def is_alpha(self) -> bool:
        return self.stability is Stability.ALPHA

    @property
    def is_beta(self) -> bool:
        return self.stability is Stability.BETA

    @property
    def sort_key(self) -> tuple[int, int, int]:
        """Return (major, stability rank, pre-release number) for ordering."""
        return (self.major, int(self.stability), self.prerelease or 0)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ApiVersion):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __le__(self, other: object) -> bool:
        if not isinstance(other, ApiVersion):
            return NotImplemented
        return self.sort_key <= other.sort_key

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, ApiVersion):
            return NotImplemented
        return self.sort_key > other.sort_key

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, ApiVersion):
            return NotImplemented
        return self.sort_key >= other.sort_key


def _explain(version_string: str) -> str:
    """Work out why a string failed to match, for the error message."""
    if not version_string.startswith("v"):
        return "missing 'v' prefix"

    rest = version_string[1:]
    digits = _DIGITS.match(rest)
    if digits is None:
        return "missing major version number"

    major = digits.group()
    if len(major) > 1 and major.startswith("0"):
        return f"major version {major!r} has a leading zero"

    suffix = rest[len(major) :]
    for keyword in ("alpha", "beta"):
        if suffix.startswith(keyword):
            number = suffix[len(keyword) :]
            if not number:
                return f"missing {keyword} version number"
            if not number.isascii() or not number.isdigit():
                return f"malformed {keyword} version number {number!r}"
            return f"{keyword} version {number!r} has a leading zero"

    return f"unknown stability suffix {suffix!r} (expected alpha<n> or beta<n>)"


def _to_int(digits: str, version_string: str, what: str) -> int:
    try:
        return int(digits)
    except ValueError as e:
        # Only reachable past sys.get_int_max_str_digits()
        raise ParseError(version_string, f"{what} version number is out of range") from e


def parse_api_version(version_string: str) -> ApiVersion:
    """Parse a Kubernetes API version string into an ApiVersion object.

    Args:
        version_string: A string of the form v<major>, v<major>alpha<n> or
            v<major>beta<n>. Whitespace is not stripped.

    Returns:
        An ApiVersion with parsed components and ``raw`` set to the input

    Raises:
        ParseError: If the string is not a Kubernetes API version

    Examples:
        >>> parse_api_version("v1")
        ApiVersion(major=1, stability=<Stability.STABLE: 2>, prerelease=None)

        >>> parse_api_version("v2beta3")
        ApiVersion(major=2, stability=<Stability.BETA: 1>, prerelease=3)
    """
    if not isinstance(version_string, str):
        raise ParseError(
            version_string, f"version must be a string, got {type(version_string).__name__}"
        )

    if not version_string:
        raise ParseError(version_string, "version string cannot be empty")

    match = API_VERSION_PATTERN.fullmatch(version_string)
    if not match:
        raise ParseError(version_string, _explain(version_string))

    major = _to_int(match.group("major"), version_string, "major")

    keyword = match.group("stability")
    if keyword is None:
        return ApiVersion(major=major, raw=version_string)

    return ApiVersion(
        major=major,
        stability=Stability[keyword.upper()],
        prerelease=_to_int(match.group("prerelease"), version_string, keyword),
        raw=version_string,
    )


def is_valid_api_version(version_string: str) -> bool:
    """Check if a string is a valid Kubernetes API version.

    Examples:
        >>> is_valid_api_version("v1beta1")
        True
        >>> is_valid_api_version("v1.0")
        False
    """
    try:
        parse_api_version(version_string)
    except ParseError:
        return False
    return True
