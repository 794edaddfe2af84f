# SPDX-License-Identifier: MIT
"""Kubernetes API version parsing and ordering.

This package parses the version part of Kubernetes API group/version
identifiers (v1, v2beta1, v1alpha3) and orders them the way Kubernetes
promotes APIs: by major version, then alpha < beta < stable, then the
pre-release number.

Example:
    >>> from kube_apiversion import parse_api_version, compare_api_versions, sort_api_versions
    >>>
    >>> version = parse_api_version("v2beta1")
    >>> version.major
    2
    >>> version.prerelease
    1
    >>>
    >>> compare_api_versions("v1", "v2alpha1")
    <Ordering.LESS: -1>
    >>>
    >>> [str(v) for v in sort_api_versions(["v1", "v1beta1", "v1alpha1"])]
    ['v1alpha1', 'v1beta1', 'v1']
"""

__version__ = "0.1.0"

from .apiversion import (
    ApiVersion,
    Stability,
    parse_api_version,
    is_valid_api_version,
    ApiVersionError,
    ParseError,
    API_VERSION_PATTERN,
)
from .compare import (
    ApiVersionList,
    Ordering,
    api_version_key,
    compare_api_versions,
    latest_api_version,
    parse_api_versions,
    sort_api_versions,
)
from .config import ConfigError, SortConfig, load_config

__all__ = [
    # Parsing
    "ApiVersion",
    "Stability",
    "parse_api_version",
    "is_valid_api_version",
    "ApiVersionError",
    "ParseError",
    "API_VERSION_PATTERN",
    # Ordering
    "ApiVersionList",
    "Ordering",
    "api_version_key",
    "compare_api_versions",
    "latest_api_version",
    "parse_api_versions",
    "sort_api_versions",
    # Configuration
    "ConfigError",
    "SortConfig",
    "load_config",
]
