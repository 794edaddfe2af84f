# SPDX-License-Identifier: MIT
"""CLI configuration loading from pyproject.toml."""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .apiversion import ApiVersionError

TOOL_TABLE = "kube-apiversion"


class ConfigError(ApiVersionError):
    """Raised when configuration loading fails."""

    pass


@dataclass
class SortConfig:
    """Defaults for the kube-apiversion CLI, read from ``[tool.kube-apiversion]``.

    Attributes:
        skip_invalid: Drop unparsable versions instead of failing
        reverse: Print newest versions first
        stable_only: Only consider stable versions when picking the latest
        source: The pyproject.toml the values came from, if any
    """

    skip_invalid: bool = False
    reverse: bool = False
    stable_only: bool = False
    source: Optional[Path] = None

    @classmethod
    def from_pyproject(cls, project_dir: str | Path) -> "SortConfig":
        """Load configuration from pyproject.toml.

        A missing file yields the defaults.

        Raises:
            ConfigError: If the file is not valid TOML or the table is malformed
        """
        pyproject_path = Path(project_dir) / "pyproject.toml"
        if not pyproject_path.exists():
            return cls()

        try:
            with open(pyproject_path, "rb") as f:
                pyproject = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML syntax in {pyproject_path}: {e}") from e

        config = cls.from_pyproject_dict(pyproject)
        config.source = pyproject_path
        return config

    @classmethod
    def from_pyproject_dict(cls, pyproject: dict[str, Any]) -> "SortConfig":
        """Create SortConfig from a parsed pyproject.toml dictionary."""
        tool = pyproject.get("tool", {})
        if not isinstance(tool, dict):
            raise ConfigError("[tool] must be a table")

        table = tool.get(TOOL_TABLE, {})
        if not isinstance(table, dict):
            raise ConfigError(f"[tool.{TOOL_TABLE}] must be a table")

        known = {f.name.replace("_", "-") for f in fields(cls) if f.name != "source"}
        unknown = sorted(set(table) - known)
        if unknown:
            raise ConfigError(
                f"Unknown key(s) in [tool.{TOOL_TABLE}]: {', '.join(unknown)}"
            )

        values: dict[str, bool] = {}
        for key, value in table.items():
            if not isinstance(value, bool):
                raise ConfigError(
                    f"[tool.{TOOL_TABLE}] {key} must be true or false, got {value!r}"
                )
            values[key.replace("-", "_")] = value

        return cls(**values)


def find_project_root(start_dir: Optional[str | Path] = None) -> Optional[Path]:
    """Find the nearest directory containing pyproject.toml.

    Args:
        start_dir: Directory to start searching from (defaults to cwd)

    Returns:
        Path to the project root, or None if there is no pyproject.toml above
    """
    current = Path(start_dir) if start_dir else Path.cwd()
    current = current.resolve()

    for candidate in (current, *current.parents):
        if (candidate / "pyproject.toml").exists():
            return candidate
    return None


def load_config(project_dir: Optional[str | Path] = None) -> SortConfig:
    """Load CLI configuration, searching upwards for pyproject.toml.

    Raises:
        ConfigError: If configuration cannot be loaded
    """
    root = find_project_root(project_dir)
    if root is None:
        return SortConfig()
    return SortConfig.from_pyproject(root)
