# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for kube-apiversion tests."""

from __future__ import annotations

from pathlib import Path
from typing import Generator

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_project(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary project directory with a [tool.kube-apiversion] table."""
    project_dir = tmp_path / "test_project"
    project_dir.mkdir()

    pyproject = project_dir / "pyproject.toml"
    pyproject.write_text(
        """[project]
name = "test-operator"
version = "1.0.0"

[tool.kube-apiversion]
skip-invalid = true
reverse = true
stable-only = true
"""
    )

    yield project_dir


@pytest.fixture
def empty_project(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary project directory without a pyproject.toml."""
    project_dir = tmp_path / "empty_project"
    project_dir.mkdir()
    yield project_dir
