# SPDX-License-Identifier: MIT
"""CLI entry point for the kube-apiversion command."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Optional

import click
from click.core import ParameterSource

from .apiversion import ApiVersion, ApiVersionError, ParseError, parse_api_version
from .compare import (
    Ordering,
    compare_api_versions,
    latest_api_version,
    parse_api_versions,
    sort_api_versions,
)
from .config import SortConfig, load_config

_ORDERING_SYMBOLS = {
    Ordering.LESS: "<",
    Ordering.EQUAL: "=",
    Ordering.GREATER: ">",
}


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.config: Optional[SortConfig] = None
        self.verbose: bool = False
        self.project_dir: Optional[Path] = None

    def load_config(self) -> SortConfig:
        """Load configuration, caching the result."""
        if self.config is None:
            self.config = load_config(self.project_dir)
            if self.verbose:
                source = self.config.source or "defaults (no pyproject.toml found)"
                echo_debug(f"Using configuration from {source}")
        return self.config


pass_context = click.make_pass_decorator(Context, ensure=True)


class ApiVersionGroup(click.Group):
    """Reports library errors as a one-line message and exit status 1."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except ApiVersionError as e:
            echo_error(str(e))
            raise SystemExit(1) from e


def echo_error(message: str) -> None:
    """Print an error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def echo_warning(message: str) -> None:
    """Print a warning message to stderr."""
    click.secho(f"Warning: {message}", fg="yellow", err=True)


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(message)


def echo_debug(message: str) -> None:
    """Print a diagnostic message to stderr, used with --verbose."""
    click.secho(message, dim=True, err=True)


def _read_versions(versions: Iterable[str]) -> list[str]:
    """Use the arguments, or one version per line of stdin if there are none."""
    versions = list(versions)
    if versions:
        return versions
    stdin = click.get_text_stream("stdin")
    return [line.strip() for line in stdin if line.strip()]


def _flag_or_config(name: str, value: bool, configured: bool) -> bool:
    """Command line flags win over pyproject.toml, which wins over the default."""
    source = click.get_current_context().get_parameter_source(name)
    if source is ParameterSource.DEFAULT:
        return configured
    return value


def _parse_each(versions: Iterable[str], skip_invalid: bool) -> list[ApiVersion]:
    """Parse versions, warning about each one dropped when skip_invalid is set."""
    return parse_api_versions(
        versions,
        skip_invalid=skip_invalid,
        on_skip=lambda e: echo_warning(f"Skipping {e}"),
    )


@click.group(cls=ApiVersionGroup)
@click.version_option(package_name="kube-apiversion")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output.",
)
@click.option(
    "-C",
    "--directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Look for pyproject.toml starting from this directory.",
)
@pass_context
def cli(ctx: Context, verbose: bool, directory: Optional[Path]) -> None:
    """Parse and order Kubernetes API versions.

    \b
    Examples:
        kube-apiversion parse v1beta2
        kube-apiversion compare v1 v2alpha1
        kube-apiversion sort v1 v1alpha1 v1beta1
        kubectl api-versions | cut -d/ -f2 | kube-apiversion latest --stable-only
    """
    ctx.verbose = verbose
    ctx.project_dir = directory


@cli.command()
@click.argument("versions", nargs=-1, required=True)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
def parse(versions: tuple[str, ...], as_json: bool) -> None:
    """Parse API versions and print their components.

    Exits with status 1 if any version fails to parse.
    """
    results = []
    failed = False
    for raw in versions:
        try:
            version = parse_api_version(raw)
        except ParseError as e:
            echo_error(str(e))
            failed = True
            continue
        results.append(
            {
                "version": str(version),
                "major": version.major,
                "stability": version.stability.name.lower(),
                "prerelease": version.prerelease,
            }
        )

    if as_json:
        click.echo(json.dumps(results, indent=2))
    else:
        for result in results:
            prerelease = "-" if result["prerelease"] is None else result["prerelease"]
            echo_info(
                f"{result['version']}\tmajor={result['major']}\t"
                f"stability={result['stability']}\tprerelease={prerelease}"
            )

    if failed:
        raise SystemExit(1)


@cli.command()
@click.argument("first")
@click.argument("second")
def compare(first: str, second: str) -> None:
    """Compare two API versions, printing <, = or >."""
    a = parse_api_version(first)
    b = parse_api_version(second)
    echo_info(f"{a} {_ORDERING_SYMBOLS[compare_api_versions(a, b)]} {b}")


@cli.command(name="sort")
@click.argument("versions", nargs=-1)
@click.option(
    "--reverse/--no-reverse",
    default=False,
    help="Print newest versions first.",
)
@click.option(
    "--skip-invalid/--no-skip-invalid",
    default=False,
    help="Warn about and drop unparsable versions instead of failing.",
)
@pass_context
def sort_command(
    ctx: Context,
    versions: tuple[str, ...],
    reverse: bool,
    skip_invalid: bool,
) -> None:
    """Sort API versions oldest to newest.

    Reads one version per line from stdin when no VERSIONS are given.
    """
    config = ctx.load_config()
    reverse = _flag_or_config("reverse", reverse, config.reverse)
    skip_invalid = _flag_or_config("skip_invalid", skip_invalid, config.skip_invalid)

    parsed = _parse_each(_read_versions(versions), skip_invalid)
    for version in sort_api_versions(parsed, reverse=reverse):
        echo_info(version.raw)


@cli.command()
@click.argument("versions", nargs=-1)
@click.option(
    "--stable-only/--no-stable-only",
    default=False,
    help="Ignore alpha and beta versions.",
)
@click.option(
    "--skip-invalid/--no-skip-invalid",
    default=False,
    help="Warn about and drop unparsable versions instead of failing.",
)
@pass_context
def latest(
    ctx: Context,
    versions: tuple[str, ...],
    stable_only: bool,
    skip_invalid: bool,
) -> None:
    """Print the newest of the given API versions.

    Reads one version per line from stdin when no VERSIONS are given.
    Exits with status 1 if there is no candidate.
    """
    config = ctx.load_config()
    stable_only = _flag_or_config("stable_only", stable_only, config.stable_only)
    skip_invalid = _flag_or_config("skip_invalid", skip_invalid, config.skip_invalid)

    parsed = _parse_each(_read_versions(versions), skip_invalid)
    newest = latest_api_version(parsed, stable_only=stable_only)
    if newest is None:
        kind = "stable API versions" if stable_only else "API versions"
        echo_error(f"No {kind} given")
        raise SystemExit(1)
    echo_info(newest.raw)


def main() -> None:
    """Main entry point for the CLI."""
    cli(prog_name="kube-apiversion")


if __name__ == "__main__":
    main()
