"""CLI entry point: pubsentinel.

Subcommands:
    pubsentinel check [WORKSPACE]        # Warn about outdated watched packages
    pubsentinel check --update           # Bump every outdated constraint
    pubsentinel check --json             # Report only, as JSON
    pubsentinel latest bloc equatable    # Latest published versions
    pubsentinel watched                  # List watched packages
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

import click
from dotenv import load_dotenv

from pubsentinel.console import AutoPrompter, ConsolePrompter, open_external
from pubsentinel.core.config import Settings
from pubsentinel.core.logging import setup_logging
from pubsentinel.core.pub_client import PubClient
from pubsentinel.engines.pubspec import Pubspec
from pubsentinel.engines.upgrade_advisor import (
    DEPENDENCIES,
    DEV_DEPENDENCIES,
    Advisory,
    UpgradeAdvisor,
)
from pubsentinel.engines.upgrade_advisor.advisor import Prompter
from pubsentinel.engines.upgrade_advisor.models import UPDATE_LABEL
from pubsentinel.exceptions import ManifestNotFoundError, PubsentinelError


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """pubsentinel: flag outdated bloc-family dependencies in a pubspec."""
    load_dotenv()
    setup_logging("DEBUG" if verbose else None)


@main.command()
@click.argument(
    "workspace",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option("--update", "auto_update", is_flag=True, help="Accept 'Update' for every advisory")
@click.option("--no-input", is_flag=True, help="Dismiss every advisory (report only)")
@click.option("--json", "as_json", is_flag=True, help="Print advisories as JSON")
def check(workspace: Path, auto_update: bool, no_input: bool, as_json: bool) -> None:
    """Check WORKSPACE's pubspec.yaml against the latest releases."""
    if auto_update and no_input:
        raise click.UsageError("--update and --no-input are mutually exclusive")

    prompter: Prompter
    if auto_update:
        prompter = AutoPrompter(UPDATE_LABEL)
    elif no_input or as_json:
        prompter = AutoPrompter()
    else:
        prompter = ConsolePrompter()

    pubspec = Pubspec(workspace.resolve())
    try:
        if not pubspec.path.is_file():
            raise ManifestNotFoundError(str(pubspec.path))
        advisories = asyncio.run(_run_check(pubspec, prompter, Settings.from_env()))
    except PubsentinelError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps([a.to_dict() for a in advisories], indent=2))
        return
    _print_advisories(advisories, updated=auto_update)


@main.command()
@click.argument("names", nargs=-1, required=True)
def latest(names: tuple[str, ...]) -> None:
    """Print the latest published version of each package in NAMES."""
    versions = asyncio.run(_fetch_latest(names, Settings.from_env()))
    width = max(len(name) for name in names)
    for name, version in zip(names, versions, strict=True):
        click.echo(f"{name:<{width}}  {version or '-'}")


@main.command()
def watched() -> None:
    """List the packages checked on every run."""
    for title, table in (("dependencies", DEPENDENCIES), ("dev_dependencies", DEV_DEPENDENCIES)):
        click.echo(f"{title}:")
        for pkg in table:
            actions = ", ".join(f"{a.label} ({a.url})" for a in pkg.actions if a.url)
            click.echo(f"  {pkg.name}" + (f"  -> {actions}" if actions else ""))


# ── helpers ──────────────────────────────────────────────────────────────


async def _run_check(pubspec: Pubspec, prompter: Prompter, settings: Settings) -> list[Advisory]:
    async with PubClient(settings.pub_url, settings.http_timeout) as client:
        advisor = UpgradeAdvisor(client, pubspec, prompter, open_external)
        advisories = await advisor.analyze()
        await advisor.drain()
    return advisories


async def _fetch_latest(names: tuple[str, ...], settings: Settings) -> list[str]:
    async with PubClient(settings.pub_url, settings.http_timeout) as client:
        return list(await asyncio.gather(*(client.get_latest_package_version(n) for n in names)))


def _print_advisories(advisories: list[Advisory], *, updated: bool) -> None:
    if not advisories:
        click.echo("All watched dependencies are up to date.")
        return

    noun = "dependency" if len(advisories) == 1 else "dependencies"
    click.echo(f"Found {len(advisories)} outdated {noun}\n")
    for a in advisories:
        if updated:
            click.echo(f"  {a.package_name} {a.declared_constraint} -> ^{a.required_version} (updated)")
        else:
            click.echo(f"  {a.package_name} {a.declared_constraint} -> {a.required_version}")


if __name__ == "__main__":
    main()
