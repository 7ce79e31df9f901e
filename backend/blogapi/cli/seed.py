"""Flask CLI commands for reseeding the in-memory store."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from blogapi.core.extensions import get_store
from blogapi.seeds import seed_data

LOGGER = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    """Raise logging verbosity for seed modules when requested."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger(seed_data.__name__).setLevel(level)
    LOGGER.setLevel(level)


def _echo_summary(summary: dict[str, int]) -> None:
    """Pretty-print a tabular summary of seed results."""
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (empty)")
        return
    width = max(len(name) for name in summary)
    for collection, count in summary.items():
        click.echo(f"  {collection.ljust(width)}  {count:>4}")


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Enable verbose logging for seeding.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Collection of data seeding commands."""
    # ctx.obj is Flask's ScriptInfo; meta is shared by nested contexts
    ctx.meta["seed.verbose"] = verbose
    _configure_logging(verbose)


@seed_cli.command("run")
@click.option(
    "--random-seed",
    type=int,
    default=None,
    help="Faker seed; defaults to SEED_RANDOM_SEED from the config.",
)
@click.pass_context
@with_appcontext
def run_command(ctx: click.Context, random_seed: int | None) -> None:
    """Reset the store and fill it with deterministic fake data."""
    verbose = bool(ctx.meta.get("seed.verbose", False))
    if random_seed is None:
        random_seed = int(current_app.config.get("SEED_RANDOM_SEED", seed_data.DEFAULT_RANDOM_SEED))
    summary = seed_data.run_all(get_store(), random_seed=random_seed, verbose=verbose)
    _echo_summary(summary)


@seed_cli.command("credentials")
def credentials_command() -> None:
    """List the well-known login accounts created by every seed run."""
    click.echo("Seeded accounts:")
    for account in seed_data.WELL_KNOWN_ACCOUNTS:
        state = "" if account.is_active else "  (inactive)"
        click.echo(f"  {account.username:<10} {account.password:<12} {account.role}{state}")
    click.echo(f"  every other seeded user uses {seed_data.DEFAULT_PASSWORD!r}")
