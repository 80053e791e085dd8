"""Flask CLI entry point for seeding the catalog."""
from __future__ import annotations

import click
from flask import current_app
from flask.cli import with_appcontext

from .errors import UniverseFetchError
from .loader import CatalogLoader


@click.command("seed-catalog")
@click.option("--count", type=click.IntRange(min=1), default=None, help="Games to add.")
@click.option(
    "--sample-size",
    type=click.IntRange(min=1),
    default=None,
    help="Candidates to draw before filtering.",
)
@click.option("--seed", default=None, help="Seed for the candidate sample.")
@with_appcontext
def seed_catalog_command(count, sample_size, seed):
    """Fill the catalog with games sampled from the Steam store."""

    config = current_app.config
    loader = CatalogLoader.from_config(config)
    if sample_size is not None:
        loader.sample_size = sample_size
    if seed is not None:
        loader.seed_value = seed

    target = count or config.get("CATALOG_TARGET_COUNT", 150)
    try:
        report = loader.run(target)
    except UniverseFetchError as exc:
        raise click.ClickException(f"Could not load the Steam app list: {exc}") from exc

    click.echo(f"Seeded {report.written} game(s) ({report.summary()}).")
