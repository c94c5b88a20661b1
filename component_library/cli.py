"""CLI entry point: component-library.

Subcommands:
    component-library fetch [OUTPUT]        # Mirror catalog files into a snapshot
    component-library update-db [JSON_FILE] # Replace the store from a snapshot
    component-library sync [OUTPUT]         # fetch, then update-db on the same file
    component-library clear-db              # Delete every stored document
    component-library backup-db -o FILE     # Export the store as a snapshot
    component-library serve                 # Run the query API
"""

from __future__ import annotations

import asyncio
import sys
from datetime import date
from pathlib import Path

import click
import structlog
from dotenv import load_dotenv

from component_library.catalog import CatalogError, load_catalog
from component_library.core.config import DEFAULT_OUTPUT_FILE, Settings
from component_library.core.database import Database
from component_library.core.logging import setup_logging
from component_library.engines.ingestion import (
    FixedIntervalPacer,
    Ingestor,
    RawFileFetcher,
    SnapshotError,
    compute_stats,
    load_snapshot,
    log_stats,
    save_snapshot,
)
from component_library.services.persistence_service import PersistenceService

log = structlog.get_logger("component_library.cli")


def _settings() -> Settings:
    try:
        return Settings.from_env()
    except ValueError as exc:
        click.echo(f"Invalid configuration: {exc}", err=True)
        sys.exit(1)


async def _fetch(settings: Settings, output: str) -> Path:
    catalog = load_catalog()
    async with RawFileFetcher(settings.github_token) as fetcher:
        ingestor = Ingestor(
            fetcher,
            base_url=settings.base_url,
            github_repo=settings.github_repo,
            pacer=FixedIntervalPacer(settings.request_delay),
            max_retries=settings.max_retries,
        )
        data = await ingestor.run(catalog)
    path = save_snapshot(data, output)
    log_stats(compute_stats(data))
    return path


async def _update_db(settings: Settings, json_file: str) -> dict[str, int]:
    data = load_snapshot(json_file)
    database = Database(settings.database_url)
    try:
        service = PersistenceService(
            database.session_factory, ensure_schema=database.create_schema
        )
        inserted = await service.apply(data)
        counts = await service.collection_counts()
    finally:
        await database.dispose()
    log.info("update_db.done", **inserted, **counts)
    return inserted


async def _clear_db(settings: Settings) -> None:
    database = Database(settings.database_url)
    try:
        await PersistenceService(
            database.session_factory, ensure_schema=database.create_schema
        ).clear_all()
    finally:
        await database.dispose()


async def _backup_db(settings: Settings, output: str) -> Path:
    database = Database(settings.database_url)
    try:
        data = await PersistenceService(database.session_factory).export_snapshot()
    finally:
        await database.dispose()
    return save_snapshot(data, output)


def _run_fetch(settings: Settings, output: str) -> Path:
    try:
        return asyncio.run(_fetch(settings, output))
    except (CatalogError, SnapshotError) as exc:
        log.error("fetch.failed", error=str(exc))
        click.echo(f"Fetch failed: {exc}", err=True)
        sys.exit(1)


def _run_update_db(settings: Settings, json_file: str) -> dict[str, int]:
    try:
        return asyncio.run(_update_db(settings, json_file))
    except Exception as exc:
        log.exception("update_db.failed", json_file=json_file)
        click.echo(f"Database update failed: {exc}", err=True)
        sys.exit(1)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """Component library: mirror UI component sources and serve them over HTTP."""
    load_dotenv()
    setup_logging("DEBUG" if verbose else None)


@main.command()
@click.argument("output", default=DEFAULT_OUTPUT_FILE)
def fetch(output: str) -> None:
    """Fetch every catalog file from GitHub and write OUTPUT."""
    path = _run_fetch(_settings(), output)
    click.echo(f"Saved snapshot to {path}")


@main.command("update-db")
@click.argument("json_file", default=DEFAULT_OUTPUT_FILE)
def update_db(json_file: str) -> None:
    """Replace the stored collections with the contents of JSON_FILE."""
    inserted = _run_update_db(_settings(), json_file)
    click.echo(
        f"Stored {inserted['componentsCount']} components, "
        f"{inserted['utilsCount']} utils, {inserted['staticCount']} static groups"
    )


@main.command()
@click.argument("output", default=DEFAULT_OUTPUT_FILE)
def sync(output: str) -> None:
    """Run fetch, then update-db on the same file."""
    settings = _settings()
    path = _run_fetch(settings, output)
    inserted = _run_update_db(settings, str(path))
    click.echo(f"Synced {inserted['componentsCount']} components from {path}")


@main.command("clear-db")
@click.confirmation_option(prompt="Delete every stored component, util and metadata row?")
def clear_db() -> None:
    """Delete all stored documents."""
    try:
        asyncio.run(_clear_db(_settings()))
    except Exception as exc:
        log.exception("clear_db.failed")
        click.echo(f"Clear failed: {exc}", err=True)
        sys.exit(1)
    click.echo("Database cleared")


@main.command("backup-db")
@click.option("-o", "--output", default=None, help="Output file (default backup-YYYY-MM-DD.json)")
def backup_db(output: str | None) -> None:
    """Export the stored collections as a snapshot file."""
    target = output or f"backup-{date.today().isoformat()}.json"
    try:
        path = asyncio.run(_backup_db(_settings(), target))
    except Exception as exc:
        log.exception("backup_db.failed", output=target)
        click.echo(f"Backup failed: {exc}", err=True)
        sys.exit(1)
    click.echo(f"Backup written to {path}")


@main.command()
@click.option("--host", default="0.0.0.0", help="Bind address")
@click.option("--port", type=int, default=None, help="Port (default $PORT or 3000)")
def serve(host: str, port: int | None) -> None:
    """Run the query API with uvicorn."""
    import uvicorn

    from component_library.api import create_app

    settings = _settings()
    app = create_app(settings=settings)
    uvicorn.run(app, host=host, port=port or settings.port, log_config=None)


if __name__ == "__main__":
    main()
