"""CLI entry point for the anime catalog data layer."""

import asyncio
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, NoReturn, Optional

import typer

from anime_catalog.adapters.remote import HttpCatalogClient
from anime_catalog.adapters.storage import SqliteCacheStore
from anime_catalog.config import Settings, get_settings
from anime_catalog.core import (
    CachedCatalogItem,
    CatalogItem,
    DomainError,
    DomainErrorKind,
    WorkerScheduler,
    error_for,
    kind_of,
)
from anime_catalog.logging_setup import setup_logging
from anime_catalog.repository import AnimeDataRepository

logger = logging.getLogger(__name__)

cli = typer.Typer(help="Inspect and sync the anime catalog cache.", no_args_is_help=True)

ConfigOption = typer.Option(Path("config.yaml"), "--config", "-c", help="YAML config file")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Debug logging")


def app() -> None:
    """CLI entry point."""
    cli()


@contextmanager
def open_repository(settings: Settings) -> Iterator[AnimeDataRepository]:
    """Wire a repository from settings and release its resources on exit."""
    remote = HttpCatalogClient(
        base_url=settings.api.base_url,
        catalog_path=settings.api.catalog_path,
        timeout=settings.api.timeout,
        api_token=settings.api_token,
    )
    store = SqliteCacheStore(settings.cache.db_path)
    scheduler = WorkerScheduler(max_workers=settings.worker.max_workers)
    try:
        yield AnimeDataRepository(remote, store, scheduler)
    finally:
        scheduler.shutdown()
        store.close()


def _load(config: Path, verbose: bool) -> Settings:
    settings = get_settings(config)
    setup_logging("DEBUG" if verbose else settings.logging.level)
    return settings


def _format_item(item: CatalogItem | CachedCatalogItem) -> str:
    prefix = f"#{item.key} " if isinstance(item, CachedCatalogItem) else ""
    return (
        f"{prefix}[{item.rating:>4.1f}] {item.title} ({item.release_year}) "
        f"{item.status.value} / {item.country.value} / {item.genre.value}  id={item.id}"
    )


def _fail(error: Exception) -> NoReturn:
    kind = kind_of(error)
    if isinstance(error, DomainError):
        typer.echo(f"❌ {kind.value}: {error.message}", err=True)
    else:
        logger.debug("Unclassified failure", exc_info=error)
        typer.echo(
            f"❌ {kind.value}: {error_for(DomainErrorKind.GENERIC).message} "
            f"({type(error).__name__}: {error})",
            err=True,
        )
    raise typer.Exit(code=1)


@cli.command()
def fetch(config: Path = ConfigOption, verbose: bool = VerboseOption) -> None:
    """Fetch the remote catalog sorted by rating."""
    settings = _load(config, verbose)

    async def run() -> list[CatalogItem]:
        with open_repository(settings) as repository:
            return await repository.fetch_remote_list()

    try:
        items = asyncio.run(run())
    except Exception as e:
        _fail(e)

    typer.echo(f"📡 {len(items)} items from {settings.catalog_url}")
    for item in items:
        typer.echo(f"  {_format_item(item)}")


@cli.command()
def download(config: Path = ConfigOption, verbose: bool = VerboseOption) -> None:
    """Replace the offline cache with the current remote catalog."""
    settings = _load(config, verbose)

    async def run() -> int:
        with open_repository(settings) as repository:
            items = await repository.fetch_remote_list()
            await repository.clear_all(atomic=True)
            keys = await repository.persist_all(items)
            return len(keys)

    try:
        count = asyncio.run(run())
    except Exception as e:
        _fail(e)

    typer.echo(f"💾 Cached {count} items in {settings.cache.db_path}")


@cli.command()
def offline(config: Path = ConfigOption, verbose: bool = VerboseOption) -> None:
    """Print the offline cache."""
    settings = _load(config, verbose)

    async def run() -> list[CachedCatalogItem]:
        with open_repository(settings) as repository:
            return await repository.load_all_snapshot()

    items = asyncio.run(run())
    if not items:
        typer.echo("Offline cache is empty")
        return

    for item in items:
        typer.echo(f"  {_format_item(item)}")


@cli.command()
def show(
    item_id: str = typer.Argument(..., help="Catalog id"),
    config: Path = ConfigOption,
    verbose: bool = VerboseOption,
) -> None:
    """Show one cached item."""
    settings = _load(config, verbose)

    async def run() -> Optional[CachedCatalogItem]:
        with open_repository(settings) as repository:
            subscription = await repository.get_by_id(item_id)
            return await subscription.first_or_none()

    item = asyncio.run(run())
    if item is None:
        typer.echo(f"No cached item with id {item_id}", err=True)
        raise typer.Exit(code=1)

    typer.echo(_format_item(item))
    if item.description:
        typer.echo(f"\n{item.description}")
    if item.image_url:
        typer.echo(f"\n🖼  {item.image_url}")


@cli.command()
def status(config: Path = ConfigOption, verbose: bool = VerboseOption) -> None:
    """Report whether the offline cache is empty."""
    settings = _load(config, verbose)

    with open_repository(settings) as repository:
        empty = repository.is_empty()

    typer.echo("Offline cache is empty" if empty else "Offline cache has items")


@cli.command()
def clear(config: Path = ConfigOption, verbose: bool = VerboseOption) -> None:
    """Delete the offline cache and reset its keys."""
    settings = _load(config, verbose)

    async def run() -> None:
        with open_repository(settings) as repository:
            await repository.clear_all()

    asyncio.run(run())
    typer.echo("🧹 Offline cache cleared")


if __name__ == "__main__":
    app()
