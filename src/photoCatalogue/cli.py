"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich import print
from rich.table import Table

from .errors import CatalogueRootError, PhotoCatalogueError, SettingsError
from .library.catalogue import Catalogue, CatalogueOptions, build_catalogue
from .models.query import AccessorBuildFlags, QueryParams, SortOrder
from .models.types import ItemType, PermissionType, SourceType
from .settings.manager import SettingsManager

app = typer.Typer(help="Query a descriptor-driven photo catalogue")

_SORT_ORDERS = {"oldest": SortOrder.OLDEST_FIRST, "youngest": SortOrder.YOUNGEST_FIRST}
_PERMISSIONS = {
    "public": PermissionType.PUBLIC,
    "authBasic": PermissionType.AUTHORISED_BASIC,
    "authAdvanced": PermissionType.AUTHORISED_ADVANCED,
    "private": PermissionType.PRIVATE,
}


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (CatalogueRootError, SettingsError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except PhotoCatalogueError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


@app.callback()
def main(
    ctx: typer.Context,
    settings: Optional[Path] = typer.Option(
        None, "--settings", help="Settings JSON file to read instead of the default."
    ),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Log more detail."),
) -> None:
    """Configure logging and remember the settings location."""

    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = settings


def _load_catalogue(ctx: typer.Context, root: Optional[Path]) -> Catalogue:
    manager = SettingsManager(ctx.obj)
    manager.load()
    if root is None:
        configured = manager.get("photos_base_path")
        if not configured:
            raise CatalogueRootError("No catalogue root given and none configured")
        root = Path(configured)
    return build_catalogue(root, CatalogueOptions.from_settings(manager))


def _parse_mask(values: Optional[str], names: dict, label: str) -> int:
    mask = 0
    if not values:
        return mask
    for token in values.split(","):
        token = token.strip()
        if not token:
            continue
        if token not in names:
            raise typer.BadParameter(f"unknown {label} {token!r}")
        mask |= names[token]
    return int(mask)


def _format_time(photo) -> str:
    if photo.time_taken is None:
        return "-"
    return photo.time_taken.isoformat(sep=" ")


@app.command()
@_handle_errors
def scan(ctx: typer.Context, root: Optional[Path] = typer.Argument(None)) -> None:
    """Load every descriptor below ROOT and report the photo count."""

    catalogue = _load_catalogue(ctx, root)
    print(f"[green]Loaded {len(catalogue)} photos from {catalogue.root}")


@app.command()
@_handle_errors
def query(
    ctx: typer.Context,
    root: Optional[Path] = typer.Argument(None),
    sort: str = typer.Option("oldest", "--sort", help="oldest or youngest first."),
    permission: str = typer.Option(
        "public", "--permission", help="Clearance: public, authBasic, authAdvanced or private."
    ),
    source: Optional[str] = typer.Option(None, "--source", help="Comma separated: slr,drone."),
    item: Optional[str] = typer.Option(None, "--item", help="Comma separated: still."),
    limit: int = typer.Option(50, "--limit", min=0, help="Rows to print, 0 for all."),
) -> None:
    """List the photos matching a query."""

    if sort not in _SORT_ORDERS:
        raise typer.BadParameter("expected 'oldest' or 'youngest'", param_hint="--sort")
    if permission not in _PERMISSIONS:
        raise typer.BadParameter(
            f"unknown permission {permission!r}", param_hint="--permission"
        )
    params = QueryParams(
        sort_order=_SORT_ORDERS[sort],
        source_type_mask=_parse_mask(
            source, {"slr": SourceType.SLR, "drone": SourceType.DRONE}, "source type"
        ),
        item_type_mask=_parse_mask(item, {"still": ItemType.STILL}, "item type"),
        permission=_PERMISSIONS[permission],
    )
    results = _load_catalogue(ctx, root).query(params)

    table = Table(title=f"{len(results)} photos")
    table.add_column("Taken")
    table.add_column("Image")
    table.add_column("Size", justify="right")
    table.add_column("Location")
    rows = results.photos if limit == 0 else results.photos[:limit]
    for photo in rows:
        primary = photo.primary
        table.add_row(
            _format_time(photo),
            primary.relative_path,
            f"{primary.width}x{primary.height}",
            photo.geo_location_path,
        )
    print(table)


@app.command()
@_handle_errors
def dates(
    ctx: typer.Context,
    root: Optional[Path] = typer.Argument(None),
    year: Optional[int] = typer.Option(None, "--year", help="Show the months of this year."),
) -> None:
    """Show photo counts per year, or per month of one year."""

    results = _load_catalogue(ctx, root).query(build_flags=AccessorBuildFlags.DATE)
    accessor = results.date_accessor()

    if year is None:
        for value in accessor.years():
            print(f"{value}: {len(accessor.photos_for_year(value))}")
        return

    months: List[int] = sorted(accessor.months_for_year(year))
    if not months:
        print(f"[yellow]No photos in {year}")
        return
    for month in months:
        # Month buckets are 0-based internally.
        count = len(accessor.photos_for_month_year(year, month))
        print(f"{year}-{month + 1:02d}: {count}")


@app.command()
@_handle_errors
def locations(
    ctx: typer.Context,
    root: Optional[Path] = typer.Argument(None),
    path: str = typer.Argument("", help="Location path such as Europe/France."),
) -> None:
    """Show the locations directly below PATH with their photo counts."""

    results = _load_catalogue(ctx, root).query(build_flags=AccessorBuildFlags.LOCATION)
    accessor = results.location_accessor()
    prefix = path.strip("/")
    for name in accessor.sub_locations(prefix):
        child = f"{prefix}/{name}" if prefix else name
        print(f"{name}: {len(accessor.photos_for_location(child) or ())}")


if __name__ == "__main__":  # pragma: no cover
    app()
