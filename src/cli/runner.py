# src/cli/runner.py

"""Headless command runners built on the async BackendGateway."""

import json
import logging
import sys
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from src.config.settings import Settings
from src.models.scraped_product import ScrapedProduct
from src.models.seller_listing import SellerListing
from src.services.backend_gateway import BackendGateway, RemoteError

logger = logging.getLogger("listro.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def parse_pairs(pairs: list[str] | None) -> dict[str, str]:
    """Turn repeated ``key=value`` arguments into a dict.

    Raises ``SystemExit`` on an entry without ``=``.
    """
    parsed: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            _err.print(f"[red]Expected key=value, got: {pair}[/red]")
            raise SystemExit(1)
        parsed[key.strip()] = value.strip()
    return parsed


def _emit_json(data: Any) -> None:
    json.dump(data, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


def _fail(exc: RemoteError) -> int:
    logger.error("Command failed: %s", exc.message)
    _err.print(f"[red]{exc.message}[/red]")
    return 1


def _print_rows_table(
    title: str, rows: list[dict[str, Any]], headers: list[str],
) -> None:
    """Render sheet rows with one column per header."""
    table = Table(title=title, show_lines=True, title_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    for header in headers:
        table.add_column(header, overflow="fold")
    for idx, row in enumerate(rows, 1):
        table.add_row(
            str(idx), *(str(row.get(h, "") or "—") for h in headers)
        )
    Console().print(table)


def _print_listings_table(listings: list[SellerListing]) -> None:
    table = Table(
        title="Seller Listings", show_lines=True, title_style="bold cyan"
    )
    table.add_column("ID", style="dim")
    table.add_column("Product", max_width=60)
    table.add_column("Rating", justify="center")
    table.add_column("Reviews", justify="right")
    table.add_column("Availability", style="green")
    table.add_column("URL", overflow="fold", style="dim")

    for listing in listings:
        table.add_row(
            listing.product_id,
            listing.product_name,
            f"{listing.rating:.1f}",
            f"{listing.reviews:,}",
            listing.availability,
            listing.url or "—",
        )
    Console().print(table)


def _print_product_table(product: ScrapedProduct) -> None:
    table = Table(
        title=product.title or product.url,
        show_header=False,
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Field", style="bold")
    table.add_column("Value", overflow="fold")

    table.add_row("ASIN", product.asin or "—")
    table.add_row("Brand", product.brand or "—")
    table.add_row("URL", product.url)
    table.add_row("Images", "\n".join(product.images) or "—")
    table.add_row("Features", "\n".join(product.features) or "—")
    for pair in product.product_details_array:
        table.add_row(str(pair.get("label", "")), str(pair["value"]))
    Console().print(table)


async def run_sheet(golden: bool, output_format: str) -> int:
    """Fetch the seller sheet (or golden sheet) and print it."""
    gateway = BackendGateway()
    label = "golden sheet" if golden else "sheet"
    _err.print(f"[bold]Fetching {label} data...[/bold]")
    try:
        if golden:
            body = await gateway.fetch_golden_sheet_data()
        else:
            body = await gateway.fetch_sheet_data()
    except RemoteError as exc:
        return _fail(exc)

    rows: list[dict[str, Any]] = body.get("data") or []
    _err.print(
        f"[green]✓ {body.get('totalRows', len(rows))} rows"
        f"{' (cached)' if body.get('fromCache') else ''}[/green]"
    )
    if output_format == "table":
        headers = body.get("headers") or (
            list(rows[0]) if rows else []
        )
        _print_rows_table(label.title(), rows, headers)
    else:
        _emit_json(body)
    return 0


async def run_sellers(category: str | None, output_format: str) -> int:
    """Print seller listings for one category (or all of them)."""
    gateway = BackendGateway()
    _err.print(
        f"[bold]Seller listings:[/bold] "
        f"{category or Settings.ALL_CATEGORIES}"
    )
    try:
        listings = await gateway.fetch_seller_data(category)
    except RemoteError as exc:
        return _fail(exc)

    if not listings:
        _err.print("[yellow]No listings found.[/yellow]")
        return 1

    _err.print(f"[green]✓ {len(listings)} listings[/green]")
    if output_format == "table":
        _print_listings_table(listings)
    else:
        _emit_json([listing.to_dict() for listing in listings])
    return 0


async def run_scrape(product_url: str, output_format: str) -> int:
    """Scrape a single product URL and print the normalized product."""
    gateway = BackendGateway()
    _err.print(f"[bold]Scraping:[/bold] {product_url}")
    try:
        product = await gateway.scrape_product_from_url(product_url)
    except RemoteError as exc:
        return _fail(exc)

    _err.print(
        f"[green]✓ {product.title or 'Untitled'}"
        f" ({len(product.images)} images)[/green]"
    )
    if output_format == "table":
        _print_product_table(product)
    else:
        _emit_json(product.to_dict())
    return 0


async def run_generate(
    kind: str, subcategory: str, detail_pairs: list[str] | None,
) -> int:
    """Generate a title, a description, or both ("copy")."""
    details = parse_pairs(detail_pairs)
    gateway = BackendGateway()
    _err.print(f"[bold]Generating {kind} for:[/bold] {subcategory}")
    try:
        if kind == "title":
            result: dict[str, Any] = {
                "title": await gateway.generate_product_title(
                    subcategory, details
                )
            }
        elif kind == "description":
            result = {
                "description": await gateway.generate_product_description(
                    subcategory, details
                )
            }
        else:
            title, description = await gateway.generate_product_copy(
                subcategory, details
            )
            result = {"title": title, "description": description}
    except RemoteError as exc:
        return _fail(exc)

    _emit_json(result)
    return 0


async def run_image(
    image_path: str, style_index: int, attribute_pairs: list[str] | None,
) -> int:
    """Upload an image for AI restyling and print the result URL."""
    attributes = parse_pairs(attribute_pairs)
    gateway = BackendGateway()
    _err.print(
        f"[bold]Generating image:[/bold] {Path(image_path).name}"
        f"  [dim]style={style_index}[/dim]"
    )
    try:
        image_url = await gateway.generate_ai_image(
            image_path, style_index, attributes
        )
    except RemoteError as exc:
        return _fail(exc)

    _emit_json({"imageUrl": image_url})
    return 0


async def run_health_check() -> int:
    """Check that both backends answer."""
    from src.services.health_checker import HealthChecker

    _err.print("[bold]Running backend health check...[/bold]")
    checker = HealthChecker()
    results = await checker.check_all()

    table = Table(
        title="Backend Health Check",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Backend", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    any_down = False
    for r in results:
        if r.status == "ok":
            status = "[green]✅ OK[/green]"
        elif r.status == "slow":
            status = "[yellow]⚠️  SLOW[/yellow]"
        else:
            status = "[red]❌ DOWN[/red]"
            any_down = True

        latency = f"{r.latency_ms:.0f}ms" if r.latency_ms > 0 else "—"
        table.add_row(r.backend_id, status, latency, r.message)

    Console().print(table)
    return 1 if any_down else 0
