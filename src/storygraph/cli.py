"""
Command-line interface for storygraph.
"""

import json
from pathlib import Path
from typing import Optional

import click
import structlog

from storygraph.config import get_settings
from storygraph.log import configure_logging
from storygraph.models.graph import ViewMode

logger = structlog.get_logger(__name__)


def _build_service(input_path: Optional[str]):
    from storygraph.services.asset_source import NdjsonAssetSource, get_asset_source
    from storygraph.services.network_service import NetworkViewService

    source = NdjsonAssetSource(input_path) if input_path else get_asset_source()
    return NetworkViewService(source)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """storygraph: network graph data for IP asset lineage."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug

    settings = get_settings()
    configure_logging("DEBUG" if debug else settings.log_level, settings.log_json)


# =========================================================================
# Server Commands
# =========================================================================


@cli.command()
@click.option("--host", default=None, help="Host to bind to")
@click.option("--port", default=None, type=int, help="Port to bind to")
@click.option("--reload", is_flag=True, help="Enable auto-reload")
def serve(host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    click.echo(f"Starting storygraph API server on {host}:{port}")

    uvicorn.run(
        "storygraph.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )


# =========================================================================
# View Commands
# =========================================================================


@cli.command()
@click.argument("mode", type=click.Choice([m.value for m in ViewMode]))
@click.option("--input", "-i", "input_path", type=click.Path(), help="NDJSON assets file")
@click.option("--output", "-o", type=click.Path(), help="Output file for the view JSON")
def view(mode: str, input_path: Optional[str], output: Optional[str]) -> None:
    """Build a network view and print it as JSON."""
    from storygraph.services.asset_source import AssetSourceUnavailableError

    service = _build_service(input_path)

    try:
        result = service.get_view(ViewMode(mode))
    except AssetSourceUnavailableError as e:
        raise click.ClickException(str(e)) from e

    payload = json.dumps(result.model_dump(mode="json", by_alias=True, exclude_none=True), indent=2)

    if output:
        Path(output).write_text(payload)
        click.echo(f"View written to: {output}")
    else:
        click.echo(payload)


@cli.command()
@click.option("--input", "-i", "input_path", type=click.Path(), help="NDJSON assets file")
def stats(input_path: Optional[str]) -> None:
    """Show dataset statistics."""
    from storygraph.services.asset_source import AssetSourceUnavailableError

    service = _build_service(input_path)

    try:
        community = service.get_community_view()
        optimized = service.get_optimized_view()
    except AssetSourceUnavailableError as e:
        raise click.ClickException(str(e)) from e

    summary = community.stats
    click.echo("\n=== Asset Graph Statistics ===\n")
    click.echo(f"Total Assets: {summary.total_assets}")
    click.echo(f"Total Collections: {summary.total_groups}")
    click.echo(f"Largest Collection: {summary.largest_group}")

    click.echo("\nCollections by Tier:")
    for tier, count in summary.tier_breakdown.model_dump().items():
        click.echo(f"  {tier}: {count}")

    click.echo(f"\nCommunities: {len(community.nodes)} ({len(community.edges)} connections)")
    click.echo(
        f"Optimized view: {optimized.stats.optimized_nodes} nodes, "
        f"{optimized.stats.optimized_edges} edges"
    )


# =========================================================================
# Config Commands
# =========================================================================


@cli.command()
def config() -> None:
    """Show current configuration."""
    settings = get_settings()

    click.echo("\n=== storygraph Configuration ===\n")
    click.echo(f"Environment: {settings.environment}")
    click.echo(f"Debug: {settings.debug}")
    click.echo(f"\nAsset Source: {settings.asset_source}")
    if settings.asset_source == "ndjson":
        click.echo(f"Assets Path: {settings.assets_path}")
    else:
        click.echo(f"Asset Table: {settings.asset_table} (limit {settings.asset_query_limit})")
    click.echo(f"\nAPI: {settings.api_host}:{settings.api_port}")


def main() -> None:
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
