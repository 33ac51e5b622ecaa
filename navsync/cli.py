"""CLI entry point for navsync."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.syntax import Syntax
from rich.table import Table

from navsync.config import NavsyncConfig, load_config
from navsync.config.loader import CONFIG_FILENAME, DEFAULT_CONFIG_TEMPLATE
from navsync.errors import NavbarError
from navsync.log import configure_logging
from navsync.navbar import NavbarMetadata, NavbarSyncService, build_navbar_items, load_navbars

app = typer.Typer(
    name="navsync",
    help="Create and remove Docusaurus navbars in a GitHub repository, no clone required.",
)

config_app = typer.Typer(help="Manage navsync configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: NavsyncConfig | None = None


def _get_config() -> NavsyncConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to navsync.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    configure_logging(_config)


def _get_service() -> NavbarSyncService:
    try:
        return NavbarSyncService.from_config(_get_config())
    except NavbarError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _display_navbars(navbars: list[NavbarMetadata]) -> None:
    table = Table(title=f"Navbars ({len(navbars)})")
    table.add_column("ID", style="cyan")
    table.add_column("Label")
    table.add_column("Type", style="green")
    table.add_column("Position")
    table.add_column("Order", justify="right")
    table.add_column("Route", style="dim")
    for n in navbars:
        label = f"{n.label} [dim](built in)[/dim]" if n.locked else n.label
        table.add_row(n.id, label, n.type, n.position, str(n.order), n.to or "-")
    rprint(table)


@app.command("list")
def list_cmd(
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table"),
) -> None:
    """List navbars on the target branch."""
    service = _get_service()
    try:
        navbars = asyncio.run(service.list_navbars())
    except NavbarError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    if as_json:
        typer.echo(json.dumps([n.to_wire() for n in navbars], indent=2))
    else:
        _display_navbars(navbars)


@app.command()
def create(
    navbar_id: str = typer.Argument(..., metavar="ID", help="Navbar id (lowercase, digits, hyphens)"),
    label: str = typer.Argument(..., help="Display label"),
) -> None:
    """Create a navbar and push it as one commit."""
    service = _get_service()
    try:
        result = asyncio.run(service.create(navbar_id, label))
    except NavbarError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    rprint(f"[green]Created[/green] navbar '{navbar_id}' in commit {result.commit_sha}")


@app.command()
def delete(
    navbar_id: str = typer.Argument(..., metavar="ID", help="Navbar id to remove"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a navbar's files and push the removal as one commit."""
    if not yes:
        typer.confirm(
            f"Delete navbar '{navbar_id}' and all of docs/{navbar_id}/?", abort=True
        )
    service = _get_service()
    try:
        result = asyncio.run(service.delete(navbar_id))
    except NavbarError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    if result.created:
        rprint(f"[green]Deleted[/green] navbar '{navbar_id}' in commit {result.commit_sha}")
    else:
        rprint(f"[yellow]Navbar '{navbar_id}' does not exist; nothing to delete.[/yellow]")


@app.command("render-navbar")
def render_navbar(
    root: str | None = typer.Option(None, "--root", help="Local site root (default: site.root)"),
) -> None:
    """Print Docusaurus navbar items built from data/navbars/*.json."""
    cfg = _get_config()
    navbars = load_navbars(Path(root or cfg.site.root))
    typer.echo(json.dumps(build_navbar_items(navbars), indent=2, ensure_ascii=False))


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", help="Bind port"),
) -> None:
    """Run the /api/navbars HTTP API."""
    import uvicorn

    from navsync.api import create_app

    cfg = _get_config()
    uvicorn.run(
        create_app(cfg),
        host=host or cfg.server.host,
        port=port or cfg.server.port,
        log_level=cfg.log_level if cfg.log_level != "warn" else "warning",
    )


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default navsync.yaml in current directory."""
    target = Path(CONFIG_FILENAME)
    if target.exists() and not force:
        rprint("[yellow]navsync.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
