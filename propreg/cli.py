"""propreg CLI — hash images, dry-run seed manifests, and serve the API."""

import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from propreg import __version__
from propreg.config import Settings, configure_logging

console = Console()


@click.group()
@click.version_option(version=__version__)
def main():
    """propreg — property image registry.

    Register real estate, cars, art, or anything else against the SHA-256
    digest of an image. State lives in memory for the life of the server.
    """


# ── Hash ─────────────────────────────────────────────────────────────


@main.command(name="hash")
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def hash_files(files: tuple):
    """Print the image digest the registry would store for each FILE."""
    from propreg.utils.hashing import digest_file

    table = Table(title=f"Image digests ({len(files)} files)")
    table.add_column("File", style="cyan")
    table.add_column("SHA-256", style="green")

    for path in files:
        table.add_row(path, digest_file(path))

    console.print(table)


# ── Seed ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("manifest_path", type=click.Path(exists=True, dir_okay=False))
def seed(manifest_path: str):
    """Load a YAML manifest into a scratch registry and show the result.

    Nothing is persisted; use 'propreg serve --seed' to load a manifest into
    a running server.
    """
    from propreg.errors import PropertyRegistryError
    from propreg.registry.memory_registry import PropertyRegistry
    from propreg.utils.manifest import load_manifest, seed_registry

    console.print(f"\n[bold blue]propreg[/] — Seeding from: {manifest_path}\n")

    try:
        entries = load_manifest(manifest_path)
        registry = PropertyRegistry()
        seed_registry(registry, entries)
    except PropertyRegistryError as e:
        console.print(f"  [red]x[/] {escape(str(e))}")
        sys.exit(1)

    rows = registry.list()
    if not rows:
        console.print("[yellow]Manifest contains no properties.[/]")
        return

    table = Table(title=f"Registry ({len(rows)} properties)")
    table.add_column("ID", style="cyan")
    table.add_column("Category")
    table.add_column("Image digest", style="green")

    for pid, category, image_digest in rows:
        table.add_row(pid, category, image_digest)

    console.print(table)


# ── Serve ────────────────────────────────────────────────────────────


@main.command()
@click.option("--host", default=None, help="Bind address (default: $PROPREG_HOST or 127.0.0.1)")
@click.option("--port", "-p", default=None, type=int, help="Port (default: $PROPREG_PORT or 8000)")
@click.option("--seed", "seed_manifest", default=None, type=click.Path(exists=True, dir_okay=False),
              help="YAML manifest to load at startup")
@click.option("--log-level", default=None,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
def serve(host: str | None, port: int | None, seed_manifest: str | None, log_level: str | None):
    """Run the registry API server."""
    import uvicorn

    from web.backend.app.main import create_app

    settings = Settings.from_env()
    if host is not None:
        settings.host = host
    if port is not None:
        settings.port = port
    if seed_manifest:
        settings.seed_manifest = seed_manifest
    if log_level:
        settings.log_level = log_level.upper()

    configure_logging(settings.log_level)
    console.print(
        f"\n[bold blue]propreg[/] — Serving on http://{settings.host}:{settings.port}\n"
    )
    uvicorn.run(
        create_app(settings=settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
