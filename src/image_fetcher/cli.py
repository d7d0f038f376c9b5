"""
CLI for the image fetcher.

Commands:
- fetch: Resolve one URL through the cache and network
- info: Show configuration and cache status
- clear-cache: Empty the disk cache
"""

import asyncio
from pathlib import Path

import typer
from loguru import logger
from PIL import Image as PILImage
from rich.console import Console
from rich.table import Table

from .cache import DiskCacheService
from .config import settings
from .logging import setup_logging
from .shared import default_image_service

app = typer.Typer(
    name="image-fetcher",
    help="Fetch remote images through a local cache",
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Image Fetcher - cached asynchronous image downloads."""
    log_level = "DEBUG" if verbose else settings.log_level
    setup_logging(level=log_level, json_output=settings.log_json, log_file=settings.log_file)
    logger.debug("CLI initialized with log level: {}", log_level)


@app.command()
def fetch(
    url: str = typer.Argument(..., help="Image URL to fetch"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Save the image here"),
    timeout: float = typer.Option(
        settings.fetch_timeout, "--timeout", "-t", help="Seconds to wait for the image"
    ),
):
    """Fetch one image, from the cache when possible."""
    logger.info("Fetching {}", url)

    async def run_fetch() -> PILImage.Image | None:
        service = default_image_service()
        delivered: asyncio.Future[PILImage.Image | None] = asyncio.get_running_loop().create_future()

        def on_image(image: PILImage.Image) -> None:
            if not delivered.done():
                delivered.set_result(image)

        def on_failure(failed_url: str) -> None:
            if not delivered.done():
                delivered.set_result(None)

        service.fetch(url, on_image, on_failure)
        try:
            image = await asyncio.wait_for(delivered, timeout)
        except asyncio.TimeoutError:
            logger.warning("No image delivered for {} within {}s", url, timeout)
            service.cancel()
            return None
        if image is not None:
            await service.flush()
        return image

    image = asyncio.run(run_fetch())
    if image is None:
        console.print(f"[red]Error: could not load image at {url}[/]")
        raise typer.Exit(1)

    table = Table(title="Image")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("URL", url)
    table.add_row("Format", image.format or "unknown")
    table.add_row("Size", f"{image.width}x{image.height}")
    table.add_row("Mode", image.mode)
    console.print(table)

    if output is not None:
        try:
            image.save(output)
        except (OSError, ValueError) as e:
            logger.error("Could not save image to {}: {}", output, e)
            console.print(f"[red]Error saving image: {e}[/]")
            raise typer.Exit(1)
        logger.info("Saved image to {}", output)
        console.print(f"[green]Saved to {output}[/]")


@app.command()
def info():
    """Show configuration and cache status."""
    logger.debug("Displaying configuration and status")
    console.print("[bold blue]Image Fetcher Configuration[/]")

    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Cache Type", settings.cache_type)
    table.add_row("Cache Directory", settings.cache_dir)
    table.add_row("Fetch Timeout", f"{settings.fetch_timeout}s")
    table.add_row("User Agent", settings.user_agent)
    table.add_row("Log Level", settings.log_level)

    console.print(table)

    console.print("\n[bold]Cache Status[/]")
    if settings.cache_type != "disk":
        console.print(f"{settings.cache_type} cache is not persisted")
        return

    if not settings.cache_path.exists():
        logger.debug("Cache path does not exist: {}", settings.cache_path)
        console.print("Cache not initialized (run fetch first)")
        return

    try:
        count = DiskCacheService(cache_dir=settings.cache_path).count()
        logger.debug("Disk cache status: {} entries", count)
        console.print(f"Cached images: {count}")
    except OSError as e:
        logger.error("Error accessing cache: {}", e)
        console.print(f"[red]Error accessing cache: {e}[/]")


@app.command()
def clear_cache():
    """Delete every entry from the disk cache."""
    if not settings.cache_path.exists():
        console.print("[yellow]Cache directory does not exist, nothing to clear[/]")
        return

    removed = DiskCacheService(cache_dir=settings.cache_path).clear()
    console.print(f"[green]Removed {removed} cached images[/]")


if __name__ == "__main__":
    app()
