"""Kollus CLI - Main commands."""
import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

from kollupy.core.exceptions import KollusException
from kollupy.core.upload.models import DestinationDescriptor, UploadVariant
from kollupy.core.upload.services import FileValidator
from kollupy.core.utils import format_expire_time, format_file_size

app = typer.Typer(
    name="kollus",
    help="Kollus media upload CLI",
    add_completion=False
)
console = Console()

TOKEN_OPTION = typer.Option(
    ..., "--token", "-t", envvar="KOLLUS_ACCESS_TOKEN", help="Kollus API access token"
)


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def make_client(token: str):
    from kollupy import KollusClient, APIConfig
    return KollusClient(token, config=APIConfig.from_env())


def check_interval(interval: float):
    if interval <= 0:
        console.print(f"[red]Interval must be positive, got {interval}[/red]")
        raise typer.Exit(1)


def print_destination(destination: DestinationDescriptor):
    table = Table(show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Upload URL", destination.upload_url)
    table.add_row("Progress URL", destination.progress_url)
    table.add_row("File key", destination.upload_file_key)
    table.add_row("Expires", format_expire_time(destination.expired_at))
    console.print(table)


async def watch_progress(client, progress_url: str, interval: float, label: str) -> bool:
    """Show a progress bar until processing completes. Returns True on completion."""
    failures = []
    completed = []

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console
    ) as progress:
        task = progress.add_task(label, total=100)
        monitor = client.monitor(progress_url)
        monitor.start(
            on_progress=lambda value: progress.update(task, completed=value),
            on_complete=lambda: completed.append(True),
            on_error=failures.append,
            interval=interval
        )
        try:
            await monitor.wait()
        finally:
            monitor.stop()

    if failures:
        console.print(f"[red]Progress check failed: {failures[0]}[/red]")
        return False
    return bool(completed)


@app.command("create-url")
def create_url(
    token: str = TOKEN_OPTION,
    expire: int = typer.Option(600, "--expire", "-e", help="Upload URL lifetime in seconds"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Category key"),
    title: Optional[str] = typer.Option(None, "--title", help="Media title"),
    variant: UploadVariant = typer.Option(UploadVariant.NORMAL, "--variant", "-v", help="Upload variant"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="Profile key (passthrough)"),
):
    """Create an upload URL and print it."""
    async def do_create():
        async with make_client(token) as kollus:
            try:
                destination = await kollus.create_destination(
                    expire_time=expire,
                    category_key=category,
                    title=title,
                    variant=variant,
                    profile_key=profile
                )
            except KollusException as e:
                console.print(f"[red]Failed to create upload URL: {e}[/red]")
                raise typer.Exit(1)
            print_destination(destination)

    run_async(do_create())


@app.command()
def upload(
    file: Path = typer.Argument(..., help="Media file to upload"),
    token: str = TOKEN_OPTION,
    expire: int = typer.Option(600, "--expire", "-e", help="Upload URL lifetime in seconds"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Category key"),
    title: Optional[str] = typer.Option(None, "--title", help="Media title (defaults to file name)"),
    variant: UploadVariant = typer.Option(UploadVariant.NORMAL, "--variant", "-v", help="Upload variant"),
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="Profile key (passthrough)"),
    return_url: Optional[str] = typer.Option(None, "--return-url", help="Redirect URL after processing"),
    wait: bool = typer.Option(True, "--wait/--no-wait", help="Wait for processing to complete"),
    interval: float = typer.Option(1.0, "--interval", "-i", help="Seconds between progress checks"),
):
    """Upload a media file to Kollus."""
    async def do_upload():
        async with make_client(token) as kollus:
            try:
                destination = await kollus.create_destination(
                    expire_time=expire,
                    category_key=category,
                    title=title or file.stem,
                    variant=variant,
                    profile_key=profile
                )
                console.print(f"Uploading {file.name} ({format_file_size(file.stat().st_size)})")
                outcome = await kollus.transfer(destination.upload_url, file, return_url=return_url)
            except (KollusException, OSError, ValueError) as e:
                console.print(f"[red]Upload failed: {e}[/red]")
                raise typer.Exit(1)

            if outcome.error:
                console.print(f"[red]Upload failed: {outcome.message or outcome.error}[/red]")
                raise typer.Exit(1)

            console.print(f"[green]Transferred {file.name}[/green] (file key {destination.upload_file_key})")

            if wait:
                done = await watch_progress(kollus, destination.progress_url, interval, "Processing")
                if not done:
                    raise typer.Exit(1)
                console.print("[green]Processing complete[/green]")
            else:
                console.print(f"Progress URL: {destination.progress_url}")

    if wait:
        check_interval(interval)
    try:
        FileValidator().validate_media(file)
    except (OSError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    run_async(do_upload())


@app.command()
def progress(
    progress_url: str = typer.Argument(..., help="Progress URL returned by create-url"),
    interval: float = typer.Option(1.0, "--interval", "-i", help="Seconds between progress checks"),
):
    """Watch processing progress of an upload."""
    from kollupy import KollusClient, APIConfig

    async def do_watch():
        # Progress URLs are unauthenticated
        async with KollusClient("", config=APIConfig.from_env()) as kollus:
            done = await watch_progress(kollus, progress_url, interval, "Processing")
        if not done:
            raise typer.Exit(1)
        console.print("[green]Processing complete[/green]")

    check_interval(interval)
    run_async(do_watch())


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
