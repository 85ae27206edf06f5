"""TON CLI - upload, download and verify objects."""
import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn

from ..client import TonClient, load_credentials, resolve_profile
from ..core.config import TonConfig, validate_bucket
from ..core.credentials import Credentials, JSONCredentialStore
from ..core.exceptions import ConfigError, TonError
from ..core.upload import UploadProgress

app = typer.Typer(
    name="ton",
    help="Upload and download large objects to TON buckets",
    add_completion=False
)
console = Console()
err_console = Console(stderr=True)


class Mode(str, Enum):
    upload = "upload"
    download = "download"
    verify_upload = "verify_upload"


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def fail(message: str, code: int = 1):
    """Print an error to stderr and exit."""
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(code)


def enable_trace() -> None:
    """Wire-level logging to stderr."""
    from .. import setup_logging

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True
    )
    setup_logging(logging.DEBUG)


def check_options(
    mode: Mode,
    bucket: str,
    file: Optional[Path],
    location: Optional[str],
    app_auth: bool
) -> None:
    """
    Reject bad argument combinations before anything touches the network.

    Raises:
        ConfigError: Describing the first problem found
    """
    validate_bucket(bucket)

    if mode is Mode.download:
        if not location:
            raise ConfigError("--location is required for --mode download")
    else:
        if file is None:
            raise ConfigError(f"--file is required for --mode {mode.value}")
        if not file.exists():
            raise ConfigError(f"File not found: {file}")
        if not file.is_file():
            raise ConfigError(f"Not a file: {file}")

    if mode in (Mode.download, Mode.verify_upload) and not app_auth:
        raise ConfigError(f"--mode {mode.value} downloads from TON and needs --app-auth")


def object_location(config: TonConfig, bucket: str, location: str) -> str:
    """Accept either a stored location/URL or a bare object key."""
    if location.startswith('/') or '://' in location:
        return location
    return f"{config.bucket_url(bucket)}/{location}"


async def upload_with_progress(ton: TonClient, file: Path, bucket: str) -> str:
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console
    ) as progress:
        task = progress.add_task(f"Uploading {escape(file.name)}", total=100)

        def on_progress(p: UploadProgress):
            progress.update(task, completed=p.percentage)

        result = await ton.upload_file(file, bucket, progress_callback=on_progress)

    console.print(
        f"[green]Uploaded:[/green] {escape(file.name)} "
        f"({result.file_size:,} bytes, {result.strategy.value}, {result.chunks} request(s))"
    )
    console.print(f"Location: {escape(result.location)}")
    return result.location


async def run_mode(
    mode: Mode,
    bucket: str,
    file: Optional[Path],
    location: Optional[str],
    output: Optional[Path],
    app_auth: bool,
    credentials: Credentials,
    config: TonConfig
) -> bool:
    """
    Execute one CLI mode.

    Returns:
        False when verification found a mismatch
    """
    profile = await resolve_profile(credentials, app_auth, config)

    async with TonClient(profile, config) as ton:
        if mode is Mode.download:
            path = await ton.download(object_location(config, bucket, location), output)
            console.print(f"[green]Downloaded:[/green] {escape(str(path))}")
            return True

        stored = await upload_with_progress(ton, file, bucket)
        if mode is Mode.upload:
            return True

        matched = await ton.verify(stored, file)
        if matched:
            console.print(f"[green]Verified:[/green] {escape(stored)} matches {escape(file.name)}")
        else:
            err_console.print(f"[red]Verification failed:[/red] {escape(stored)} differs from {escape(file.name)}")
        return matched


@app.command()
def ton(
    mode: Mode = typer.Option(..., "--mode", "-m", help="upload, download or verify_upload"),
    bucket: str = typer.Option(..., "--bucket", "-b", help="Bucket name ([a-z_0-9]+)"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Local file (not needed for download)"),
    app_auth: bool = typer.Option(False, "--app-auth", help="Use application-only bearer auth"),
    trace: bool = typer.Option(False, "--trace", help="Log every request and response"),
    location: Optional[str] = typer.Option(None, "--location", "-l", help="Stored location or object key to download"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Download destination (default: staging file)"),
    credentials_path: Optional[Path] = typer.Option(None, "--credentials", help="Credentials JSON file"),
    domain: Optional[str] = typer.Option(None, "--domain", help="API domain override"),
):
    """Upload a file to a TON bucket, download an object, or round-trip verify an upload."""
    try:
        config = TonConfig.from_env(**({'domain': domain} if domain else {}))
        check_options(mode, bucket, file, location, app_auth)
        credentials = load_credentials(JSONCredentialStore(credentials_path), app_auth)
    except ConfigError as e:
        fail(str(e))

    if trace:
        enable_trace()

    try:
        ok = run_async(run_mode(mode, bucket, file, location, output, app_auth, credentials, config))
    except TonError as e:
        fail(str(e))

    if not ok:
        raise typer.Exit(1)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
