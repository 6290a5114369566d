"""Download functionality with progress reporting."""

from pathlib import Path
import logging

import httpx
from rich.console import Console
from rich.progress import (
    Progress,
    BarColumn,
    DownloadColumn,
    TransferSpeedColumn,
    TimeRemainingColumn,
)

from grd.core.errors import DownloadError
from grd.models.release import Asset

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


def download_asset(
    asset: Asset,
    dest: Path | None = None,
    *,
    client: httpx.Client,
    show_progress: bool = True,
    console: Console | None = None,
) -> Path:
    """Download a release asset.

    Args:
        asset: Asset to download
        dest: File to write (defaults to the asset name in the current directory)
        client: HTTP client to download with (follows redirects)
        show_progress: Whether to show a progress bar
        console: Console the progress bar is drawn on

    Returns:
        Path to the downloaded file

    An existing file is overwritten. A partially written file is left in
    place if the transfer fails.
    """
    file_path = dest if dest is not None else Path.cwd() / asset.name
    logger.info("Downloading %s to %s", asset.download_url, file_path)

    try:
        with client.stream("GET", asset.download_url) as response:
            if response.status_code != 200:
                raise DownloadError(
                    f"Failed to download {asset.download_url}: HTTP {response.status_code}"
                )

            total = int(response.headers.get("content-length", 0) or 0)

            if show_progress and total > 0:
                with Progress(
                    "[progress.description]{task.description}",
                    BarColumn(),
                    DownloadColumn(),
                    TransferSpeedColumn(),
                    TimeRemainingColumn(),
                    console=console,
                    transient=True,
                ) as progress:
                    task = progress.add_task(f"Downloading {asset.name}", total=total)

                    with open(file_path, "wb") as f:
                        for chunk in response.iter_bytes(chunk_size=CHUNK_SIZE):
                            f.write(chunk)
                            progress.update(task, advance=len(chunk))
            else:
                with open(file_path, "wb") as f:
                    for chunk in response.iter_bytes(chunk_size=CHUNK_SIZE):
                        f.write(chunk)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise DownloadError(f"Error downloading {asset.download_url}: {e}") from e
    except OSError as e:
        raise DownloadError(f"Could not write to file {file_path}: {e}") from e

    return file_path
