"""Download command implementation."""

from pathlib import Path

import click
from rich.markup import escape

from grd.commands.common import AppContext, repository_options
from grd.core.downloader import download_asset
from grd.core.errors import GrdError
from grd.core.log import stderr_console
from grd.core.selector import compile_pattern, select_asset, select_release
from grd.models.repository import Provider


@click.command()
@click.argument("repository")
@click.argument("asset_pattern")
@repository_options
@click.option("--tag", "-t", help="Tag of the release (latest if omitted)")
@click.option("--prerelease", "-p", is_flag=True, help="Include prereleases")
@click.option(
    "--print-filename",
    "-f",
    is_flag=True,
    help="Print only the downloaded file name to stdout",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="File to write (defaults to the asset name)",
)
@click.pass_obj
def download(
    app: AppContext,
    repository: str,
    asset_pattern: str,
    website_type: Provider | None,
    sub_path: str | None,
    tag: str | None,
    prerelease: bool,
    print_filename: bool,
    output: Path | None,
):
    """Download a release asset (default if no command is given).

    REPOSITORY can be:
      - owner/name (GitHub)
      - github.com/owner/name
      - https://gitea.example.com/sub/path/owner/name

    ASSET_PATTERN is a regular expression that must match exactly one
    asset of the release, e.g. '\\.deb$'.
    """
    out = app.output
    out.minimal = print_filename

    try:
        pattern = compile_pattern(asset_pattern)
        repo = app.resolve_repository(repository, website_type, sub_path)

        with app.open_client(repo) as client:
            releases = client.list_releases(repo)
            release = select_release(releases, tag, prerelease)
            asset = select_asset(release, pattern)

            out.status(f'Downloading "{escape(asset.name)}" from release {escape(release.tag_name)}')
            download_asset(
                asset,
                output,
                show_progress=out.show_progress,
                client=client.client,
                console=stderr_console,
            )
    except GrdError as e:
        out.fail(e)

    filename = str(output) if output is not None else asset.name
    out.status(f'[green]✓[/green] Successfully wrote to file "{escape(filename)}"')
    if print_filename:
        out.result(filename, newline=False)
