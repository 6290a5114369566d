"""Query commands: list releases and assets without downloading."""

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from grd.commands.common import AppContext, repository_options
from grd.core.errors import GrdError
from grd.core.selector import compile_pattern, filter_releases, match_assets, select_release
from grd.models.release import Asset, Release
from grd.models.repository import Provider

console = Console()


def format_size(size: int) -> str:
    """Size in MB, e.g. '12.3 MB'."""
    return f"{size / (1024 * 1024):.1f} MB"


def print_releases(releases: list[Release], long: bool = False) -> None:
    if not long:
        for release in releases:
            click.echo(release.tag_name)
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Tag")
    table.add_column("Title")
    table.add_column("Prerelease")
    table.add_column("Created")
    table.add_column("Assets", justify="right")

    for release in releases:
        table.add_row(
            release.tag_name,
            escape(release.name),
            "[yellow]yes[/yellow]" if release.prerelease else "",
            release.created_at[:10],
            str(len(release.assets)),
        )

    console.print(table)


def print_assets(assets: list[Asset], long: bool = False) -> None:
    if not long:
        for asset in assets:
            click.echo(asset.name)
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Asset")
    table.add_column("Size", justify="right")
    table.add_column("URL", overflow="fold")

    for asset in assets:
        table.add_row(escape(asset.name), format_size(asset.size), asset.download_url)

    console.print(table)


@click.group()
def query():
    """Query releases or assets of a repository."""
    pass


@query.command("releases")
@click.argument("repository")
@repository_options
@click.option(
    "--count",
    "-c",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Number of latest releases to show",
)
@click.option("--prerelease", "-p", is_flag=True, help="Include prereleases")
@click.option("--long", "-l", "long_format", is_flag=True, help="Show a table with details")
@click.pass_obj
def releases(
    app: AppContext,
    repository: str,
    website_type: Provider | None,
    sub_path: str | None,
    count: int,
    prerelease: bool,
    long_format: bool,
):
    """List the latest releases of REPOSITORY, newest first."""
    try:
        repo = app.resolve_repository(repository, website_type, sub_path)
        with app.open_client(repo) as client:
            all_releases = client.list_releases(repo)
    except GrdError as e:
        app.output.fail(e)

    if app.output.quiet:
        return
    print_releases(filter_releases(all_releases, prerelease, count), long_format)


@query.command("assets")
@click.argument("repository")
@repository_options
@click.option("--tag", "-t", help="Tag of the release (latest if omitted)")
@click.option("--prerelease", "-p", is_flag=True, help="Include prereleases")
@click.option(
    "--asset-pattern",
    "-a",
    default=".*",
    help="Only show assets matching this regular expression",
)
@click.option("--long", "-l", "long_format", is_flag=True, help="Show a table with details")
@click.pass_obj
def assets(
    app: AppContext,
    repository: str,
    website_type: Provider | None,
    sub_path: str | None,
    tag: str | None,
    prerelease: bool,
    asset_pattern: str,
    long_format: bool,
):
    """List the assets of a release of REPOSITORY."""
    try:
        pattern = compile_pattern(asset_pattern)
        repo = app.resolve_repository(repository, website_type, sub_path)
        with app.open_client(repo) as client:
            all_releases = client.list_releases(repo)
        release = select_release(all_releases, tag, prerelease)
    except GrdError as e:
        app.output.fail(e)

    if app.output.quiet:
        return
    print_assets(match_assets(release, pattern), long_format)
