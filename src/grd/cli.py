"""CLI entry point for grd."""

import click

from grd import __version__
from grd.commands import download, query
from grd.commands.common import AppContext, Output
from grd.core.config import get_config
from grd.core.errors import GrdError
from grd.core.log import setup_logging


class DefaultCommandGroup(click.Group):
    """Group that runs a default command when no command name is given."""

    def __init__(self, *args, default_command: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.default_command = default_command

    def resolve_command(self, ctx, args):
        if (
            self.default_command
            and args
            and args[0] not in self.commands
            and not args[0].startswith("-")
        ):
            args = [self.default_command, *args]
        return super().resolve_command(ctx, args)


@click.group(cls=DefaultCommandGroup, default_command="download")
@click.version_option(__version__, "--version", "-V", prog_name="grd")
@click.option("--quiet", "-q", is_flag=True, help="Do not print anything")
@click.option("--verbose", "-v", count=True, help="Show log messages (-vv for debug)")
@click.option(
    "--token",
    envvar="GRD_TOKEN",
    help="API token sent to the website (also read from GRD_TOKEN)",
)
@click.pass_context
def main(ctx: click.Context, quiet: bool, verbose: int, token: str | None):
    """grd - download release assets from GitHub and Gitea.

    Examples:

        grd VSCodium/vscodium '\\.deb$'

        grd download github.com/junegunn/fzf 'linux_amd64' --tag v0.44.0

        grd download codeberg.org/forgejo/forgejo 'linux-amd64$' -f

        grd query releases BurntSushi/ripgrep --count 3

        grd query assets BurntSushi/ripgrep --asset-pattern 'musl'
    """
    output = Output(quiet=quiet)
    if not quiet:
        setup_logging(verbose)

    try:
        config = get_config()
    except GrdError as e:
        output.fail(e)

    ctx.obj = AppContext(config=config, token=token, output=output)


# Register commands
main.add_command(download.download)
main.add_command(query.query)


if __name__ == "__main__":
    main()
