"""Shared state and options for grd commands."""

from dataclasses import dataclass, field
from typing import NoReturn

import click
from rich.markup import escape

from grd.core.client import ReleaseClient
from grd.core.config import GrdConfig
from grd.core.errors import GrdError
from grd.core.log import stderr_console
from grd.core.providers import parse_provider, parse_repository
from grd.models.repository import Provider, Repository


@dataclass
class Output:
    """Decides what reaches the terminal.

    Status lines and errors go to stderr, results to stdout. ``quiet``
    silences everything. ``minimal`` keeps stdout for the result only and
    shrinks errors to a single plain line.
    """

    quiet: bool = False
    minimal: bool = False

    @property
    def show_progress(self) -> bool:
        return not (self.quiet or self.minimal)

    def status(self, message: str) -> None:
        if self.show_progress:
            stderr_console.print(message, highlight=False)

    def result(self, text: str, newline: bool = True) -> None:
        if not self.quiet:
            click.echo(text, nl=newline)

    def fail(self, error: GrdError) -> NoReturn:
        """Report an error and exit with its code."""
        if not self.quiet:
            if self.minimal:
                click.echo(f"error: {error}", err=True)
            else:
                stderr_console.print(f"[red]Error:[/red] {escape(str(error))}")
        raise SystemExit(error.exit_code)


@dataclass
class AppContext:
    """Per-invocation state passed to commands as the click context object."""

    config: GrdConfig
    token: str | None = None
    output: Output = field(default_factory=Output)

    def resolve_repository(
        self, text: str, website_type: Provider | None, sub_path: str | None
    ) -> Repository:
        return parse_repository(
            text, override=website_type, sub_path=sub_path, hosts=self.config.hosts
        )

    def open_client(self, repository: Repository) -> ReleaseClient:
        """Create an API client authenticated for the repository's host."""
        token = self.token or self.config.token_for(repository)
        return ReleaseClient(token=token, timeout=self.config.timeout)


def _website_type_callback(ctx, param, value):
    if value is None:
        return None
    return parse_provider(value)


def repository_options(func):
    """Add --website-type and --sub-path to a command."""
    func = click.option(
        "--sub-path",
        "-s",
        help="Sub path of a self-hosted website (https://example.com/gitea/user/repo -> /gitea)",
    )(func)
    func = click.option(
        "--website-type",
        "-w",
        type=click.Choice([p.value for p in Provider], case_sensitive=False),
        callback=_website_type_callback,
        help="Website type (guessed from the repository if omitted)",
    )(func)
    return func
