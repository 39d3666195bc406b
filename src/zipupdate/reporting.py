"""User-facing progress and error output."""

from dataclasses import dataclass

import click


@dataclass(frozen=True)
class Reporter:
    """Writes per-member progress (verbose only) and errors (always)."""

    verbose: bool = False

    def info(self, message: str) -> None:
        if self.verbose:
            click.echo(message)

    def error(self, message: str) -> None:
        click.echo(message, err=True)
