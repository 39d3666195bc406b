"""zipupdate CLI entry point."""

import re
import sys

import click

from ..archive import update_archives
from ..filtering import compile_pattern
from ..reporting import Reporter


def _validate_match(ctx, param, value):
    try:
        return compile_pattern(value)
    except re.error as e:
        raise click.BadParameter(f"invalid regular expression: {e}")


def _validate_command(ctx, param, value):
    if value is not None and not value.strip():
        raise click.BadParameter("filter command cannot be empty")
    return value


@click.command(
    context_settings=dict(
        help_option_names=["-h", "--help"],
        auto_envvar_prefix="ZIPUPDATE",
    )
)
@click.argument("files", nargs=-1, required=True, type=click.Path())
@click.option(
    "-c",
    "--command",
    required=True,
    callback=_validate_command,
    help="Command line to filter files through. It reads stdin, writes "
    "stdout and is interpreted by a shell, so it may contain pipes etc.",
)
@click.option(
    "-m",
    "--match",
    "pattern",
    envvar="ZIPUPDATE_MATCH",
    default="",
    callback=_validate_match,
    help="Regular expression selecting the inner files to modify. It is "
    'matched against full paths inside the archive, with "/" as directory '
    "delimiter. Default: all files.",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Print output about every performed operation.",
)
def cli(files, command, pattern, verbose):
    """Update .zip archives in-place.

    For each file inside FILES whose name matches --match, the content is
    filtered through --command and written back to the archive. Archives in
    which no file changed are left untouched.

    Exits 0 if every archive and file was processed, 1 if any archive could
    not be read or written or any filter command failed.

    Examples:

    \b
        # Add an attribute to a certain element
        find . -name "*.zip" -print0 | xargs -0 zipupdate \\
          --match "directoryname/.*\\.xml" --command \\
          "xmlstarlet edit -P -S --insert //MatchingElement --type attr --name newattribute --value value"

    \b
        # Remove an attribute from all nodes
        find . -name "*.zip" -print0 | xargs -0 zipupdate \\
          --match "\\.xml" --command "xmlstarlet edit -P -S --delete //@version"

    \b
        # Convert encodings through a shell pipeline
        find . -name "*.zip" -print0 | xargs -0 zipupdate \\
          --match "\\.xml" --command \\
          'recode iso-8859-1..utf8 | sed -e "s/encoding=\\"iso-8859-1\\"/encoding=\\"utf-8\\"/"'
    """
    run = update_archives(files, pattern, command, Reporter(verbose=verbose))
    sys.exit(0 if run.success else 1)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
