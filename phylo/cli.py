"""CLI entry point for phylo.

Usage:
    phylo [--verbose] dir <pattern>

Options are only read before the operation name, so a pattern such as
``-v`` or ``--help`` is passed through as the pattern.
"""

from typing import Tuple

import click

from phylo.exceptions import UsageError
from phylo.output import configure_logging, output_text
from phylo.services.lister import get_directory_lister


def run(operation: str, arg: str) -> int:
    """Dispatch one operation and return its exit code."""
    if operation == "dir":
        return get_directory_lister().list(arg)

    # Unknown operations still exit 0; existing callers rely on it.
    output_text('Unknown operation. Should be "dir".\n')
    return 0


@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    }
)
@click.option("--verbose", "-v", is_flag=True, help="Log enumeration details to stderr")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, args: Tuple[str, ...]) -> None:
    """List the entries matching a path pattern.

    Each entry prints as ATTRS/CREATED/ACCESSED/MODIFIED/SIZE/NAME.
    """
    configure_logging(verbose)

    try:
        if len(args) != 2:
            raise UsageError()
        exit_code = run(*args)
    except UsageError as e:
        output_text(f"{e.message}\n")
        exit_code = e.exit_code

    ctx.exit(exit_code)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
