"""hydrohead command-line interface.

Entry point for the ``hydrohead`` CLI tool.
"""

from __future__ import annotations

import logging

import click
from rich.console import Console

from hydrohead import __app_name__, __version__

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name=__app_name__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """hydrohead: hydronic pressure drop and pump head.

    Calculates pipe friction, fitting and device losses, system volume and
    pump duty point for closed and open hydronic loops.
    """
    ctx.ensure_object(dict)
    ctx.obj["console"] = console
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )


# Import and register sub-command groups
from hydrohead.cli.calc_cmd import calc  # noqa: E402
from hydrohead.cli.info_cmd import info  # noqa: E402
from hydrohead.cli.size_cmd import size  # noqa: E402

cli.add_command(calc)
cli.add_command(info)
cli.add_command(size)


def main() -> None:
    """Convenience wrapper for entry-point scripts."""
    cli()
