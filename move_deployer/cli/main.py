# move_deployer/cli/main.py
"""Command line entry point for move-deployer"""

import logging
import sys
from dataclasses import dataclass

import click
from rich.logging import RichHandler

from .commands import deploy, doctor
from .utils.output import console
from ..__version__ import __version__
from ..api.exceptions import DeployerError
from ..constants import APP_NAME, LOG_FORMAT


def configure_logging(verbose: bool = False, debug: bool = False, quiet: bool = False) -> None:
    """Route package logs through rich

    Args:
        verbose: Show progress of each package (INFO)
        debug: Show tool invocations and profile changes (DEBUG)
        quiet: Only show errors
    """
    if quiet:
        level = logging.ERROR
    elif debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=debug,
        show_path=debug,
        rich_tracebacks=debug,
        tracebacks_suppress=[click],
    )
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[handler])

    # the faucet and rest clients log every request at INFO
    for name in ("asyncio", "httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


@dataclass
class CliState:
    """Global flags shared with subcommands through ``ctx.obj``"""

    verbose: bool = False
    debug: bool = False
    quiet: bool = False


@click.group(name=APP_NAME)
@click.version_option(__version__, '-V', '--version', prog_name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Log each deployment step')
@click.option('-d', '--debug', is_flag=True, help='Log tool invocations and profile changes')
@click.option('-q', '--quiet', is_flag=True, help='Only log errors')
@click.pass_context
def cli(ctx, verbose, debug, quiet):
    """Move Deployer - deploy interdependent Move packages

    Publishes packages to an Aptos network in the order given, wiring the
    addresses of already deployed packages into the ones that depend on
    them, and writes a report that can resume an interrupted run.
    """
    configure_logging(verbose=verbose, debug=debug, quiet=quiet)
    ctx.obj = CliState(verbose=verbose, debug=debug, quiet=quiet)


for command in (deploy.deploy, doctor.doctor):
    cli.add_command(command)


def main():
    """Run the CLI, turning interrupts and stray errors into exit codes"""
    try:
        cli(prog_name=APP_NAME)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted, run 'move-deployer doctor' to check "
                      "for a leftover profile[/yellow]")
        sys.exit(130)
    except DeployerError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
