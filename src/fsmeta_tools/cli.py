"""Command-line interface for fsmeta-tools.

This module provides the two commands shipped with the package:

Commands:
    - hasacl: Tell whether a file has a non-trivial access ACL
    - listwhite: List the whiteout entries in one or more directories

Each command is a small typer app. The ``hasacl_main`` and ``listwhite_main``
entry points run the app without click's standalone handling so that usage
errors map onto the documented exit codes instead of click's default of 2.
"""

import os
from typing import Annotated, Callable, List, Optional

import click
import typer

from . import __version__
from .core import get_logger
from .core.exceptions import AclRetrievalError, TraversalOpenError, TraversalReadError
from .filesystem import ModeEquivalence, classify, scan

logger = get_logger(__name__)

# hasacl exit codes
EXIT_TRIVIAL = 0
EXIT_NON_TRIVIAL = 1
ERR_USAGE = 100
ERR_ACLGET = 101

# listwhite exit codes
EXIT_OK = 0
ERR_OPEN = 1
ERR_READ = 2

# Interrupted by the user (128 + SIGINT)
ERR_INTERRUPTED = 130


def _version_callback(prog_name: str) -> Callable[[bool], None]:
    def callback(value: bool) -> None:
        """Display version information."""
        if value:
            typer.echo(f"{prog_name} {__version__}")
            raise typer.Exit()

    return callback


hasacl_app = typer.Typer(
    name="hasacl",
    help="Tell whether a file has a (non-trivial) ACL.",
    add_completion=False,
)

listwhite_app = typer.Typer(
    name="listwhite",
    help="List the names of all whiteout entries in the given directories.",
    add_completion=False,
)


@hasacl_app.command()
def hasacl_cmd(
    path: Annotated[
        str, typer.Argument(help="File to check (default: current directory)")
    ] = ".",
    verbose: Annotated[
        bool,
        typer.Option(
            "-v",
            "--verbose",
            help="Also print 1 (trivial) or 0 (non-trivial) on stdout.",
        ),
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            callback=_version_callback("hasacl"),
            is_eager=True,
            help="Show version.",
        ),
    ] = None,
) -> None:
    """
    Tell whether PATH has an access ACL that mode bits cannot express.

    Exits 0 when the ACL is trivial, 1 when it is not, 100 on a usage error
    and 101 when the ACL cannot be retrieved.
    """
    try:
        result = classify(path)
    except AclRetrievalError as e:
        cause = f": {e.__cause__}" if e.__cause__ else ""
        typer.echo(f"hasacl: {e}{cause}", err=True)
        raise typer.Exit(ERR_ACLGET)

    trivial = result is ModeEquivalence.trivial
    if verbose:
        typer.echo("1" if trivial else "0")

    raise typer.Exit(EXIT_TRIVIAL if trivial else EXIT_NON_TRIVIAL)


@listwhite_app.command()
def listwhite_cmd(
    directories: Annotated[
        Optional[List[str]],
        typer.Argument(
            help="Directories to inspect (default: current directory)",
            show_default=False,
        ),
    ] = None,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            callback=_version_callback("listwhite"),
            is_eager=True,
            help="Show version.",
        ),
    ] = None,
) -> None:
    """
    List whiteout entries in DIRECTORIES, one name per line.

    Directories directly inside each given directory are not entered.
    Exits 0 when the listing completed, 1 when a directory could not be
    opened and 2 when reading stopped part way.
    """
    try:
        names = scan(list(directories or []))
    except TraversalOpenError as e:
        typer.echo(f"listwhite: {e}", err=True)
        raise typer.Exit(ERR_OPEN)

    try:
        for name in names:
            # Raw filename bytes; names need not be valid UTF-8
            typer.echo(os.fsencode(name))
    except TraversalReadError as e:
        typer.echo(f"listwhite: {e}", err=True)
        raise typer.Exit(ERR_READ)

    raise typer.Exit(EXIT_OK)


def _run(app: typer.Typer, prog_name: str, argv: Optional[List[str]]) -> int:
    """Run a typer app and return its exit code."""
    command = typer.main.get_command(app)
    try:
        result = command.main(args=argv, prog_name=prog_name, standalone_mode=False)
    except click.UsageError as e:
        logger.debug("Invalid usage", prog=prog_name, error=e.format_message())
        e.show()
        return ERR_USAGE
    except click.Abort:
        typer.echo("Aborted!", err=True)
        return ERR_INTERRUPTED

    return result if isinstance(result, int) else 0


def hasacl_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``hasacl`` command."""
    return _run(hasacl_app, "hasacl", argv)


def listwhite_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``listwhite`` command."""
    return _run(listwhite_app, "listwhite", argv)
