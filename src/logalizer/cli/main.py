"""Logalizer CLI - interactive multi-source log viewer.

Reads every input on its own thread, sorts lines into tabs with regex
filters, and shows them in a scrollable terminal view where each tab can be
shown or hidden live.

Example:
    logalizer -i <(journalctl -f) -f 'KERNEL:.*kernel.*' -f 'SYSTEMD:.*systemd.*' \\
        --log-file err.txt

Environment variables (LOGALIZER_ prefix) are read through Settings; command
line options take precedence.
"""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from logalizer.config import (
    CommandBinding,
    FilterSpec,
    Settings,
    ViewerConfig,
    build_model,
)
from logalizer.errors import ConfigurationError
from logalizer.runner import ShellCommandRunner
from logalizer.tui.viewer import Viewer

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="logalizer",
    help="Interactive multi-source log viewer with regex tabs",
    add_completion=False,
)


def configure_logging(level: str, log_file: Path | None) -> None:
    """
    Configure the root logger once.

    The terminal belongs to the viewer, so logs go to log_file when given.
    Without one only warnings and errors reach stderr.
    """
    handlers: list[logging.Handler]
    if log_file is not None:
        handlers = [logging.FileHandler(log_file)]
    else:
        handlers = [logging.StreamHandler()]
        level = "WARNING"
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(threadName)s %(name)s %(levelname)s %(message)s",
        handlers=handlers,
        force=True,
    )


@app.command()
def run(
    inputs: list[str] = typer.Option(
        ...,  # Required (no default)
        "--input",
        "-i",
        help="Input file to be read (repeatable)",
    ),
    filters: list[str] = typer.Option(
        [],
        "--filter",
        "-f",
        help="Filter as <name:regex>; matching lines get their own tab (repeatable)",
    ),
    commands: list[str] = typer.Option(
        [],
        "--exec",
        "-e",
        help=(
            "Command as <name:command>, run for every line matching the filter "
            "with that name; the line is passed as the last argument and the "
            "output is shown as a comment (repeatable)"
        ),
    ),
    follow: bool = typer.Option(
        False, "--follow", "-F", help="Keep reading inputs after end of file"
    ),
    command_timeout: float = typer.Option(
        None,
        "--command-timeout",
        help="Kill annotation commands after this many seconds (default: wait)",
    ),
    no_comments: bool = typer.Option(
        False, "--no-comments", help="Start with comments hidden (toggle with c)"
    ),
    log_file: Path = typer.Option(
        None, "--log-file", help="Write logs to this file"
    ),
    log_level: str = typer.Option(
        None, "--log-level", help="Log level for --log-file"
    ),
) -> None:
    """
    Open the viewer on one or more inputs.

    Keys: 0-9 toggle a tab, up/down (or k/j) scroll, c toggle comments,
    q quit.
    """
    console = Console()

    settings = Settings()
    if command_timeout is not None:
        settings.command_timeout = command_timeout
    if no_comments:
        settings.show_comments = False
    if log_file is not None:
        settings.log_file = log_file
    if log_level is not None:
        settings.log_level = log_level

    configure_logging(settings.log_level, settings.log_file)

    try:
        config = ViewerConfig(
            inputs=inputs,
            filters=[FilterSpec.parse(raw) for raw in filters],
            commands=[CommandBinding.parse(raw) for raw in commands],
            follow=follow,
        )
        session = build_model(
            config,
            runner=ShellCommandRunner(timeout=settings.command_timeout),
            settings=settings,
        )
    except ConfigurationError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    for binding in session.unbound:
        console.print(
            f"[yellow]Warning: no filter named '{escape(binding.name)}', "
            f"command ignored[/yellow]"
        )

    logger.info(
        f"Starting viewer: {len(config.inputs)} inputs, {len(config.filters)} filters"
    )
    viewer = Viewer(session.model, settings, session.stop, console=console)
    session.start()
    try:
        viewer.run()
    except KeyboardInterrupt:
        pass  # Ctrl+C ends the render loop like 'q'
    finally:
        stuck = session.shutdown(timeout=settings.join_timeout)

    if stuck:
        names = ", ".join(str(source.path) for source in stuck)
        console.print(f"[yellow]Inputs still blocked on read: {names}[/yellow]")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
