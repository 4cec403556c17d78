"""Main entry point for Pomo CLI."""

import typer

from pomo_cli import __version__
from pomo_cli.commands import config, focus
from pomo_cli.commands.history import show_history
from pomo_cli.utils.logger import set_log_level
from pomo_cli.utils.ui.console import get_console

app = typer.Typer(
    name="pomo",
    help="A terminal focus timer that keeps a log of your work sessions",
)

app.add_typer(config.app, name="config", help="Configuration management")
app.add_typer(focus.app, name="focus", help="Interactive focus timer")
app.command("history")(show_history)


@app.callback(invoke_without_command=True)
def root(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Write debug logs"),
) -> None:
    """Open the focus prompt when no command is given."""
    set_log_level(verbose)
    if ctx.invoked_subcommand is None:
        focus.start_focus(profile="default")


@app.command()
def version() -> None:
    """Show version information."""
    get_console().print(f"[bold]Pomo CLI[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
