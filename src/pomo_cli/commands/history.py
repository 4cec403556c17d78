"""Work session history commands."""

from datetime import date
from typing import Optional

import typer

from pomo_cli.config import get_config_manager
from pomo_cli.models.focus.command_parser import parse_iso_date
from pomo_cli.models.focus.errors import PersistenceError, UserInputError
from pomo_cli.models.focus.history import SessionStore, group_by_day
from pomo_cli.models.focus.ui import render_history, render_report
from pomo_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_STORAGE
from pomo_cli.utils.ui.console import get_console
from pomo_cli.utils.ui.formatters import format_error


def show_history(
    day: Optional[str] = typer.Option(
        None, "--date", "-d", help="Show a single day (YYYY-MM-DD); defaults to today"
    ),
    show_all: bool = typer.Option(False, "--all", "-a", help="Summarise every recorded day"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Show completed work sessions for today, a given date, or every day."""
    console = get_console()
    store = SessionStore(get_config_manager(profile).history_path)

    try:
        if show_all:
            console.print(render_history(group_by_day(store.load())))
            return

        target = parse_iso_date(day) if day is not None else date.today()
        console.print(render_report(store.report_for(target)))
    except UserInputError as e:
        format_error(f"{e}: {day}")
        raise typer.Exit(ERROR_INVALID_ARGS) from e
    except PersistenceError as e:
        format_error(str(e))
        raise typer.Exit(ERROR_STORAGE) from e
