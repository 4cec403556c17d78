"""Interactive focus timer command."""

import typer

from pomo_cli.config import get_config_manager
from pomo_cli.models.focus.history import SessionStore
from pomo_cli.services.session_controller import SessionController
from pomo_cli.utils.logger import get_logger

app = typer.Typer(help="Interactive focus timer")


def build_controller(profile: str = "default") -> SessionController:
    """Create a controller wired to the configured session log and defaults."""
    config_manager = get_config_manager(profile)
    timer_config = config_manager.config.timer
    return SessionController(
        store=SessionStore(config_manager.history_path),
        work_minutes=timer_config.work_minutes,
        break_minutes=timer_config.break_minutes,
    )


@app.command("start")
def start_focus(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Open the focus prompt (s = work, b = break, l = list, q = quit)."""
    # Imported lazily so `pomo history` does not pay for loading Textual
    from pomo_cli.ui.focus_app import FocusApp

    controller = build_controller(profile)
    get_logger().info("Opening focus prompt (history: %s)", controller.store.db_path)
    FocusApp(controller).run()
