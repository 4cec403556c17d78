"""Textual front end for the focus timer.

The app only wires terminal events to ``SessionController``: submitted
lines, the stop/quit keys and a one-second interval timer that runs while a
session is in progress. Textual delivers all of them on one event loop, so
they reach the controller strictly one at a time.
"""

from rich.console import Group
from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.timer import Timer
from textual.widgets import Input, Static

from pomo_cli.models.focus.command_parser import Quit, Stop
from pomo_cli.models.focus.ui import MAX_BAR_WIDTH, render_report, render_status
from pomo_cli.services.session_controller import SessionController

INPUT_CHAR_LIMIT = 20
PADDING = 2
REPORT_HINT = " - Press 'x' to stop"


class FocusApp(App):
    """Single-line prompt plus live countdown."""

    CSS = """
    Screen {
        padding: 1 2;
    }

    #status {
        height: auto;
        margin-bottom: 1;
    }

    #report {
        height: auto;
    }

    #command {
        width: 34;
        border: tall $accent;
    }

    #error {
        color: $error;
        height: 1;
        margin-top: 1;
    }
    """

    BINDINGS = [
        Binding("x", "stop", "Stop", show=False),
        Binding("q", "quit_app", "Quit", show=False),
        Binding("escape", "quit_app", "Quit", show=False),
        Binding("ctrl+c", "quit_app", "Quit", show=False, priority=True),
    ]

    def __init__(self, controller: SessionController, **kwargs):
        super().__init__(**kwargs)
        self.controller = controller
        self._ticker: Timer | None = None

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(id="status")
            yield Static(id="report")
            yield Input(placeholder="Command...", max_length=INPUT_CHAR_LIMIT, id="command")
            yield Static(id="error")

    def on_mount(self) -> None:
        self.refresh_view()

    # ----- Input -----
    @on(Input.Submitted, "#command")
    def handle_command(self, event: Input.Submitted) -> None:
        line = event.value
        event.input.value = ""

        started = self.controller.submit(line)
        if self.controller.quit_requested:
            self.exit()
            return
        if started:
            self._start_ticking()
        self.refresh_view()

    @on(Input.Changed, "#command")
    def clear_error(self, event: Input.Changed) -> None:
        if event.value and self.controller.error:
            self.controller.error = ""
            self.query_one("#error", Static).update("")

    # ----- Actions -----
    def action_stop(self) -> None:
        if self.controller.dispatch(Stop()):
            self._stop_ticking()
            self.refresh_view()

    def action_quit_app(self) -> None:
        self.controller.dispatch(Quit())
        self.exit()

    # ----- Ticking -----
    def _start_ticking(self) -> None:
        self._stop_ticking()
        self._ticker = self.set_interval(1.0, self._on_tick)

    def _stop_ticking(self) -> None:
        if self._ticker is not None:
            self._ticker.stop()
            self._ticker = None

    def _on_tick(self) -> None:
        if not self.controller.tick():
            self._stop_ticking()
        self.refresh_view()

    # ----- Rendering -----
    def refresh_view(self) -> None:
        controller = self.controller
        status = self.query_one("#status", Static)
        report = self.query_one("#report", Static)
        command = self.query_one("#command", Input)

        if controller.report is not None:
            status.display = False
            report.display = True
            report.update(Group(render_report(controller.report), Text(REPORT_HINT, style="dim")))
        else:
            report.display = False
            status.display = True
            width = min(self.size.width - PADDING * 2 - 4, MAX_BAR_WIDTH)
            status.update(render_status(controller.snapshot(), width=max(width, 10)))

        accepts = controller.accepts_input
        command.disabled = not accepts
        command.display = accepts
        if accepts:
            command.focus()

        self.query_one("#error", Static).update(controller.error)
