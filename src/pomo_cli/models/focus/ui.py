"""Rich renderables for the focus timer and the session report."""

from datetime import date, timedelta

from rich.console import Group, RenderableType
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from .engine import Phase, SessionType, TimerSnapshot
from .history import DayReport

MAX_BAR_WIDTH = 80

HELP_TEXT = """Commands:
  s [minutes]      start a work session (default 25)
  b [minutes]      start a break (default 5)
  l [YYYY-MM-DD]   list work sessions for today or a date
  q                quit

Run `pomo history --all` for every day on record."""


def format_remaining(remaining: timedelta) -> str:
    """Format a countdown as MM:SS, or H:MM:SS past the hour."""
    total = int(remaining.total_seconds())
    sign = "-" if total < 0 else ""
    total = abs(total)
    hours, rest = divmod(total, 3600)
    mins, secs = divmod(rest, 60)
    if hours:
        return f"{sign}{hours}:{mins:02d}:{secs:02d}"
    return f"{sign}{mins:02d}:{secs:02d}"


def format_duration(duration: timedelta) -> str:
    """Human friendly length, e.g. ``1h 05m`` or ``25m``."""
    minutes = int(duration.total_seconds() // 60)
    hours, mins = divmod(minutes, 60)
    if hours:
        return f"{hours}h {mins:02d}m"
    return f"{mins}m"


def render_help() -> Text:
    return Text(HELP_TEXT, style="dim")


def render_status(snapshot: TimerSnapshot, width: int = MAX_BAR_WIDTH) -> RenderableType:
    """Build the status line for the current timer phase."""
    if snapshot.phase is Phase.IDLE:
        return render_help()

    session_name = snapshot.session_type.value

    if snapshot.phase is Phase.OPENING:
        minutes = int(snapshot.timer_duration.total_seconds() // 60)
        return Text(
            f"Ready to start new {session_name} session for {minutes} minutes "
            f"in {snapshot.opening_countdown} seconds...",
            style="bold cyan",
        )

    if snapshot.phase is Phase.CLOSING:
        if snapshot.session_type is SessionType.WORK:
            return Text(
                f"You have completed one {session_name} session. Keep it up 💪",
                style="bold green",
            )
        return Text(
            f"Regained your energy with short {SessionType.BREAK.value}. "
            f"Let's start {SessionType.WORK.value} session.",
            style="bold green",
        )

    remaining = snapshot.remaining_time
    if remaining < timedelta(minutes=1):
        timer_color = "red"
    elif remaining < timedelta(minutes=5):
        timer_color = "yellow"
    else:
        timer_color = "cyan"

    header = Text(f"{session_name} Timer: ")
    header.append(format_remaining(remaining), style=f"bold {timer_color}")
    header.append(" left")

    bar = ProgressBar(
        total=1.0,
        completed=min(max(snapshot.percent, 0.0), 1.0),
        width=min(width, MAX_BAR_WIDTH),
    )
    hints = Text(" - Press 'x' to stop\n - Press 'q' to quit", style="dim")
    percent = Text(f"{snapshot.percent:.0%}", style="dim")
    return Group(header, Text(""), bar, percent, Text(""), hints)


def render_report(report: DayReport, today: date | None = None) -> RenderableType:
    """Table of the work sessions for one day."""
    today = today or date.today()
    title = "Today" if report.day == today else report.day.isoformat()

    if not report.sessions:
        label = "today" if report.day == today else report.day.isoformat()
        return Text(f"No work sessions on {label}", style="yellow")

    table = Table(title=f"{title} ({report.count} sessions)", show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Started", style="cyan")
    table.add_column("Finished")
    table.add_column("Length", justify="right")

    for index, session in enumerate(report.sessions, start=1):
        table.add_row(
            str(index),
            session.start_time.strftime("%H:%M"),
            session.end_time.strftime("%H:%M"),
            format_duration(session.duration),
        )

    table.add_section()
    table.add_row("", "", "[bold]Total[/bold]", f"[bold]{format_duration(report.total_duration)}[/bold]")
    return table


def render_history(reports: list[DayReport]) -> RenderableType:
    """Per-day summary of the whole log."""
    if not reports:
        return Text("No work sessions recorded yet", style="yellow")

    table = Table(title="Work Session History", show_header=True, header_style="bold magenta")
    table.add_column("Date", style="cyan")
    table.add_column("Sessions", justify="right")
    table.add_column("Focus Time", justify="right")

    for report in reports:
        table.add_row(report.day.isoformat(), str(report.count), format_duration(report.total_duration))
    return table
