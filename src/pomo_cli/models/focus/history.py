"""Work session history with SQLite storage."""

import sqlite3
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from pathlib import Path

from pomo_cli.utils.logger import get_logger

from .errors import PersistenceError
from .session import Session


@dataclass(frozen=True)
class DayReport:
    """Work sessions that started on one calendar day."""

    day: date
    sessions: list[Session] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.sessions)

    @property
    def total_duration(self) -> timedelta:
        return sum((s.duration for s in self.sessions), timedelta(0))


class SessionStore:
    """Append-only log of completed work sessions.

    The database file is the only source of truth: every call opens it,
    so sessions appended by an earlier process are always visible.
    """

    def __init__(self, db_path: Path | None = None):
        """Initialize the store. The file is created on first append."""
        if db_path is None:
            from platformdirs import user_data_dir

            db_path = Path(user_data_dir("pomo-cli")) / "focus_history.db"

        self.db_path = Path(db_path)
        self._logger = get_logger()

    def load(self) -> list[Session]:
        """Return every stored session, oldest first."""
        if not self.db_path.exists():
            return []
        return self._select("SELECT * FROM focus_sessions ORDER BY seq ASC")

    def append(self, session: Session) -> None:
        """Add a session to the end of the log."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            with sqlite3.connect(self.db_path) as conn:
                self._init_schema(conn)
                conn.execute(
                    """
                    INSERT INTO focus_sessions (
                        start_time, end_time, duration_seconds, created_at
                    ) VALUES (?, ?, ?, ?)
                    """,
                    (
                        session.start_time.isoformat(),
                        session.end_time.isoformat(),
                        session.duration.total_seconds(),
                        datetime.now().isoformat(),
                    ),
                )
                conn.commit()
        except (sqlite3.Error, OSError) as e:
            self._logger.error("Failed to save session to %s: %s", self.db_path, e)
            raise PersistenceError(f"Failed to save session: {e}") from e

        self._logger.info("Saved work session started at %s", session.start_time.isoformat())

    def query_by_date(self, day: date) -> list[Session]:
        """Return the sessions that started on ``day``, in log order."""
        if not self.db_path.exists():
            return []
        # ISO timestamps always begin with the local calendar date
        return self._select(
            """
            SELECT * FROM focus_sessions
            WHERE substr(start_time, 1, 10) = ?
            ORDER BY seq ASC
            """,
            (day.isoformat(),),
        )

    def report_for(self, day: date) -> DayReport:
        """Build the report for a single day."""
        return DayReport(day=day, sessions=self.query_by_date(day))

    def _select(self, sql: str, params: tuple = ()) -> list[Session]:
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.row_factory = sqlite3.Row
                self._init_schema(conn)
                rows = conn.execute(sql, params).fetchall()
            return [Session.from_dict(dict(row)) for row in rows]
        except (sqlite3.Error, OSError, ValueError, KeyError) as e:
            self._logger.error("Failed to read session log %s: %s", self.db_path, e)
            raise PersistenceError(f"Failed to read session log: {e}") from e

    @staticmethod
    def _init_schema(conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS focus_sessions (
                seq INTEGER PRIMARY KEY AUTOINCREMENT,
                start_time TEXT NOT NULL,
                end_time TEXT NOT NULL,
                duration_seconds REAL NOT NULL,
                created_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_focus_sessions_start
            ON focus_sessions(start_time)
            """
        )


def group_by_day(sessions: Iterable[Session]) -> list[DayReport]:
    """Group sessions into per-day reports ordered by day."""
    days: dict[date, list[Session]] = {}
    for session in sessions:
        days.setdefault(session.day, []).append(session)
    return [DayReport(day=day, sessions=days[day]) for day in sorted(days)]
