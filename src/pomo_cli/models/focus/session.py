"""Completed work session record."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta


@dataclass(frozen=True)
class Session:
    """A finished work session as stored in the history log."""

    start_time: datetime
    end_time: datetime
    duration: timedelta  # nominal configured length

    def __post_init__(self):
        if self.end_time <= self.start_time:
            raise ValueError("Session end_time must be after start_time")
        if self.duration <= timedelta(0):
            raise ValueError("Session duration must be positive")

    @property
    def day(self) -> date:
        """Calendar date the session started on."""
        return self.start_time.date()

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary."""
        return {
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "duration_seconds": self.duration.total_seconds(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Session":
        """Create from dictionary."""
        return cls(
            start_time=datetime.fromisoformat(data["start_time"]),
            end_time=datetime.fromisoformat(data["end_time"]),
            duration=timedelta(seconds=float(data["duration_seconds"])),
        )
