"""
Game log module for the crawler.

Keeps the player-facing messages of a run, newest first.
"""

from pydantic import BaseModel, Field

from crawler.core.constants import LogType

# Oldest entries are dropped past this size.
MAX_LOG_ENTRIES = 200


class LogEntry(BaseModel):
    """A message shown in the log panel."""

    id: int = Field(description="Monotonic identifier, unique within a run.")
    message: str = Field(description="The text of the message.")
    type: LogType = Field(LogType.INFO, description="Category, drives the color.")
    turn: int = Field(0, description="Turn counter when the message was logged.")

    @property
    def colored_message(self) -> str:
        return f"[{self.type.color}]{self.message}[/]"


class GameLog:
    """
    The in-game message log.

    The id counter belongs to the log and restarts when a new game begins.
    """

    def __init__(self, max_entries: int = MAX_LOG_ENTRIES) -> None:
        self.max_entries = max_entries
        self._entries: list[LogEntry] = []
        self._next_id = 1

    def add(self, message: str, log_type: LogType = LogType.INFO, turn: int = 0) -> LogEntry:
        """Prepends a message to the log and returns the new entry."""
        entry = LogEntry(id=self._next_id, message=message, type=log_type, turn=turn)
        self._next_id += 1
        self._entries.insert(0, entry)
        del self._entries[self.max_entries :]
        return entry

    def reset(self) -> None:
        """Forgets every entry and restarts the ids from 1."""
        self._entries.clear()
        self._next_id = 1

    @property
    def entries(self) -> list[LogEntry]:
        return list(self._entries)

    def latest(self, count: int) -> list[LogEntry]:
        return self._entries[:count]

    def __len__(self) -> int:
        return len(self._entries)
