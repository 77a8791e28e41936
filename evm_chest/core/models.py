"""
Data structures passed between the helpers and the test code
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class EventLogEntry:
    """A decoded event log: event name plus named arguments"""
    event: str
    args: Dict[str, Any] = field(default_factory=dict)
    log_index: Optional[int] = None

    def __getitem__(self, key: str) -> Any:
        return getattr(self, key)

    def get(self, key: str, default: Any = None) -> Any:
        return getattr(self, key, default)


@dataclass
class TransactionOutcome:
    """Decoded logs of a mined transaction, with the raw receipt kept around"""
    logs: List[EventLogEntry] = field(default_factory=list)
    receipt: Any = None

    def __getitem__(self, key: str) -> Any:
        return getattr(self, key)

    def get(self, key: str, default: Any = None) -> Any:
        return getattr(self, key, default)

    def events_named(self, event_name: str) -> List[EventLogEntry]:
        """All entries for one event, in log order"""
        return [entry for entry in self.logs if entry.event == event_name]
