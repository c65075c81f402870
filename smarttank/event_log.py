"""
In-memory event log shown on the dashboard, newest first
"""
import threading
from collections import namedtuple
from datetime import datetime

LogEntry = namedtuple('LogEntry', ['timestamp', 'category', 'message'])


class EventLog:
    """Session-scoped list of human-readable events"""

    def __init__(self, clock=datetime.now):
        self._entries = []
        self._clock = clock
        self._lock = threading.Lock()

    def append(self, message, category=None):
        entry = LogEntry(
            timestamp=self._clock().strftime('%H:%M:%S'),
            category=category or 'event',
            message=message,
        )
        with self._lock:
            self._entries.insert(0, entry)
        return entry

    def clear(self):
        with self._lock:
            self._entries = []

    def entries(self):
        with self._lock:
            return list(self._entries)

    def __len__(self):
        with self._lock:
            return len(self._entries)
