#!/usr/bin/env python3
"""
Tests for the in-memory event log.
"""
from datetime import datetime

from smarttank.event_log import EventLog


def test_newest_first():
    events = EventLog(clock=lambda: datetime(2026, 1, 1, 14, 5, 9))
    events.append('first', 'info')
    events.append('second', 'motor')
    entries = events.entries()
    assert [e.message for e in entries] == ['second', 'first']
    assert entries[0].timestamp == '14:05:09'
    assert entries[0].category == 'motor'


def test_missing_category_defaults_to_event():
    events = EventLog()
    assert events.append('something').category == 'event'


def test_clear():
    events = EventLog()
    events.append('a', 'info')
    events.append('b', 'info')
    events.clear()
    assert events.entries() == []
    assert len(events) == 0
