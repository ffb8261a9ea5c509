"""Tests for notifiers."""
import logging

import pytest

from book_finder.notifier import DESTRUCTIVE, LoggingNotifier, Notification, Notifier, RecordingNotifier


def test_recording_notifier_keeps_order():
    notifier = RecordingNotifier()

    notifier.notify(Notification("One", "first"))
    notifier.notify(Notification("Two", "second", DESTRUCTIVE))

    assert notifier.titles == ["One", "Two"]
    assert notifier.notifications[1].variant == DESTRUCTIVE


def test_logging_notifier_levels(caplog):
    notifier = LoggingNotifier()

    with caplog.at_level(logging.INFO, logger="book_finder.notifier"):
        notifier.notify(Notification("Search completed", "Found 2 books"))
        notifier.notify(Notification("Search failed", "Try again", DESTRUCTIVE))

    assert [r.levelno for r in caplog.records] == [logging.INFO, logging.WARNING]
    assert caplog.records[0].getMessage() == "Search completed: Found 2 books"


def test_notifier_requires_notify():
    """A notifier without notify cannot be created."""
    class Silent(Notifier):
        pass

    with pytest.raises(TypeError):
        Silent()
