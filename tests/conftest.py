"""Shared fixtures for the statistics engine tests."""

import pytest

from evostats import Genome, StatsConfig, StatsManager, SnapshotPublisher
from evostats.events.logger import EventLogger
from evostats.events.console_log import ConsoleLogger, Verbosity


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path):
    """Point the shared event log at a temp file and quieten the console."""
    EventLogger.reset()
    ConsoleLogger.reset()
    EventLogger._instance = EventLogger(filepath=str(tmp_path / "events.jsonl"))
    ConsoleLogger.get().set_verbosity(Verbosity.MINIMAL)
    yield EventLogger._instance
    EventLogger.reset()
    ConsoleLogger.reset()


class CapturingWriter:
    """Writer collaborator that keeps every dataset it is handed."""

    def __init__(self):
        self.saved = []

    def __call__(self, rows):
        self.saved.append(rows)
        return True


class RecordingSink:
    """Publisher sink that keeps every message."""

    def __init__(self):
        self.messages = []

    def __call__(self, message):
        self.messages.append(message)

    def of_type(self, cls):
        return [m for m in self.messages if isinstance(m, cls)]


def genome(*genes):
    """Genome padded with zeros to the default 32 genes."""
    return Genome(tuple(genes) + (0,) * (32 - len(genes)))


@pytest.fixture
def writer():
    return CapturingWriter()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def manager(writer, sink):
    """Manager delivering snapshots inline, with a capturing writer."""
    publisher = SnapshotPublisher(synchronous=True)
    publisher.subscribe(sink)
    return StatsManager(StatsConfig(synchronous=True), writer=writer,
                        publisher=publisher)
