"""
Event Logger for the statistics engine.

Logs statistics events to a JSONL file for easy parsing.
Each line is a self-contained JSON object.
"""

import json
import os
import time
from typing import Optional

from ..core.constants import EVENT_LOG_FILE, ensure_dirs


class EventLogger:
    """
    Logs statistics events to a JSONL file for easy parsing.
    Each line is a self-contained JSON object.

    Event types:
    - birth: Genome count incremented
    - death: Genome count decremented
    - dominant: Dominant genotype changed
    - epoch: Epoch record finalized
    - export: Averages computed and handed to the writer
    """

    _instance: Optional['EventLogger'] = None

    def __init__(self, filepath: str = None):
        """
        Initialize event logger.

        Args:
            filepath: Path to JSONL log file (default: EVENT_LOG_FILE from constants)
        """
        self.filepath = filepath or EVENT_LOG_FILE
        self.enabled = True
        self.buffer = []
        self.buffer_size = 10  # Flush every N events

    @classmethod
    def get(cls) -> 'EventLogger':
        """Get singleton instance."""
        if cls._instance is None:
            cls._instance = EventLogger()
        return cls._instance

    @classmethod
    def reset(cls):
        """Reset singleton (useful for testing)."""
        cls._instance = None

    def log(self, event_type: str, step: int = 0, **data):
        """
        Log an event.

        Args:
            event_type: Type of event (e.g., 'birth', 'death', 'epoch')
            step: Epoch when event occurred
            **data: Additional event data
        """
        if not self.enabled:
            return

        event = {
            'type': event_type,
            'step': step,
            'time': time.strftime('%Y-%m-%d %H:%M:%S'),
            **data
        }

        self.buffer.append(event)

        if len(self.buffer) >= self.buffer_size:
            self.flush()

    def flush(self):
        """Write buffered events to file."""
        if not self.buffer:
            return

        try:
            ensure_dirs(os.path.dirname(self.filepath))
            with open(self.filepath, 'a') as f:
                for event in self.buffer:
                    f.write(json.dumps(event) + '\n')
        except OSError as e:
            print(f"[EventLog] Write failed, {len(self.buffer)} events dropped: {e}")
        # Unwritten events are not retried, so the buffer stays bounded
        self.buffer.clear()

    # === Convenience methods for specific event types ===

    def log_birth(self, step: int, genotype: str, count: int):
        """Log a birth with the genome's new live count."""
        self.log('birth', step, genotype=genotype, count=count)

    def log_death(self, step: int, genotype: str, age: int, count: int):
        """Log a death with the genome's remaining live count."""
        self.log('death', step, genotype=genotype, age=age, count=count)

    def log_dominant(self, step: int, genotype: str, count: int):
        """Log a change of dominant genotype."""
        self.log('dominant', step, genotype=genotype, count=count)

    def log_epoch(self, step: int, record: dict):
        """Log a finalized epoch record."""
        self.log('epoch', step, **record)

    def log_export(self, step: int, rows: int, averages: list, written: bool):
        """Log an export of the history with its averages."""
        self.log('export', step, rows=rows, averages=averages, written=written)


# Global accessor function
def event_log() -> EventLogger:
    """Get the singleton EventLogger instance."""
    return EventLogger.get()
