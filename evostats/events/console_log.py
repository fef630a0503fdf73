"""
Console Logger - Configurable verbosity for terminal output.

Verbosity levels:
- MINIMAL: Only errors, exports and publisher lifecycle
- GENOTYPE: Dominant genotype changes + minimal
- EPOCH: Per-epoch statistics lines + genotype
- FULL: Everything (every birth and death)
"""

from enum import IntEnum
from typing import Optional
from collections import defaultdict


class Verbosity(IntEnum):
    MINIMAL = 0   # Just the essentials
    GENOTYPE = 1  # Dominant genotype changes
    EPOCH = 2     # Per-epoch summaries
    FULL = 3      # Everything


class ConsoleLogger:
    """
    Manages console output verbosity.

    Filters print statements based on current verbosity level.
    Provides summaries for suppressed events.
    """

    _instance: Optional['ConsoleLogger'] = None

    def __init__(self):
        self.verbosity = Verbosity.EPOCH
        self.enabled = True

        # Event counting for summaries
        self.event_counts = defaultdict(int)
        self.last_summary_step = 0
        self.summary_interval = 200  # Epochs between summaries

        self.categories = {
            'essential': ['[Export]', '[Publisher]', '[Error]'],
            'genotype': ['[Genotype]'],
            'epoch': ['[Stats]'],
        }

        self.verbosity_names = {
            Verbosity.MINIMAL: "MINIMAL (essentials only)",
            Verbosity.GENOTYPE: "GENOTYPE CHANGES",
            Verbosity.EPOCH: "EPOCH SUMMARIES",
            Verbosity.FULL: "FULL (everything)",
        }

    @classmethod
    def get(cls) -> 'ConsoleLogger':
        if cls._instance is None:
            cls._instance = ConsoleLogger()
        return cls._instance

    @classmethod
    def reset(cls):
        """Reset singleton (useful for testing)."""
        cls._instance = None

    def cycle_verbosity(self):
        """Cycle to next verbosity level."""
        self.verbosity = Verbosity((self.verbosity + 1) % 4)
        return self.verbosity_names[self.verbosity]

    def set_verbosity(self, level: Verbosity):
        """Set verbosity level directly."""
        self.verbosity = level

    def should_print(self, message: str) -> bool:
        """Determine if message should be printed at current verbosity."""
        if not self.enabled:
            return False

        for prefix in self.categories['essential']:
            if message.startswith(prefix):
                return True

        if self.verbosity == Verbosity.MINIMAL:
            return False

        for prefix in self.categories['genotype']:
            if message.startswith(prefix):
                return self.verbosity >= Verbosity.GENOTYPE

        for prefix in self.categories['epoch']:
            if message.startswith(prefix):
                return self.verbosity >= Verbosity.EPOCH

        # Any other bracketed category (births, deaths) is FULL only
        if message.startswith('['):
            return self.verbosity >= Verbosity.FULL

        return True

    def count_event(self, message: str):
        """Count suppressed event for later summary."""
        if message.startswith('['):
            end = message.find(']')
            if end > 0:
                category = message[1:end]
                self.event_counts[category] += 1

    def get_summary(self, step: int) -> Optional[str]:
        """Get summary of suppressed events if interval passed."""
        if step - self.last_summary_step < self.summary_interval:
            return None

        if not self.event_counts:
            return None

        self.last_summary_step = step

        parts = []
        for category, count in sorted(self.event_counts.items(), key=lambda x: -x[1]):
            if count > 0:
                parts.append(f"{category}:{count}")

        self.event_counts.clear()

        if parts:
            return f"[Summary] {', '.join(parts[:8])}"
        return None

    def log(self, message: str, step: int = 0, force: bool = False) -> bool:
        """
        Log a message respecting verbosity.

        Args:
            message: The message to log
            step: Current epoch
            force: If True, always print regardless of verbosity

        Returns True if message was printed.
        """
        if force or self.should_print(message):
            print(message)
            printed = True
        else:
            self.count_event(message)
            printed = False

        summary = self.get_summary(step)
        if summary:
            print(summary)
        return printed


# Global instance
def console_log() -> ConsoleLogger:
    """Get singleton ConsoleLogger."""
    return ConsoleLogger.get()
