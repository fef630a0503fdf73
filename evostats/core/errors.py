"""
Error kinds raised by the statistics engine.

All are caller errors: the engine raises them at the point the bad event
arrives and leaves its state as it was before the call.
"""


class StatsError(Exception):
    """Base class for statistics engine errors."""


class UnknownGenotype(StatsError):
    """A death referenced a genome with no live animals."""

    def __init__(self, genome):
        self.genome = genome
        super().__init__(f"No live animals carry genome {genome}")


class EmptyHistory(StatsError):
    """Export requested before any epoch was closed."""

    def __init__(self):
        super().__init__("Cannot compute averages: no epoch has been closed yet")


class NonSequentialEpoch(StatsError):
    """An epoch was closed with an index not greater than the previous one."""

    def __init__(self, epoch: int, last_epoch: int):
        self.epoch = epoch
        self.last_epoch = last_epoch
        super().__init__(
            f"Epoch {epoch} closed after epoch {last_epoch}; indices must increase"
        )


class EngineFinalized(StatsError):
    """An event arrived after the engine was finalized."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"'{operation}' called after the run was finalized")
