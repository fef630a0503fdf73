"""
Chart series - Data side of the statistics charts.

Collects the points a chart widget would plot, one bounded series per
statistic, plus the dominant genotype text. Drawing is left to the UI.
"""

from collections import deque
from typing import Dict, List, Tuple

from ..core.constants import CHART_SERIES, CHART_HISTORY
from ..events.messages import EpochSnapshot, GenotypeChanged


class StatsChartSeries:
    """Publisher sink that keeps chart history for the five statistics."""

    def __init__(self, max_history: int = CHART_HISTORY):
        self.series_names = [name for name, _ in CHART_SERIES]
        self.colors: Dict[str, str] = dict(CHART_SERIES)
        self.history = {name: deque(maxlen=max_history) for name in self.series_names}
        self.time_points = deque(maxlen=max_history)
        self.genotype_text = ""
        self.genotype_count = 0

    def __call__(self, message):
        if isinstance(message, EpochSnapshot):
            self.add_epoch(message)
        elif isinstance(message, GenotypeChanged):
            self.genotype_text = message.display
            self.genotype_count = message.count

    def add_epoch(self, snapshot: EpochSnapshot):
        """Append one point to every series."""
        self.time_points.append(snapshot.epoch)
        values = (snapshot.alive, snapshot.plants, snapshot.avg_energy,
                  snapshot.avg_lifespan, snapshot.children)
        for name, value in zip(self.series_names, values):
            self.history[name].append(value)

    def points(self, name: str) -> List[Tuple[int, float]]:
        """(epoch, value) pairs for one series."""
        return list(zip(self.time_points, self.history[name]))

    def latest(self) -> Dict[str, float]:
        return {name: series[-1] for name, series in self.history.items() if series}
