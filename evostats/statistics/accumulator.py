"""
Epoch Accumulator - Per-epoch sums and run-long lifespan average.

Alive count, energy and children are summed over the animals alive in
one epoch and reset when the epoch is finalized. Lifespan is averaged
over every death since the start of the run and plant count follows the
deltas reported by the world; neither is reset.

Sums are kept as 32-bit floats, the width exported files are written at.
"""

from dataclasses import dataclass, asdict
from typing import List, Tuple

import numpy as np

from ..core.utils import safe_div, format_stat


@dataclass(frozen=True)
class StatisticsRecord:
    """Statistics of one finalized epoch, in export column order."""
    alive: float
    plants: float
    avg_energy: float
    avg_lifespan: float
    children: float
    epoch: int = 0

    def values(self) -> Tuple[float, float, float, float, float]:
        return (self.alive, self.plants, self.avg_energy,
                self.avg_lifespan, self.children)

    def as_row(self) -> List[str]:
        """Five formatted cells for the export dataset."""
        return [format_stat(v) for v in self.values()]

    def chart_point(self) -> Tuple[int, float, float, float, float, float]:
        """(epoch, alive, plants, energy, lifespan, children) for the charts."""
        return (self.epoch,) + self.values()

    def to_dict(self) -> dict:
        return asdict(self)


class EpochAccumulator:
    """Running sums for the epoch in progress."""

    def __init__(self, lifetime_samples_start: int = 1):
        # Reset every epoch
        self.alive_count = np.float32(0)
        self.energy_sum = np.float32(0)
        self.children_sum = np.float32(0)

        # Whole run
        self.lifetime_sum = np.float32(0)
        self.lifetime_samples = np.float32(lifetime_samples_start)
        self.plant_count = np.float32(0)

    def record_alive(self, energy: float, children_count: int):
        """Add one animal alive this epoch."""
        self.alive_count += np.float32(1)
        self.energy_sum += np.float32(energy)
        self.children_sum += np.float32(children_count)

    def record_death(self, age_at_death: int):
        """Add one lifespan sample. Never reset."""
        if age_at_death < 0:
            raise ValueError(f"Age at death must be non-negative, got {age_at_death}")
        self.lifetime_sum += np.float32(age_at_death)
        self.lifetime_samples += np.float32(1)

    def record_plant_delta(self, delta: int):
        """Apply a change in plant count (either sign)."""
        self.plant_count += np.float32(delta)

    def average_energy(self) -> np.float32:
        return safe_div(self.energy_sum, self.alive_count)

    def average_lifespan(self) -> np.float32:
        return safe_div(self.lifetime_sum, self.lifetime_samples)

    def snapshot(self, epoch: int = 0) -> StatisticsRecord:
        """Record for the current sums without resetting anything."""
        return StatisticsRecord(
            alive=float(self.alive_count),
            plants=float(self.plant_count),
            avg_energy=float(self.average_energy()),
            avg_lifespan=float(self.average_lifespan()),
            children=float(self.children_sum),
            epoch=epoch,
        )

    def reset_epoch(self):
        """Clear the per-epoch sums; lifetime and plants carry over."""
        self.alive_count = np.float32(0)
        self.energy_sum = np.float32(0)
        self.children_sum = np.float32(0)

    def finalize_epoch(self, epoch: int = 0) -> StatisticsRecord:
        """Snapshot the epoch, then reset the per-epoch sums."""
        record = self.snapshot(epoch)
        self.reset_epoch()
        return record
