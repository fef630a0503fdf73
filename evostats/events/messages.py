"""
Messages carried from the statistics manager to display sinks.

Immutable, so they can be read on the sink's thread while the
simulation thread keeps running.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EpochSnapshot:
    """Chart point for one closed epoch."""
    epoch: int
    alive: float
    plants: float
    avg_energy: float
    avg_lifespan: float
    children: float


@dataclass(frozen=True)
class GenotypeChanged:
    """New text for the dominant genotype display."""
    display: str
    count: int
    epoch: int = 0
