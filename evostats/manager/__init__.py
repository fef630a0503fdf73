"""Statistics orchestration and snapshot hand-off."""

from .publisher import SnapshotPublisher
from ..events.messages import EpochSnapshot, GenotypeChanged
from .stats_manager import StatsManager, AnimalView, Phase
