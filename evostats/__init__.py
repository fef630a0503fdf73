"""
evostats - Population statistics and dominant genotype tracking for
evolution simulations.

Usage:
    manager = StatsManager(StatsConfig(map_name="Jungle"))
    manager.on_animal_birth(animal)      # every newborn
    manager.on_animal_alive(animal)      # every live animal, every epoch
    manager.on_animal_death(animal, epoch)
    manager.add_plant_count(delta)
    manager.close_epoch(epoch)           # at the epoch boundary
    manager.export()                     # on demand / end of run

Package structure:
- core/: Constants, configuration, errors, numeric helpers
- evolution/: Genome values, genome registry, genotype population
- statistics/: Epoch accumulator, statistics records, history log
- manager/: StatsManager orchestration and snapshot publisher
- events/: JSONL event log, console verbosity, sink messages
- persistence/: Stats file writer
- visualization/: Chart series sink
"""

__version__ = "1.0.0"

from .core.constants import StatsConfig
from .core.errors import (
    StatsError, UnknownGenotype, EmptyHistory, NonSequentialEpoch,
    EngineFinalized
)
from .evolution.genotypes import Genome, GenomeRegistry, GenotypePopulationTracker
from .statistics import StatisticsRecord, EpochAccumulator, HistoryLog
from .manager import (
    StatsManager, AnimalView, Phase, SnapshotPublisher,
    EpochSnapshot, GenotypeChanged
)
from .persistence import StatsFileWriter
from .visualization import StatsChartSeries
