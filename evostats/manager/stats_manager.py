"""
StatsManager - Statistics orchestration for one simulation run.

Receives the simulation loop's per-animal events, keeps the genotype
population and epoch sums up to date, closes epochs into the history,
and hands snapshots to the display sinks and datasets to the writer.

Phases:
    IDLE -> EPOCH_OPEN -> EPOCH_CLOSED -> EPOCH_OPEN -> ... -> FINALIZED

The manager is driven from a single simulation thread. Only the
publisher crosses threads, and only with immutable messages.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple

from ..core.constants import StatsConfig
from ..core.errors import EngineFinalized, NonSequentialEpoch, UnknownGenotype
from ..evolution.genotypes import Genome, GenotypePopulationTracker
from ..statistics.accumulator import EpochAccumulator, StatisticsRecord
from ..statistics.history import HistoryLog
from ..events.logger import EventLogger, event_log
from ..events.console_log import console_log
from ..persistence.stats_file import StatsFileWriter
from ..visualization.series import StatsChartSeries
from .publisher import SnapshotPublisher
from ..events.messages import EpochSnapshot, GenotypeChanged


class Phase(Enum):
    IDLE = 'idle'
    EPOCH_OPEN = 'epoch_open'
    EPOCH_CLOSED = 'epoch_closed'
    FINALIZED = 'finalized'


@dataclass
class AnimalView:
    """The animal attributes the statistics read."""
    genome: Genome
    energy: float = 0.0
    children_count: int = 0
    birth_epoch: int = 0


Writer = Callable[[List[List[str]]], bool]


class StatsManager:
    """Event API for the simulation loop; owns all run statistics."""

    def __init__(self, config: StatsConfig = None, writer: Writer = None,
                 publisher: SnapshotPublisher = None,
                 logger: EventLogger = None, chart: StatsChartSeries = None):
        """
        Args:
            config: Run switches (default: StatsConfig.from_env())
            writer: Called with the export rows; returns True on success
                (default: StatsFileWriter named after config.map_name)
            publisher: Hand-off to display sinks. Unless config.synchronous,
                the default one runs a worker thread that finalize() or
                close() stops
            logger: JSONL event logger (default: the shared event_log())
            chart: Chart series sink subscribed to the publisher
        """
        self.config = config or StatsConfig.from_env()
        self.genotypes = GenotypePopulationTracker(self.config.genome_length)
        self.accumulator = EpochAccumulator(self.config.lifetime_samples_start)
        self.history = HistoryLog(legacy_divisor=self.config.legacy_divisor)

        self.writer = writer if writer is not None else StatsFileWriter(self.config.map_name)
        self.publisher = publisher or SnapshotPublisher(synchronous=self.config.synchronous)
        self.logger = logger or event_log()
        self.chart = chart or StatsChartSeries()
        self.publisher.subscribe(self.chart)

        self.phase = Phase.IDLE
        self.last_epoch: Optional[int] = None

    # =========================================================================
    # PHASES
    # =========================================================================

    @property
    def current_epoch(self) -> int:
        """Index of the epoch being accumulated."""
        return 0 if self.last_epoch is None else self.last_epoch + 1

    def _check_live(self, operation: str):
        if self.phase == Phase.FINALIZED:
            raise EngineFinalized(operation)

    def _open(self, operation: str):
        self._check_live(operation)
        self.phase = Phase.EPOCH_OPEN

    # =========================================================================
    # SIMULATION EVENTS
    # =========================================================================

    def on_animal_birth(self, animal):
        """Count a newborn's genome; publish if the dominant changed."""
        self._open('on_animal_birth')
        step = self.current_epoch
        changed = self.genotypes.on_birth(animal.genome)
        self.logger.log_birth(step, animal.genome.display(),
                              self.genotypes.count(animal.genome))
        console_log().log(f"[Birth] {animal.genome.display()}", step)
        if changed:
            self._publish_dominant(step)

    def on_animal_alive(self, animal):
        """Read an animal that is alive this epoch."""
        self._open('on_animal_alive')
        self.accumulator.record_alive(animal.energy, animal.children_count)

    def on_animal_death(self, animal, epoch: int):
        """
        Record the lifespan and remove the genome from the population.

        A rejected death leaves the phase and every count as they were.
        A death reported for an epoch that is already closed is logged and
        still counted in the open epoch.

        Raises:
            ValueError: epoch is before the animal's birth epoch
            UnknownGenotype: no live animal carries the genome
        """
        self._check_live('on_animal_death')
        age = epoch - animal.birth_epoch
        if age < 0:
            raise ValueError(f"Animal born at epoch {animal.birth_epoch} "
                             f"cannot die at epoch {epoch}")
        if self.genotypes.count(animal.genome) == 0:
            console_log().log(f"[Error] Death of unknown genotype "
                              f"{animal.genome.display()}", epoch, force=True)
            raise UnknownGenotype(animal.genome)
        if self.last_epoch is not None and epoch <= self.last_epoch:
            console_log().log(f"[Error] Death at epoch {epoch} reported after "
                              f"epoch {self.last_epoch} closed", epoch, force=True)

        self.phase = Phase.EPOCH_OPEN
        self.accumulator.record_death(age)
        self.genotypes.on_death(animal.genome)
        self.logger.log_death(epoch, animal.genome.display(), age,
                              self.genotypes.count(animal.genome))
        console_log().log(f"[Death] {animal.genome.display()} aged {age}", epoch)
        # A death may or may not move the dominant; the display is refreshed either way
        self._publish_dominant(epoch)

    def add_plant_count(self, delta: int):
        """Apply a change in the number of plants on the map."""
        self._open('add_plant_count')
        self.accumulator.record_plant_delta(delta)

    def _publish_dominant(self, step: int):
        genome, count = self.genotypes.dominant()
        display = genome.display()
        self.publisher.publish(GenotypeChanged(display, count, step))
        self.logger.log_dominant(step, display, count)
        console_log().log(f"[Genotype] Dominant {display} x{count}", step)

    # =========================================================================
    # EPOCH BOUNDARY
    # =========================================================================

    def close_epoch(self, epoch: int) -> StatisticsRecord:
        """
        Finalize the epoch into the history and publish its chart point.

        Raises:
            NonSequentialEpoch: epoch is not greater than the last closed one
        """
        if self.phase == Phase.FINALIZED:
            raise EngineFinalized('close_epoch')
        if self.last_epoch is not None and epoch <= self.last_epoch:
            console_log().log(f"[Error] Epoch {epoch} closed after {self.last_epoch}",
                              epoch, force=True)
            raise NonSequentialEpoch(epoch, self.last_epoch)

        record = self.accumulator.finalize_epoch(epoch)
        self.history.append(record)
        self.last_epoch = epoch
        self.phase = Phase.EPOCH_CLOSED

        self.publisher.publish(EpochSnapshot(*record.chart_point()))
        self.logger.log_epoch(epoch, record.to_dict())
        console_log().log(
            f"[Stats] Epoch {epoch}: {record.alive:.0f} animals, "
            f"{record.plants:.0f} plants, energy {record.avg_energy:.2f}, "
            f"lifespan {record.avg_lifespan:.2f}, children {record.children:.0f}",
            epoch
        )
        return record

    # =========================================================================
    # EXPORT
    # =========================================================================

    def export(self) -> bool:
        """
        Compute the averages block and hand the dataset to the writer.

        The dataset is complete in memory before the writer runs; a failed
        write is reported and leaves the history untouched.

        Raises:
            EmptyHistory: no epoch has been closed yet

        Returns:
            True if the writer stored the dataset
        """
        rows = self.history.export_with_averages()
        try:
            written = bool(self.writer(rows))
        except OSError as e:
            console_log().log(f"[Export] Writer failed: {e}", force=True)
            written = False

        self.logger.log_export(self.current_epoch, len(rows), rows[-1], written)
        self.logger.flush()
        return written

    def finalize(self) -> bool:
        """Export (if anything was recorded), drain the sinks and close the run."""
        if self.phase == Phase.FINALIZED:
            return False
        written = False
        if len(self.history):
            written = self.export()
        else:
            console_log().log("[Export] Nothing to export: no epoch was closed")
        self.close()
        return written

    def close(self):
        """
        Drain the sinks, stop the publisher worker and close the run.

        No export is made. The worker is a daemon thread, so a manager that
        is dropped without close() or finalize() does not block interpreter
        exit, but its thread lives until then.
        """
        if self.phase == Phase.FINALIZED:
            return
        self.publisher.flush()
        self.publisher.shutdown()
        self.logger.flush()
        self.phase = Phase.FINALIZED

    # =========================================================================
    # QUERIES
    # =========================================================================

    def dominant_genotype(self) -> Tuple[str, int]:
        """(display string, live count) of the dominant genome."""
        genome, count = self.genotypes.dominant()
        return genome.display(), count

    def dominant_members(self, animals: Iterable) -> List:
        """Animals carrying the dominant genome, e.g. for highlighting."""
        genome, count = self.genotypes.dominant()
        if count == 0:
            return []
        return [a for a in animals if a.genome == genome]

    def get_statistics(self) -> dict:
        """Current run statistics."""
        display, count = self.dominant_genotype()
        return {
            'phase': self.phase.value,
            'epoch': self.current_epoch,
            'epochs_recorded': len(self.history),
            'alive': float(self.accumulator.alive_count),
            'plants': float(self.accumulator.plant_count),
            'avg_lifespan': float(self.accumulator.average_lifespan()),
            'distinct_genotypes': self.genotypes.distinct(),
            'living_animals': self.genotypes.total(),
            'dominant_genotype': display,
            'dominant_count': count,
        }
