"""
Genotype Population - Live genome counts and the dominant genotype.

Contains:
- Genome: Immutable gene sequence, compared and hashed by value
- GenomeRegistry: Stores each distinct live genome once under a stable id
- GenotypePopulationTracker: Live count per genome plus the dominant pair

The dominant genotype is updated in O(1) on births (only ever upwards)
and recomputed by a full rescan on deaths, since a decrement can demote
the current leader. Ties on the maximum count go to the lexicographically
lowest genome, so the result never depends on dict ordering.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple

from ..core.constants import GENOME_LENGTH
from ..core.errors import UnknownGenotype


@dataclass(frozen=True, order=True)
class Genome:
    """Fixed gene sequence of one animal. Never mutated after creation."""
    genes: Tuple[int, ...]
    _hash: int = field(default=0, init=False, repr=False, compare=False)

    def __post_init__(self):
        genes = tuple(int(g) for g in self.genes)
        object.__setattr__(self, 'genes', genes)
        object.__setattr__(self, '_hash', hash(genes))

    def __hash__(self):
        return self._hash

    def __len__(self):
        return len(self.genes)

    def __str__(self):
        return self.display()

    @classmethod
    def of(cls, genes: Iterable[int]) -> 'Genome':
        return cls(tuple(genes))

    @classmethod
    def zeros(cls, length: int = GENOME_LENGTH) -> 'Genome':
        """All-zero genome, used as the dominant placeholder before any birth."""
        return cls((0,) * length)

    def display(self) -> str:
        """Genotype string shown next to the charts."""
        return ''.join(str(g) for g in self.genes)


class GenomeRegistry:
    """
    Owns the distinct genomes currently alive.

    Each genome is stored once and referred to by an integer id, so the
    population map and the dominant pair hold ids instead of genomes.
    Ids are never reused within a run.
    """

    def __init__(self):
        self._ids: Dict[Genome, int] = {}
        self._genomes: Dict[int, Genome] = {}
        self._next_id = 0

    def intern(self, genome: Genome) -> int:
        """Return the id for genome, registering it if new."""
        gid = self._ids.get(genome)
        if gid is None:
            gid = self._next_id
            self._next_id += 1
            self._ids[genome] = gid
            self._genomes[gid] = genome
        return gid

    def lookup(self, genome: Genome) -> Optional[int]:
        return self._ids.get(genome)

    def genome(self, gid: int) -> Genome:
        return self._genomes[gid]

    def release(self, gid: int):
        """Forget a genome once no live animal carries it."""
        genome = self._genomes.pop(gid)
        del self._ids[genome]

    def __len__(self):
        return len(self._genomes)

    def __contains__(self, genome):
        return genome in self._ids


class GenotypePopulationTracker:
    """Live count of every genome and the current dominant genotype."""

    def __init__(self, genome_length: int = GENOME_LENGTH,
                 registry: GenomeRegistry = None):
        self.registry = registry if registry is not None else GenomeRegistry()
        self.sentinel = Genome.zeros(genome_length)
        self._counts: Dict[int, int] = {}
        self._dominant_id: Optional[int] = None
        self._dominant_count = 0

    def on_birth(self, genome: Genome) -> bool:
        """
        Count one more live animal with this genome.

        Returns True if the dominant pair was updated. A birth never
        lowers the recorded dominant count.
        """
        gid = self.registry.intern(genome)
        count = self._counts.get(gid, 0) + 1
        self._counts[gid] = count

        if count > self._dominant_count:
            self._dominant_id = gid
            self._dominant_count = count
            return True
        return False

    def on_death(self, genome: Genome) -> bool:
        """
        Count one fewer live animal with this genome, then rescan.

        Raises:
            UnknownGenotype: no live animal carries genome

        Returns True if the dominant genome or its count changed.
        """
        gid = self.registry.lookup(genome)
        if gid is None or gid not in self._counts:
            raise UnknownGenotype(genome)

        count = self._counts[gid] - 1
        if count == 0:
            del self._counts[gid]
            self.registry.release(gid)
        else:
            self._counts[gid] = count

        previous = (self._dominant_id, self._dominant_count)
        self._rescan()
        return (self._dominant_id, self._dominant_count) != previous

    def _rescan(self):
        """Recompute the exact dominant pair over the whole population."""
        best_id = None
        best_count = 0
        best_genome = None
        for gid, count in self._counts.items():
            genome = self.registry.genome(gid)
            if count > best_count or (count == best_count and genome < best_genome):
                best_id, best_count, best_genome = gid, count, genome
        self._dominant_id = best_id
        self._dominant_count = best_count

    def dominant(self) -> Tuple[Genome, int]:
        """Current (genome, count); the all-zero sentinel with 0 when extinct."""
        if self._dominant_id is None:
            return self.sentinel, 0
        return self.registry.genome(self._dominant_id), self._dominant_count

    def count(self, genome: Genome) -> int:
        gid = self.registry.lookup(genome)
        return self._counts.get(gid, 0) if gid is not None else 0

    def distinct(self) -> int:
        return len(self._counts)

    def total(self) -> int:
        return sum(self._counts.values())

    def genomes(self) -> Dict[Genome, int]:
        """Snapshot of the population as genome -> live count."""
        return {self.registry.genome(gid): count for gid, count in self._counts.items()}
