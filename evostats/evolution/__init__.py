"""Genome values and live genotype population tracking."""

from .genotypes import Genome, GenomeRegistry, GenotypePopulationTracker
