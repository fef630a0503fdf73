"""Core constants, errors and numeric helpers."""

from .constants import (
    GENOME_LENGTH, STATS_HEADER, AVERAGE_MARKER, CHART_SERIES,
    LAUNCH_PARAMS, StatsConfig
)
from .errors import (
    StatsError, UnknownGenotype, EmptyHistory, NonSequentialEpoch,
    EngineFinalized
)
from .utils import safe_div, format_stat
