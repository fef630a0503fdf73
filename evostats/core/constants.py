"""
Core constants for the evolution statistics engine.

Genome shape, export layout, chart names and file locations used
throughout the package. Run-time switches are read from the environment
once at import time (see LAUNCH_PARAMS).
"""

import os
from dataclasses import dataclass

# =============================================================================
# PATHS
# =============================================================================
try:
    SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
    # Go up two levels from core/ to the project directory
    SCRIPT_DIR = os.path.dirname(os.path.dirname(SCRIPT_DIR))
except NameError:
    SCRIPT_DIR = os.getcwd()

DATA_DIR = os.environ.get('EVOSTATS_DATA_DIR', os.path.join(SCRIPT_DIR, 'data'))
STATS_DIR = os.path.join(DATA_DIR, 'stats')
EVENT_LOG_FILE = os.path.join(DATA_DIR, 'stats_events.jsonl')


def ensure_dirs(*paths):
    """Create the data directories (or the given ones) if they don't exist."""
    for path in paths or (DATA_DIR, STATS_DIR):
        if path:
            os.makedirs(path, exist_ok=True)


# =============================================================================
# GENOME
# =============================================================================
GENOME_LENGTH = 32      # Genes per genome in the default world


# =============================================================================
# EXPORT LAYOUT
# =============================================================================
STATS_HEADER = (
    "Animals No.",
    "Number of plants",
    "Average Energy",
    "Average Lifespan",
    "Number Of Children",
)
N_COLUMNS = len(STATS_HEADER)
AVERAGE_MARKER = "Average:"
CSV_SEPARATOR = ';'
CSV_LINE_END = '\n'


# =============================================================================
# CHARTS
# =============================================================================
# Series name -> line colour, in column order
CHART_SERIES = (
    ("Animals No.", "#ffbe0b"),
    ("Number Of Plants", "#fb5607"),
    ("Average Energy", "#ff006e"),
    ("Average Lifespan", "#8338ec"),
    ("Number Of Children", "#3a86ff"),
)
CHART_HISTORY = 5000    # Points kept per series


# =============================================================================
# LAUNCH PARAMETERS
# =============================================================================
LAUNCH_PARAMS = {
    'genome_length': int(os.environ.get('EVOSTATS_GENOME_LENGTH', str(GENOME_LENGTH))),
    'lifetime_samples_start': int(os.environ.get('EVOSTATS_LIFETIME_SAMPLES_START', '1')),
    'legacy_divisor': os.environ.get('EVOSTATS_LEGACY_DIVISOR', '0') == '1',
    'synchronous': os.environ.get('EVOSTATS_SYNCHRONOUS', '0') == '1',
    'map_name': os.environ.get('EVOSTATS_MAP_NAME', 'World'),
}


@dataclass
class StatsConfig:
    """Run-time switches for one statistics engine."""
    genome_length: int = GENOME_LENGTH
    # Starting at 1 keeps the first lifespan average biased low, as the
    # exported files of older runs are
    lifetime_samples_start: int = 1
    # Divide export averages by rows + header (older files) instead of rows
    legacy_divisor: bool = False
    # Deliver snapshots inline instead of on the publisher thread
    synchronous: bool = False
    map_name: str = 'World'

    @classmethod
    def from_env(cls) -> 'StatsConfig':
        return cls(**LAUNCH_PARAMS)
