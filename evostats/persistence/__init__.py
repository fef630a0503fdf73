"""Export writers for statistics datasets."""

from .stats_file import StatsFileWriter, load_stats_file
