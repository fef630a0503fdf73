"""
Stats File - Writes exported statistics datasets to disk.

One file per run, named after the map and the run's start time:
    <map name>-Stats-<unix seconds>.csv

Cells are ';'-separated and unquoted. The whole dataset is rewritten on
every save, so a later save (with a newer averages block) replaces the
earlier one.
"""

import csv
import os
import time
from typing import List

from ..core.constants import STATS_DIR, CSV_SEPARATOR, CSV_LINE_END, ensure_dirs
from ..events.console_log import console_log


class StatsFileWriter:
    """Writer collaborator handed the rows produced by an export."""

    def __init__(self, map_name: str = 'World', directory: str = None,
                 filepath: str = None):
        """
        Args:
            map_name: Prefix of the generated file name
            directory: Where to create the file (default: STATS_DIR)
            filepath: Explicit path, overrides map_name/directory
        """
        if filepath is None:
            directory = directory or STATS_DIR
            filename = f"{map_name}-Stats-{int(time.time())}.csv"
            filepath = os.path.join(directory, filename)
        self.filepath = filepath
        self.saves = 0

    def __call__(self, rows: List[List[str]]) -> bool:
        return self.save(rows)

    def save(self, rows: List[List[str]]) -> bool:
        """
        Write rows to the stats file.

        Returns:
            True if successful
        """
        try:
            ensure_dirs(os.path.dirname(self.filepath))
            with open(self.filepath, 'w', newline='') as f:
                writer = csv.writer(f, delimiter=CSV_SEPARATOR,
                                    quoting=csv.QUOTE_NONE, escapechar='\\',
                                    lineterminator=CSV_LINE_END)
                writer.writerows(rows)
        except OSError as e:
            console_log().log(f"[Export] Save failed: {e}")
            return False

        self.saves += 1
        console_log().log(f"[Export] Wrote {len(rows)} rows to {self.filepath}")
        return True


def load_stats_file(filepath: str) -> List[List[str]]:
    """Read a stats file back into rows of strings."""
    with open(filepath, 'r', newline='') as f:
        reader = csv.reader(f, delimiter=CSV_SEPARATOR, quoting=csv.QUOTE_NONE,
                            escapechar='\\')
        return [row for row in reader]
