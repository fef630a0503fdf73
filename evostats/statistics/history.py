"""
History Log - Ordered per-epoch statistics with an averages block.

The export dataset is the header row, one row per closed epoch and,
after an export, one sentinel row of "Average:" markers followed by the
column averages. At most one such block exists; it is rebuilt on every
export and dropped as soon as a newer epoch is appended.
"""

from typing import List, Optional

import numpy as np

from ..core.constants import STATS_HEADER, AVERAGE_MARKER, N_COLUMNS
from ..core.errors import EmptyHistory
from ..core.utils import format_stat
from .accumulator import StatisticsRecord


class HistoryLog:
    """Append-only record of every finalized epoch."""

    def __init__(self, legacy_divisor: bool = False):
        """
        Args:
            legacy_divisor: Divide column sums by the record count plus the
                header row, matching files written by older runs. Off by
                default, which divides by the record count.
        """
        self.header: List[str] = list(STATS_HEADER)
        self.legacy_divisor = legacy_divisor
        self._records: List[StatisticsRecord] = []
        self._averages: Optional[List[str]] = None

    def append(self, record: StatisticsRecord):
        self._records.append(record)
        self._averages = None

    def __len__(self):
        return len(self._records)

    def records(self) -> List[StatisticsRecord]:
        return list(self._records)

    def column(self, name: str) -> np.ndarray:
        """Numeric series for one header column."""
        idx = self.header.index(name)
        return np.array([r.values()[idx] for r in self._records], dtype=np.float32)

    def divisor(self) -> int:
        n = len(self._records)
        return n + 1 if self.legacy_divisor else n

    def compute_averages(self) -> np.ndarray:
        """
        Column averages over the numeric records.

        Raises:
            EmptyHistory: no epoch has been appended yet
        """
        if not self._records:
            raise EmptyHistory()
        table = np.array([r.values() for r in self._records], dtype=np.float32)
        sums = table.sum(axis=0, dtype=np.float32)
        return sums / np.float32(self.divisor())

    def export_with_averages(self) -> List[List[str]]:
        """
        Rebuild the averages block and return the full dataset.

        The dataset is built entirely in memory; callers write it out
        afterwards, so a failed write leaves the log intact.
        """
        averages = self.compute_averages()
        self._averages = [format_stat(v) for v in averages]
        return self.rows()

    def rows(self) -> List[List[str]]:
        """Current dataset without recomputing averages."""
        rows = [list(self.header)]
        rows.extend(r.as_row() for r in self._records)
        if self._averages is not None:
            rows.append([AVERAGE_MARKER] * N_COLUMNS)
            rows.append(list(self._averages))
        return rows
