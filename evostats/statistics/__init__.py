"""
Statistics Tracking - Per-epoch population statistics and their history.

Contains:
- StatisticsRecord: One finalized epoch, in export column order
- EpochAccumulator: Resettable epoch sums plus run-long lifespan average
- HistoryLog: Ordered records with an idempotent averages block
"""

from .accumulator import StatisticsRecord, EpochAccumulator
from .history import HistoryLog
