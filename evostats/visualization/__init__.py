"""
Visualization data - chart series fed by the snapshot publisher.
"""

from .series import StatsChartSeries
