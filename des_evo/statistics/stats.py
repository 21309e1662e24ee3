"""
Collection of all statistics recorded during a simulation.
"""

from typing import List, Optional

import pandas as pd

from .data_point import DataPoint
from .timeseries import TimeSeries


class Stats:
    """
    Manages multiple time series keyed by label.

    Adding a data point under an unseen label creates the series on the fly.
    """

    def __init__(self):
        self.all_series: List[TimeSeries] = []

    def add_statistic(self, data_point: DataPoint, label: str):
        """
        Record a data point under ``label``, creating the series if needed.

        Args:
            data_point: Sample to record
            label: Name of the statistic
        """
        series = self.get_series_by_name(label)
        if series is None:
            series = TimeSeries(label)
            self.all_series.append(series)
        series.add_data_point(data_point)

    def get_series_by_name(self, label: str) -> Optional[TimeSeries]:
        """Return the series whose label matches exactly, or None."""
        for series in self.all_series:
            if series.statistic_label == label:
                return series
        return None

    @property
    def labels(self) -> List[str]:
        return [series.statistic_label for series in self.all_series]

    def to_frame(self) -> pd.DataFrame:
        """
        Export every series as one DataFrame column, aligned on timestamp.
        """
        if not self.all_series:
            return pd.DataFrame()
        return pd.concat([series.to_series() for series in self.all_series], axis=1).sort_index()

    def __len__(self) -> int:
        return len(self.all_series)

    def __str__(self) -> str:
        ordered = sorted(self.all_series, key=lambda s: s.statistic_label)
        return "\n".join(str(series) for series in ordered)
