"""
Time series of values recorded for a single statistic.
"""

from typing import Dict, List, Tuple

import pandas as pd

from .data_point import DataPoint

UNKNOWN_UNIT = "Unknown"


class TimeSeries:
    """
    Ordered mapping from timestamp to value for one labelled statistic.

    The unit is "Unknown" until the first data point is added, after which it
    is taken from that point. Recording a timestamp twice keeps the latest value.
    """

    def __init__(self, statistic_label: str):
        self.statistic_label = statistic_label
        self.unit = UNKNOWN_UNIT
        self._series: Dict[int, float] = {}

    def add_data_point(self, data_point: DataPoint):
        if self.unit == UNKNOWN_UNIT:
            self.unit = data_point.unit
        self._series[data_point.timestamp] = data_point.value

    @property
    def series(self) -> Dict[int, float]:
        """Copy of the series ordered by timestamp."""
        return dict(self.items())

    def items(self) -> List[Tuple[int, float]]:
        return sorted(self._series.items())

    def timestamps(self) -> List[int]:
        return sorted(self._series)

    def values(self) -> List[float]:
        return [value for _, value in self.items()]

    def get_last_value(self) -> float:
        """
        Value at the latest timestamp.

        Useful when values are recorded at every step but only the final
        result matters.

        Raises:
            ValueError: if the series holds no data points
        """
        if not self._series:
            raise ValueError(f"No data points in series '{self.statistic_label}'")
        return self._series[max(self._series)]

    def to_series(self) -> pd.Series:
        """Export as a pandas Series indexed by timestamp."""
        timestamps, values = zip(*self.items()) if self._series else ((), ())
        return pd.Series(
            list(values),
            index=pd.Index(list(timestamps), name="timestamp"),
            name=self.statistic_label,
            dtype=float,
        )

    def __len__(self) -> int:
        return len(self._series)

    def __str__(self) -> str:
        rule = "=" * len(self.statistic_label)
        lines = [rule, self.statistic_label, rule, f"Timestamp | {self.unit}"]
        for timestamp, value in self.items():
            lines.append(f"{timestamp:<9} | {value}")
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return f"TimeSeries(label={self.statistic_label!r}, unit={self.unit!r}, points={len(self)})"
