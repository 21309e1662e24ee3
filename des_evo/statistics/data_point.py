"""
Single statistic sample: a timestamp, a value and a unit.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DataPoint:
    """
    Immutable sample recorded into a TimeSeries.

    Attributes:
        timestamp: Simulation time the value was observed at
        value: Observed value
        unit: Unit of measurement, e.g. "Seconds" or "Count"
    """
    timestamp: int
    value: float
    unit: str
