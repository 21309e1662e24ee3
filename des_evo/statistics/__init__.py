"""
Statistics recorder

Append-only named time series shared by the simulation driver and
environments.
"""

from .data_point import DataPoint
from .timeseries import TimeSeries
from .stats import Stats

__all__ = ['DataPoint', 'TimeSeries', 'Stats']
