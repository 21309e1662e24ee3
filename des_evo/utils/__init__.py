"""
Utility Functions
"""
from .visualization import plot_series, plot_time_series

__all__ = [
    'plot_series',
    'plot_time_series',
]
