"""
Visualization Utilities Module

Helper functions for charting simulation statistics and evolution results.
"""
import logging
from typing import Mapping, Optional, Sequence, Tuple, Union

import matplotlib.pyplot as plt

from ..statistics import TimeSeries

logger = logging.getLogger(__name__)

Points = Union[Mapping[float, float], Sequence[Tuple[float, float]]]


def _finish(fig, save_path: Optional[str]):
    plt.tight_layout()
    if save_path:
        fig.savefig(save_path)
        logger.info(f"Chart saved to {save_path}")
    else:
        plt.show()
    plt.close(fig)


def plot_series(data: Points, chart_name: str, x_label: str = "Generation",
                y_label: str = "Value", save_path: Optional[str] = None):
    """
    Plots a single line chart of (x, y) points, sorted by x.

    Args:
        data: Mapping x -> y or a sequence of (x, y) pairs.
        chart_name: Title of the chart.
        x_label: Label of the x axis.
        y_label: Label of the y axis.
        save_path: If provided, the chart is saved to this file path.
                   Otherwise, the chart is displayed interactively.
    """
    points = sorted(data.items() if isinstance(data, Mapping) else data)
    if not points:
        raise ValueError(f"No data to plot for '{chart_name}'")
    xs, ys = zip(*points)

    fig, ax = plt.subplots(figsize=(12, 6))
    ax.plot(xs, ys, marker='o', color='dodgerblue', label=y_label)
    ax.set_title(chart_name, fontsize=16)
    ax.set_xlabel(x_label, fontsize=12)
    ax.set_ylabel(y_label, fontsize=12)
    ax.legend()
    ax.grid(True)

    _finish(fig, save_path)


def plot_time_series(series: TimeSeries, save_path: Optional[str] = None):
    """
    Plots a recorded TimeSeries against simulation time.
    """
    if len(series) == 0:
        raise ValueError(f"Time series '{series.statistic_label}' is empty")

    fig, ax = plt.subplots(figsize=(12, 6))
    ax.step(series.timestamps(), series.values(), where='post', color='dodgerblue',
            label=series.statistic_label)
    ax.set_title(series.statistic_label, fontsize=16)
    ax.set_xlabel('Timestamp', fontsize=12)
    ax.set_ylabel(series.unit, fontsize=12)
    ax.legend()
    ax.grid(True)

    _finish(fig, save_path)
