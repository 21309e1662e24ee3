"""
Discrete event scheduler
"""

from .scheduler import Scheduler

__all__ = ['Scheduler']
