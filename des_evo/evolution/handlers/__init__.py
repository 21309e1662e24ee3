"""
Evolution event handlers
"""

from .base import EventHandler
from .logging_handler import LoggingHandler

__all__ = ['EventHandler', 'LoggingHandler']
