"""
Environment capability contract
"""

from .base import Environment, EventHandlerFn

__all__ = ['Environment', 'EventHandlerFn']
