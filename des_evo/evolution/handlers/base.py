"""
Evolution event handler base class

Handlers are notified by the runner at fixed points of an evolution run.
"""

from abc import ABC


class EventHandler(ABC):
    """
    Hooks called by ``EvolutionRunner``. Override the ones you need.
    """

    def __init__(self):
        self.name = "base_handler"
        self.runner = None

    def set_runner(self, runner):
        self.runner = runner

    def on_evolution_start(self, **kwargs):
        pass

    def on_generation_complete(self, **kwargs):
        pass

    def on_evolution_complete(self, **kwargs):
        pass

    def on_evolution_error(self, **kwargs):
        pass
