"""
Logging handler - reports evolution progress through the logging module
"""

import logging

from .base import EventHandler

logger = logging.getLogger(__name__)


class LoggingHandler(EventHandler):
    """Logs one line per generation and a summary at the end."""

    def __init__(self, level: int = logging.INFO):
        super().__init__()
        self.name = "logging_handler"
        self.level = level

    def on_evolution_start(self, population, generations, **kwargs):
        logger.log(self.level, f"Evolving {len(population)} individuals for up to {generations} generations")

    def on_generation_complete(self, generation, record, **kwargs):
        message = (f"Generation {generation}: max={record['max']:.4f} "
                   f"avg={record['avg']:.4f} min={record['min']:.4f}")
        if 'score' in record:
            message += f" score={record['score']:.4f}"
        logger.log(self.level, message)

    def on_evolution_complete(self, result, **kwargs):
        summary = result.get_summary()
        logger.log(self.level, f"Evolution complete after {summary['generations_completed']} generations, "
                               f"best fitness {summary['best_fitness']:.4f}")

    def on_evolution_error(self, generation, error, **kwargs):
        logger.error(f"Generation {generation} failed: {error}")
