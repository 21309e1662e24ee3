"""
Evolution runner

Drives a Population through a number of generations, recording fitness
statistics per generation, notifying handlers and optionally stopping early.
"""

from typing import Any, Callable, Dict, List, Optional
import logging
import time

import numpy as np
from deap import tools
from tqdm import trange

from .early_stopping import EarlyStopping
from .handlers.base import EventHandler
from .population import Population
from .result import EvolutionResult
from ..exceptions import EvolutionError

logger = logging.getLogger(__name__)

ERROR_POLICIES = ('raise', 'skip')


class EvolutionRunner:
    """
    Runs ``Population.evolve`` for up to ``generations`` generations.

    Statistics of the population fitness (avg, std, min, max) are compiled
    with deap and kept in a Logbook. An optional ``evaluate`` callback scores
    each generation externally, for example by simulating it; the score is
    recorded and, when present, is what early stopping monitors.
    """

    def __init__(self, population: Population, generations: int,
                 early_stopping: Optional[EarlyStopping] = None,
                 on_error: str = 'raise',
                 evaluate: Optional[Callable[[Population], float]] = None,
                 show_progress: bool = True):
        """
        Args:
            population: Population to evolve in place
            generations: Maximum number of generations
            early_stopping: Optional stop criterion
            on_error: 'raise' to propagate evolution errors, 'skip' to log them and
                move on to the next generation with the population unchanged
            evaluate: Optional callback scoring the whole population
            show_progress: Show a tqdm progress bar
        """
        if generations < 0:
            raise ValueError(f"generations must be >= 0, got {generations}")
        if on_error not in ERROR_POLICIES:
            raise ValueError(f"on_error must be one of {ERROR_POLICIES}, got {on_error}")
        if population.is_empty():
            raise ValueError("Cannot evolve an empty population")

        self.population = population
        self.generations = generations
        self.early_stopping = early_stopping
        self.on_error = on_error
        self.evaluate = evaluate
        self.show_progress = show_progress
        self.handlers: List[EventHandler] = []

        self.stats = tools.Statistics(key=lambda ind: ind.evaluate_fitness())
        self.stats.register("avg", np.mean)
        self.stats.register("std", np.std)
        self.stats.register("min", np.min)
        self.stats.register("max", np.max)
        self.logbook = tools.Logbook()
        self.logbook.header = ["gen", "avg", "std", "min", "max"] + (["score"] if evaluate else [])

    def add_handler(self, handler: EventHandler):
        if not isinstance(handler, EventHandler):
            raise TypeError(f"Handler must inherit from EventHandler: {type(handler)}")
        self.handlers.append(handler)
        handler.set_runner(self)

    def _fire_event(self, event_name: str, **kwargs):
        for handler in self.handlers:
            try:
                getattr(handler, f'on_{event_name}')(**kwargs)
            except Exception as e:
                logger.error(f"Handler {handler.__class__.__name__} failed on {event_name}: {e}")

    def _record_generation(self, generation: int) -> Dict[str, Any]:
        record = {key: float(value) for key, value in self.stats.compile(self.population.populace).items()}
        if self.evaluate is not None:
            record['score'] = float(self.evaluate(self.population))
        self.logbook.record(gen=generation, **record)
        return self.logbook[-1]

    def run(self) -> EvolutionResult:
        start = time.perf_counter()
        skipped = 0
        errors: List[str] = []
        stopped_early = False
        completed = 0

        self._fire_event('evolution_start', population=self.population, generations=self.generations)
        self._monitor(self._record_generation(0))

        for generation in trange(1, self.generations + 1, desc="Evolving", unit="gen",
                                 disable=not self.show_progress):
            try:
                self.population.evolve()
            except EvolutionError as e:
                self._fire_event('evolution_error', generation=generation, error=e)
                if self.on_error == 'raise':
                    raise
                skipped += 1
                errors.append(str(e))
                logger.warning(f"Skipping generation {generation}: {e}")
                continue

            completed += 1
            record = self._record_generation(generation)
            self._fire_event('generation_complete', generation=generation,
                             population=self.population, record=record)

            if self._monitor(record):
                stopped_early = True
                logger.info(f"Early stopping triggered at generation {generation}")
                break

        result = EvolutionResult(
            best_individual=self.population.best(),
            final_population=list(self.population.populace),
            fitness_history=[dict(record) for record in self.logbook],
            generations_completed=completed,
            skipped_generations=skipped,
            stopped_early=stopped_early,
            execution_time=time.perf_counter() - start,
            errors=errors,
        )
        self._fire_event('evolution_complete', result=result)
        return result

    def _monitor(self, record: Dict[str, Any]) -> bool:
        if self.early_stopping is None:
            return False
        return self.early_stopping.update(record)
