"""
Population and generational evolution

A population is an ordered list of individuals. One call to ``evolve``
selects an elite by normalised fitness, breeds a whole new generation from it
and swaps it in. A failed breeding leaves the population untouched.
"""

from typing import Iterator, List, Optional, Sequence
import logging

import numpy as np

from .individual import Breedable, Dna, Fitness
from ..exceptions import BreedingError, SelectionError

logger = logging.getLogger(__name__)

DEFAULT_ELITE_PERCENTAGE = 10
DEFAULT_MUTATION_RATE = 0.1


class Population:
    """
    Ordered collection of individuals subject to evolutionary selection.

    Randomness comes from a single ``numpy.random.Generator`` so that a run is
    reproducible for a given seed.
    """

    def __init__(self, individuals: Sequence, rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None, elite_percentage: int = DEFAULT_ELITE_PERCENTAGE,
                 mutation_rate: float = DEFAULT_MUTATION_RATE):
        """
        Args:
            individuals: Initial individuals, each implementing Dna, Fitness and Breedable
            rng: Random generator to draw from; built from ``seed`` if omitted
            seed: Seed used when ``rng`` is not given
            elite_percentage: Top percentage of normalised fitness kept as parents
            mutation_rate: Probability that a newly bred child is mutated
        """
        populace = list(individuals)
        for individual in populace:
            self._check_individual(individual)
        if not 0.0 <= mutation_rate <= 1.0:
            raise ValueError(f"mutation_rate must be in [0, 1], got {mutation_rate}")
        self._check_percentage(elite_percentage)

        self.populace: List = populace
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.elite_percentage = elite_percentage
        self.mutation_rate = mutation_rate
        self.generation = 0

    @staticmethod
    def _check_individual(individual):
        for capability in (Dna, Fitness, Breedable):
            if not isinstance(individual, capability):
                raise TypeError(
                    f"Individual must implement {capability.__name__}: {type(individual).__name__}"
                )

    @staticmethod
    def _check_percentage(top_percentage: int):
        if top_percentage > 100 or top_percentage < 1:
            raise SelectionError(f"Cannot select {top_percentage} percent of the population")

    def __len__(self) -> int:
        return len(self.populace)

    def __getitem__(self, index: int):
        return self.populace[index]

    def __iter__(self) -> Iterator:
        return iter(self.populace)

    def is_empty(self) -> bool:
        return not self.populace

    def fitnesses(self) -> np.ndarray:
        """
        Raw fitness of every individual, in population order.

        Raises:
            ValueError: if any fitness is negative or NaN
        """
        values = np.array([ind.evaluate_fitness() for ind in self.populace], dtype=np.float32)
        if values.size and (np.isnan(values).any() or (values < 0).any()):
            raise ValueError(f"Fitness values must be non-negative numbers: {values.tolist()}")
        return values

    def get_weights(self) -> np.ndarray:
        """
        Fitness normalised to a 0-100 scale by the maximum fitness.

        When the maximum is 0 every weight is 0.
        """
        fitnesses = self.fitnesses()
        if fitnesses.size == 0:
            return fitnesses
        max_fitness = fitnesses.max()
        if max_fitness <= 0:
            return np.zeros_like(fitnesses)
        return fitnesses / max_fitness * np.float32(100.0)

    def selection(self, top_percentage: int) -> List:
        """
        Individuals whose normalised fitness is within ``top_percentage`` of the best.

        Selects every individual with weight >= 100 - top_percentage, so
        individuals exactly on the cutoff are included.

        Args:
            top_percentage: Percentage in 1..100

        Returns:
            Selected individuals in population order

        Raises:
            SelectionError: if top_percentage is 0 or greater than 100
        """
        self._check_percentage(top_percentage)
        cutoff = np.float32(100 - top_percentage)
        weights = self.get_weights()
        return [self.populace[i] for i, weight in enumerate(weights) if weight >= cutoff]

    def best(self):
        """First individual with the greatest raw fitness, or None when empty."""
        if not self.populace:
            return None
        return self.populace[int(np.argmax(self.fitnesses()))]

    def breed_from_parents(self, first, second):
        """Child of two parents. Propagates BreedingError."""
        return first.reproduce(second, self.rng)

    def evolve(self):
        """
        Replace the population with a new generation bred from the elite.

        The elite is ``selection(elite_percentage)``; if that is empty the
        single best individual is used. Each new slot gets a child of two
        parents drawn uniformly with replacement from the elite, mutated with
        probability ``mutation_rate``.

        Raises:
            SelectionError: if the configured elite percentage is invalid
            BreedingError: if any breeding fails; nothing is committed
        """
        elite = self.selection(self.elite_percentage)
        if not elite and self.populace:
            elite = [self.best()]
            logger.debug("Empty elite selection, falling back to the best individual")

        new_populace = []
        for _ in range(len(self.populace)):
            first = elite[self.rng.integers(len(elite))]
            second = elite[self.rng.integers(len(elite))]
            try:
                child = self.breed_from_parents(first, second)
            except BreedingError as e:
                logger.warning(f"Generation {self.generation + 1} aborted, population kept: {e}")
                raise
            if self.rng.random() < self.mutation_rate:
                child.mutate(self.rng)
            new_populace.append(child)

        self.populace = new_populace
        self.generation += 1
        logger.debug(f"Generation {self.generation}: {len(elite)} elite parents, {len(new_populace)} children")

    def __repr__(self) -> str:
        return f"Population(size={len(self)}, generation={self.generation})"
