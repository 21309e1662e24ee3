"""
Capabilities an entity needs to take part in a population.

- Dna: a serialisable genetic encoding and a fixed species tag
- Fitness: a non-negative scalar score
- Breedable: crossover with another individual and in-place mutation
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

import numpy as np


class Dna(ABC):
    """Genetic encoding of an individual."""

    @abstractmethod
    def get_dna(self) -> Dict[str, Any]:
        """JSON-serialisable genetic encoding."""

    @property
    @abstractmethod
    def species(self) -> str:
        """Species tag. Never changes over an individual's lifetime."""


class Fitness(ABC):

    @abstractmethod
    def evaluate_fitness(self) -> float:
        """Non-negative score, higher is better."""


class Breedable(ABC):

    @abstractmethod
    def reproduce(self, other: "Breedable", rng: np.random.Generator) -> "Breedable":
        """
        Produce one child from ``self`` and ``other``.

        Raises:
            BreedingError: if the two parents are incompatible
        """

    @abstractmethod
    def mutate(self, rng: np.random.Generator):
        """Mutate this individual in place."""


class Individual(Dna, Fitness, Breedable):
    """Convenience base combining the three capabilities."""
