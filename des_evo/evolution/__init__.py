"""
Evolution engine

Generic genetic evolution over any population of individuals implementing
Dna, Fitness and Breedable:
- Population: selection, breeding, mutation, generational replacement
- EvolutionRunner: multi-generation runs with statistics and handlers
- EarlyStopping: patience-based stop criterion
"""

from .individual import Dna, Fitness, Breedable, Individual
from .population import Population, DEFAULT_ELITE_PERCENTAGE, DEFAULT_MUTATION_RATE
from .early_stopping import EarlyStopping
from .result import EvolutionResult
from .handlers import EventHandler, LoggingHandler
from .runner import EvolutionRunner

__all__ = [
    'Dna', 'Fitness', 'Breedable', 'Individual',
    'Population', 'DEFAULT_ELITE_PERCENTAGE', 'DEFAULT_MUTATION_RATE',
    'EarlyStopping', 'EvolutionResult',
    'EventHandler', 'LoggingHandler',
    'EvolutionRunner',
]
