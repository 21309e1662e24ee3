"""
Evolution result

Bundles everything an evolution run produced: the final population, the best
individual, the per-generation history and run metadata.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class EvolutionResult:
    """
    Outcome of ``EvolutionRunner.run``.

    ``fitness_history`` holds one record per generation (generation 0 is the
    initial population) with the keys produced by the runner's statistics:
    gen, avg, std, min, max and, when an evaluate callback is set, score.
    """

    best_individual: Any
    final_population: List[Any]
    fitness_history: List[Dict[str, Any]]
    generations_completed: int
    skipped_generations: int = 0
    stopped_early: bool = False
    execution_time: Optional[float] = None
    errors: List[str] = field(default_factory=list)

    @property
    def best_fitness(self) -> float:
        if self.best_individual is None:
            return 0.0
        return float(self.best_individual.evaluate_fitness())

    @property
    def scores(self) -> List[float]:
        """External evaluation scores by generation, when recorded."""
        return [record['score'] for record in self.fitness_history if 'score' in record]

    @property
    def improvement_rate(self) -> float:
        """Relative change of the best fitness between the first and last generation."""
        if len(self.fitness_history) < 2:
            return 0.0

        initial = self.fitness_history[0]['max']
        final = self.fitness_history[-1]['max']
        if initial == 0:
            return float('inf') if final > 0 else 0.0
        return (final - initial) / abs(initial)

    def get_summary(self) -> Dict[str, Any]:
        return {
            'generations_completed': self.generations_completed,
            'skipped_generations': self.skipped_generations,
            'stopped_early': self.stopped_early,
            'population_size': len(self.final_population),
            'best_fitness': self.best_fitness,
            'improvement_rate': self.improvement_rate,
            'execution_time': self.execution_time,
        }
