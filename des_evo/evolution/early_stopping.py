"""
Early stopping for generational evolution

Watches the per-generation Logbook records produced by ``EvolutionRunner``
and signals a stop once the monitored statistic has not improved for
``patience`` consecutive generations.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

FALLBACK_MONITOR = 'max'


class EarlyStopping:
    """
    Patience-based stop criterion over Logbook records.

    The monitored key defaults to ``'score'``, the external evaluation the
    runner records when it has an ``evaluate`` callback. Records without that
    key fall back to the population's ``'max'`` fitness.

    Example:
        >>> early_stopping = EarlyStopping(patience=5, min_delta=50.0, mode='min')
        >>> runner = EvolutionRunner(population, 100, early_stopping=early_stopping,
        ...                          evaluate=make_wait_time_evaluator(env_factory, horizon))
        >>> result = runner.run()
        >>> early_stopping.best_generation
    """

    def __init__(self, patience: int = 10, min_delta: float = 0.0, mode: str = 'max',
                 monitor: str = 'score'):
        """
        Args:
            patience: Generations without improvement before stopping
            min_delta: Margin a value must beat the best by to count as an improvement
            mode: 'max' when higher values are better, 'min' when lower are
            monitor: Record key to watch

        Raises:
            ValueError: on patience < 1, negative min_delta or an unknown mode
        """
        if patience < 1:
            raise ValueError(f"patience must be >= 1, got {patience}")
        if min_delta < 0:
            raise ValueError(f"min_delta must be >= 0, got {min_delta}")
        if mode not in ('max', 'min'):
            raise ValueError(f"mode must be 'max' or 'min', got {mode}")

        self.patience = patience
        self.min_delta = min_delta
        self.mode = mode
        self.monitor = monitor

        self.history: List[Tuple[int, float]] = []
        self.best_score: Optional[float] = None
        self.best_generation: Optional[int] = None
        self.stopped_generation: Optional[int] = None

    def monitored_value(self, record: Mapping[str, Any]) -> float:
        """
        Raises:
            KeyError: if the record holds neither the monitored key nor 'max'
        """
        key = self.monitor if self.monitor in record else FALLBACK_MONITOR
        if key not in record:
            raise KeyError(f"Record has neither '{self.monitor}' nor '{FALLBACK_MONITOR}': {sorted(record)}")
        return float(record[key])

    def _improves(self, value: float) -> bool:
        if self.best_score is None:
            return True
        if self.mode == 'max':
            return value > self.best_score + self.min_delta
        return value < self.best_score - self.min_delta

    @property
    def generations_since_best(self) -> int:
        if self.best_generation is None:
            return 0
        return sum(1 for generation, _ in self.history if generation > self.best_generation)

    @property
    def should_stop(self) -> bool:
        return self.stopped_generation is not None

    def update(self, record: Mapping[str, Any]) -> bool:
        """
        Feed one generation's record.

        Args:
            record: Logbook record; its 'gen' entry dates the value

        Returns:
            True once the run should stop
        """
        value = self.monitored_value(record)
        generation = int(record.get('gen', len(self.history)))
        self.history.append((generation, value))

        if self._improves(value):
            self.best_score = value
            self.best_generation = generation
        elif self.generations_since_best >= self.patience and not self.should_stop:
            self.stopped_generation = generation

        return self.should_stop

    def summary(self) -> Dict[str, Any]:
        return {
            'monitor': self.monitor,
            'mode': self.mode,
            'best_score': self.best_score,
            'best_generation': self.best_generation,
            'generations_since_best': self.generations_since_best,
            'stopped_generation': self.stopped_generation,
        }

    def reset(self):
        self.history = []
        self.best_score = None
        self.best_generation = None
        self.stopped_generation = None

    def __repr__(self) -> str:
        return (f"EarlyStopping(monitor={self.monitor!r}, mode={self.mode!r}, patience={self.patience}, "
                f"best={self.best_score} at gen {self.best_generation})")
