"""
Tests for EvolutionRunner
"""
import unittest
from unittest.mock import MagicMock

from deap import tools

from des_evo.evolution import (
    EarlyStopping, EventHandler, EvolutionResult, EvolutionRunner, LoggingHandler, Population,
)
from des_evo.exceptions import BreedingError

from toy_individuals import Scalar, Sterile


class RecordingHandler(EventHandler):

    def __init__(self):
        super().__init__()
        self.name = "recording_handler"
        self.calls = []

    def on_evolution_start(self, **kwargs):
        self.calls.append('start')

    def on_generation_complete(self, generation, **kwargs):
        self.calls.append(('generation', generation))

    def on_evolution_complete(self, **kwargs):
        self.calls.append('complete')

    def on_evolution_error(self, generation, **kwargs):
        self.calls.append(('error', generation))


class TestEvolutionRunner(unittest.TestCase):

    def setUp(self):
        self.population = Population([Scalar(v, name=str(v)) for v in [1, 4, 6, 8]],
                                     seed=7, mutation_rate=0.0)

    def test_run_records_every_generation(self):
        runner = EvolutionRunner(self.population, 3, show_progress=False)
        result = runner.run()

        self.assertIsInstance(result, EvolutionResult)
        self.assertIsInstance(runner.logbook, tools.Logbook)
        self.assertEqual(len(runner.logbook), 4)
        self.assertEqual([record['gen'] for record in result.fitness_history], [0, 1, 2, 3])
        self.assertEqual(result.fitness_history[0]['max'], 8.0)
        self.assertEqual(result.fitness_history[0]['min'], 1.0)
        self.assertEqual(result.generations_completed, 3)
        self.assertEqual(len(result.final_population), 4)
        self.assertEqual(result.best_fitness, 8.0)
        self.assertFalse(result.stopped_early)
        self.assertGreaterEqual(result.execution_time, 0.0)

    def test_evaluate_score_recorded(self):
        evaluate = MagicMock(return_value=12.5)
        runner = EvolutionRunner(self.population, 2, evaluate=evaluate, show_progress=False)
        result = runner.run()

        self.assertEqual(evaluate.call_count, 3)
        evaluate.assert_called_with(self.population)
        self.assertEqual(result.scores, [12.5, 12.5, 12.5])
        self.assertIn('score', runner.logbook.header)

    def test_early_stopping_on_score(self):
        early_stopping = EarlyStopping(patience=2, mode='min')
        runner = EvolutionRunner(self.population, 10, early_stopping=early_stopping,
                                 evaluate=lambda population: 100.0, show_progress=False)
        result = runner.run()

        self.assertTrue(result.stopped_early)
        self.assertEqual(result.generations_completed, 2)

    def test_skip_policy(self):
        population = Population([Scalar(1), Sterile(5)], seed=0)
        runner = EvolutionRunner(population, 3, on_error='skip', show_progress=False)
        result = runner.run()

        self.assertEqual(result.skipped_generations, 3)
        self.assertEqual(result.generations_completed, 0)
        self.assertEqual(len(result.errors), 3)
        self.assertEqual(population.generation, 0)

    def test_raise_policy(self):
        population = Population([Scalar(1), Sterile(5)], seed=0)
        handler = RecordingHandler()
        runner = EvolutionRunner(population, 3, show_progress=False)
        runner.add_handler(handler)

        with self.assertRaises(BreedingError):
            runner.run()
        self.assertEqual(handler.calls, ['start', ('error', 1)])

    def test_handlers_notified(self):
        handler = RecordingHandler()
        runner = EvolutionRunner(self.population, 2, show_progress=False)
        runner.add_handler(handler)
        runner.add_handler(LoggingHandler())
        runner.run()

        self.assertIs(handler.runner, runner)
        self.assertEqual(handler.calls, ['start', ('generation', 1), ('generation', 2), 'complete'])

    def test_failing_handler_does_not_stop_run(self):
        broken = RecordingHandler()
        broken.on_generation_complete = MagicMock(side_effect=RuntimeError("boom"))
        runner = EvolutionRunner(self.population, 2, show_progress=False)
        runner.add_handler(broken)

        result = runner.run()

        self.assertEqual(result.generations_completed, 2)
        self.assertEqual(broken.on_generation_complete.call_count, 2)

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            EvolutionRunner(self.population, -1)
        with self.assertRaises(ValueError):
            EvolutionRunner(self.population, 1, on_error='ignore')
        with self.assertRaises(ValueError):
            EvolutionRunner(Population([]), 1)
        with self.assertRaises(TypeError):
            EvolutionRunner(self.population, 1).add_handler(object())


if __name__ == '__main__':
    unittest.main()
