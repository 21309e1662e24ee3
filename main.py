#!/usr/bin/env python3
"""
Main Entry Point for the bus world experiment

Runs a baseline simulation of a bus fleet, evolves the fleet, then simulates
the evolved fleet on the same passengers and reports the wait times.

Usage:
    python main.py [--config PATH] [--generations N] [--seed N] [--play MS] [--chart PATH] [--verbose]

Example:
    python main.py --config configs/default_config.json --generations 50 --chart wait_time.png
"""
import argparse
import logging
import sys
from typing import Any, Dict, List

import dill

from des_evo.bus_world import (
    Bus, BusEnvironmentSettings, add_bus_stops_from_env_to_buses, create_bus_env,
    create_n_buses_m_capacity, display_wait_time, get_wait_time,
    make_wait_time_evaluator, new_sim,
)
from des_evo.config import load_config
from des_evo.evolution import EarlyStopping, EvolutionRunner, LoggingHandler, Population
from des_evo.utils import plot_series

logger = logging.getLogger("des_evo.main")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Bus world discrete-event simulation with fleet evolution",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py
  python main.py --config configs/default_config.json --seed 7
  python main.py --generations 5 --play 50
        """
    )
    parser.add_argument('--config', type=str, default=None, help='JSON config file merged over the defaults')
    parser.add_argument('--generations', type=int, default=None, help='Number of generations to evolve')
    parser.add_argument('--seed', type=int, default=None, help='Random seed')
    parser.add_argument('--play', type=int, default=None, metavar='MS',
                        help='Play the simulations in the terminal with MS milliseconds per frame')
    parser.add_argument('--chart', type=str, default=None, metavar='PATH',
                        help='Save a chart of the wait time by generation to PATH')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    return parser.parse_args(argv)


def apply_overrides(config: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    if args.generations is not None:
        config['evolution']['generations'] = args.generations
    if args.seed is not None:
        config['experiment']['seed'] = args.seed
    if args.chart is not None:
        config['output']['chart_path'] = args.chart
    return config


def run_simulation(buses: List[Bus], config: Dict[str, Any], env_factory, play_ms=None) -> float:
    sim = new_sim(buses, config['simulation']['horizon'], env_factory())
    if play_ms is not None:
        sim.play_movie(play_ms)
    else:
        sim.run()
    display_wait_time(sim)
    return get_wait_time(sim)


def run_experiment(config: Dict[str, Any], play_ms=None) -> Dict[str, Any]:
    seed = config['experiment']['seed']
    sim_config = config['simulation']
    evo_config = config['evolution']
    settings = BusEnvironmentSettings.from_dict(config['settings'])

    def env_factory():
        return create_bus_env(sim_config['number_of_stops'], sim_config['number_of_passengers'],
                              settings, seed=seed)

    buses = create_n_buses_m_capacity(config['bus']['number_of_buses'], config['bus']['capacity'])
    add_bus_stops_from_env_to_buses(env_factory(), buses)

    logger.info(f"Experiment: {config['experiment']['name']}")
    logger.info(f"Buses: {len(buses)}, stops: {sim_config['number_of_stops']}, "
                f"passengers: {sim_config['number_of_passengers']}, horizon: {sim_config['horizon']}")

    baseline = run_simulation(buses, config, env_factory, play_ms)

    early_stopping = None
    if config['termination']['early_stopping']:
        early_stopping = EarlyStopping(patience=config['termination']['patience'],
                                       min_delta=config['termination']['min_delta'],
                                       mode='min', monitor='score')

    population = Population([Bus.from_dna(bus.get_dna(), uid=i) for i, bus in enumerate(buses)],
                            seed=seed,
                            elite_percentage=evo_config['elite_percentage'],
                            mutation_rate=evo_config['mutation_rate'])
    runner = EvolutionRunner(population, evo_config['generations'],
                             early_stopping=early_stopping,
                             on_error=evo_config['on_error'],
                             evaluate=make_wait_time_evaluator(env_factory, sim_config['horizon']),
                             show_progress=evo_config['show_progress'])
    runner.add_handler(LoggingHandler())
    result = runner.run()

    evolved_fleet = list(population)
    evolved = run_simulation(evolved_fleet, config, env_factory, play_ms)
    logger.info(f"Wait time: baseline {baseline:.0f} -> evolved {evolved:.0f}")

    chart_path = config['output']['chart_path']
    if chart_path:
        plot_series({record['gen']: record['score'] for record in result.fitness_history},
                    "Total Passenger Wait Time by Generation",
                    y_label="Wait time", save_path=chart_path)

    fleet_path = config['output']['fleet_path']
    if fleet_path:
        with open(fleet_path, "wb") as f:
            dill.dump(evolved_fleet, f)
        logger.info(f"Evolved fleet saved to {fleet_path}")

    return {
        'baseline_wait_time': baseline,
        'evolved_wait_time': evolved,
        'result': result,
        'fleet': evolved_fleet,
    }


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        config = apply_overrides(load_config(args.config), args)
        return run_experiment(config, play_ms=args.play)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Experiment failed: {e}", exc_info=args.verbose)
        sys.exit(1)


if __name__ == "__main__":
    main()
