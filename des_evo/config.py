"""
Experiment configuration

Experiments are described by a JSON file whose values are deep-merged over
DEFAULT_CONFIG, so a config file only needs the keys it changes.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    'experiment': {
        'name': 'bus_world',
        'description': 'Evolve a bus fleet to reduce total passenger wait time',
        'seed': None,
    },
    'simulation': {
        'horizon': 10000,
        'number_of_stops': 10,
        'number_of_passengers': 1000,
    },
    'bus': {
        'number_of_buses': 5,
        'capacity': 5,
    },
    'settings': {
        'pickup_delay': 60,
        'drop_off_delay': 30,
        'next_stop_delay': 1200,
        'initial_delay': 600,
    },
    'evolution': {
        'generations': 20,
        'elite_percentage': 10,
        'mutation_rate': 0.1,
        'on_error': 'raise',
        'show_progress': True,
    },
    'termination': {
        'early_stopping': False,
        'patience': 5,
        'min_delta': 0.0,
    },
    'output': {
        'chart_path': None,
        'fleet_path': None,
    },
}


def merge_config(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge ``overrides`` into a copy of ``base``.

    Nested dicts are merged key by key; any other value replaces the base value.
    """
    merged = copy.deepcopy(dict(base))
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load a configuration file merged over DEFAULT_CONFIG.

    Args:
        config_path: Path to a JSON file; None returns the defaults

    Returns:
        Configuration dict

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the file is not a JSON object
    """
    if config_path is None:
        return copy.deepcopy(DEFAULT_CONFIG)

    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_file, 'r', encoding='utf-8') as f:
        overrides = json.load(f)
    if not isinstance(overrides, dict):
        raise ValueError(f"Config file must contain a JSON object: {config_path}")

    config = merge_config(DEFAULT_CONFIG, overrides)
    logger.info(f"Loaded config: {config['experiment']['name']}")
    return config
