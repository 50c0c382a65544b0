#!/usr/bin/env python3
"""
Utility script to run NEAT examples easily.

Usage:
    python scripts/run_example.py xor
    python scripts/run_example.py xor --seed 7 --generations 50
    python scripts/run_example.py xor --log-level DEBUG
"""

import sys
import argparse
import logging
from pathlib import Path

# Add parent directory to path, so that the examples can be imported
sys.path.insert(0, str(Path(__file__).parent.parent))

from neatlite import Config
from examples.trial_XOR import Trial_XOR


EXAMPLES = {
    'xor': {
        'trial': Trial_XOR,
        'config': 'examples/configs/config_xor.ini',
        'description': 'XOR logic problem'
    },
}


def main():
    parser = argparse.ArgumentParser(description='Run NEAT examples')
    parser.add_argument('example', choices=EXAMPLES.keys(),
                        help='Example to run')
    parser.add_argument('--config', default=None,
                        help='Configuration file (defaults to the example\'s own)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for the random number generator')
    parser.add_argument('--generations', type=int, default=None,
                        help='Override the maximum number of generations')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING'], default='INFO',
                        help='Logging verbosity')

    args = parser.parse_args()

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    example = EXAMPLES[args.example]
    print(f"Running {example['description']}...")

    config = Config(args.config or example['config'])
    if args.generations is not None:
        config.max_number_generations = args.generations

    trial = example['trial'](config, seed=args.seed)
    population = trial.run()

    print(f"\nBest fitness: {population.get_fittest_genome().fitness:.4f}")
    return 1 if trial.failed else 0


if __name__ == '__main__':
    sys.exit(main())
