#!/usr/bin/env python3
"""
Train a small network on a four-sample boolean dataset.

The target of each pair equals its second input:
(0,0)->0, (0,1)->1, (1,0)->0, (1,1)->1.

Usage:
    python scripts/train_boolean_demo.py

Settings come from the environment (see ``feedforward.config``). Set
``FEEDFORWARD_PLOT=curve.png`` to save the training curve.
"""

import logging
import os
import sys

from feedforward.config import TrainingConfig, configure_logging
from feedforward.exceptions import FeedforwardError
from feedforward.visualization import plot_training_history

logger = logging.getLogger('feedforward.demo')

INPUTS = [
    [0.0, 0.0],
    [0.0, 1.0],
    [1.0, 0.0],
    [1.0, 1.0],
]
TARGETS = [[0.0], [1.0], [0.0], [1.0]]


def main():
    """Build, train and report."""
    try:
        config = TrainingConfig.from_env()
    except ValueError as e:
        print(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_logging(config.log_level)
    logger.info(f"Configuration: {config}")

    try:
        network = config.build_network()
        history = network.train(INPUTS, TARGETS, config.epochs)
    except FeedforwardError:
        logger.exception("Training failed")
        sys.exit(1)

    print("=" * 60)
    for values, target in zip(INPUTS, TARGETS):
        output = network.predict(values)
        print(f"{values} -> {output} (target {target})")
    print("=" * 60)
    print(f"Final mean squared error: {history[-1]:.6f}")

    plot_path = os.getenv('FEEDFORWARD_PLOT')
    if plot_path:
        plot_training_history(history, path=plot_path)


if __name__ == '__main__':
    main()
