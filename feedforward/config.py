"""
config.py
~~~~~~~~~

Environment-driven configuration for training runs, plus logging setup.

Recognised environment variables:
- ``FEEDFORWARD_LAYERS``: comma-separated layer sizes, e.g. ``2,3,1``
- ``FEEDFORWARD_ACTIVATION``: ``sigmoid``, ``tanh`` or ``relu``
- ``FEEDFORWARD_LEARNING_RATE``: positive float
- ``FEEDFORWARD_EPOCHS``: positive integer
- ``FEEDFORWARD_SEED``: integer seed for weight initialization
- ``LOG_LEVEL``: standard logging level name
"""

import logging
import numbers
import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from feedforward.activations import get_activation
from feedforward.matrix import default_random_source
from feedforward.network import Network

DEFAULT_LAYERS = [2, 3, 1]
DEFAULT_ACTIVATION = 'sigmoid'
DEFAULT_LEARNING_RATE = 0.5
DEFAULT_EPOCHS = 100000
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: Optional[str] = None) -> None:
    """
    Set up logging for scripts that drive training.

    Args:
        level: Logging level name. Falls back to ``LOG_LEVEL`` from the
            environment, then to ``INFO``.
    """
    level_str = (level or os.getenv('LOG_LEVEL', 'INFO')).upper()
    log_level = getattr(logging, level_str, logging.INFO)

    logging.basicConfig(level=log_level, format=LOG_FORMAT)
    logging.getLogger('feedforward').setLevel(log_level)

    # matplotlib is chatty at DEBUG
    logging.getLogger('matplotlib').setLevel(logging.WARNING)


def _is_positive_int(value) -> bool:
    return (
        isinstance(value, numbers.Integral)
        and not isinstance(value, bool)
        and value >= 1
    )


def _parse_layers(raw: str) -> List[int]:
    try:
        return [int(part) for part in raw.split(',') if part.strip()]
    except ValueError:
        raise ValueError(
            f"FEEDFORWARD_LAYERS must be comma-separated integers, got '{raw}'"
        ) from None


@dataclass
class TrainingConfig:
    """Settings for building and training a network."""

    layer_sizes: List[int] = field(default_factory=lambda: list(DEFAULT_LAYERS))
    activation: str = DEFAULT_ACTIVATION
    learning_rate: float = DEFAULT_LEARNING_RATE
    epochs: int = DEFAULT_EPOCHS
    seed: Optional[int] = None
    log_level: str = 'INFO'

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Check every setting.

        Raises:
            ValueError: If any value is out of range
        """
        if not isinstance(self.layer_sizes, list) or len(self.layer_sizes) < 2:
            raise ValueError(
                f"layer_sizes must list at least 2 layers, got {self.layer_sizes}"
            )
        if not all(_is_positive_int(size) for size in self.layer_sizes):
            raise ValueError(
                f"layer_sizes must be positive integers, got {self.layer_sizes}"
            )
        if not _is_positive_int(self.epochs):
            raise ValueError(f"epochs must be a positive integer, got {self.epochs}")
        if not isinstance(self.learning_rate, (int, float)) or self.learning_rate <= 0:
            raise ValueError(
                f"learning_rate must be a positive number, got {self.learning_rate}"
            )
        get_activation(self.activation)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'TrainingConfig':
        """
        Read settings from environment variables, using defaults for
        anything unset.

        Args:
            environ: Mapping to read from instead of ``os.environ``

        Raises:
            ValueError: If a variable cannot be parsed or is out of range
        """
        env = os.environ if environ is None else environ

        try:
            learning_rate = float(
                env.get('FEEDFORWARD_LEARNING_RATE', DEFAULT_LEARNING_RATE)
            )
            epochs = int(env.get('FEEDFORWARD_EPOCHS', DEFAULT_EPOCHS))
            seed = env.get('FEEDFORWARD_SEED')
            seed = int(seed) if seed not in (None, '') else None
        except ValueError as e:
            raise ValueError(f"Invalid training configuration: {e}") from e

        layers_raw = env.get('FEEDFORWARD_LAYERS')
        layer_sizes = (
            _parse_layers(layers_raw) if layers_raw else list(DEFAULT_LAYERS)
        )

        return cls(
            layer_sizes=layer_sizes,
            activation=env.get('FEEDFORWARD_ACTIVATION', DEFAULT_ACTIVATION),
            learning_rate=learning_rate,
            epochs=epochs,
            seed=seed,
            log_level=env.get('LOG_LEVEL', 'INFO').upper(),
        )

    def build_network(self) -> Network:
        """Construct a network from these settings, seeded by ``seed``."""
        return Network(
            self.layer_sizes,
            activation=self.activation,
            learning_rate=self.learning_rate,
            random_source=default_random_source(self.seed),
        )
