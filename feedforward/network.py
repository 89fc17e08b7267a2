"""
network.py
~~~~~~~~~~

Fully-connected feedforward network trained by per-sample stochastic
gradient descent.

Layer ``i`` maps a column of ``layers[i]`` activations to ``layers[i+1]``
activations through ``weights[i]`` (shape ``(layers[i+1], layers[i])``) and
``biases[i]`` (shape ``(layers[i+1], 1)``). A forward pass caches every layer
output; the following backward pass reads that cache to update the weights
in place.
"""

import logging
import numbers
import time
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from feedforward.activations import SIGMOID, Activation, get_activation
from feedforward.exceptions import (
    DatasetSizeMismatch,
    InvalidInputSize,
    InvalidTopology,
    MissingForwardPass,
)
from feedforward.matrix import Matrix, RandomSource, default_random_source

# Configure module logger
logger = logging.getLogger(__name__)

Sample = Union[Matrix, Sequence[float]]
ProgressCallback = Callable[[Dict[str, Any]], None]


def _as_column(values: Sample) -> Matrix:
    """Turn a sequence of floats into a column matrix; pass matrices through."""
    if isinstance(values, Matrix):
        return values
    return Matrix.from_vector(list(values))


def _is_positive_int(value: Any) -> bool:
    return (
        isinstance(value, numbers.Integral)
        and not isinstance(value, bool)
        and value >= 1
    )


def _mean_squared_error(outputs: Matrix, targets: Matrix) -> float:
    error = targets.subtract(outputs)
    return sum(value * value for value in error.data) / len(error.data)


class Network:
    """
    A multi-layer perceptron.

    Attributes:
        layers: Number of neurons in each layer, e.g. ``[2, 3, 1]``
        weights: One ``(layers[i+1], layers[i])`` matrix per layer transition
        biases: One ``(layers[i+1], 1)`` column per layer transition
        activation_cache: Input and layer outputs from the latest forward pass
        activation: Activation applied after every layer
        learning_rate: Step scale applied to every weight and bias update
    """

    def __init__(
        self,
        layers: Sequence[int],
        activation: Union[str, Activation] = SIGMOID,
        learning_rate: float = 0.5,
        random_source: Optional[RandomSource] = None
    ):
        """
        Build the network with weights and biases drawn from [0, 1).

        Args:
            layers: Layer sizes from input to output, at least two of them
            activation: Activation instance or name (``'sigmoid'``, ...)
            learning_rate: Step scale used by :meth:`back_propagate`
            random_source: Callable returning uniform floats in [0, 1).
                Defaults to an unseeded numpy generator.

        Raises:
            InvalidTopology: If fewer than two layers are given or any layer
                size is not a positive integer
        """
        layers = list(layers)
        if len(layers) < 2:
            raise InvalidTopology(
                f"A network needs at least 2 layers, got {len(layers)}: {layers}"
            )
        for size in layers:
            if not _is_positive_int(size):
                raise InvalidTopology(
                    f"Layer sizes must be positive integers, got {layers}"
                )

        if random_source is None:
            random_source = default_random_source()

        self.layers: List[int] = [int(size) for size in layers]
        self.activation: Activation = get_activation(activation)
        self.learning_rate = float(learning_rate)
        self.weights: List[Matrix] = []
        self.biases: List[Matrix] = []
        self.activation_cache: List[Matrix] = []

        for n_in, n_out in zip(self.layers[:-1], self.layers[1:]):
            self.weights.append(Matrix.random(n_out, n_in, random_source))
            self.biases.append(Matrix.random(n_out, 1, random_source))

        logger.info(
            f"Created network with layers {self.layers}, "
            f"activation={self.activation.name}, "
            f"learning_rate={self.learning_rate}"
        )

    @property
    def activations(self) -> List[Matrix]:
        """The input and layer outputs cached by the latest forward pass."""
        return self.activation_cache

    def __repr__(self) -> str:
        return (
            f"<Network layers={self.layers} "
            f"activation={self.activation.name} "
            f"learning_rate={self.learning_rate}>"
        )

    # ------------------------------------------------------------------
    # Forward / backward
    # ------------------------------------------------------------------

    def feed_forward(self, inputs: Matrix) -> Matrix:
        """
        Propagate a column of inputs through every layer.

        Overwrites the activation cache with ``[inputs, out_1, ..., out_L]``.
        A call to :meth:`back_propagate` consumes the cache of the most
        recent forward pass, so the two must be paired.

        Args:
            inputs: Column matrix of shape ``(layers[0], 1)``

        Returns:
            Matrix: Output column of shape ``(layers[-1], 1)``

        Raises:
            InvalidInputSize: If ``inputs`` has the wrong shape
        """
        if inputs.rows != self.layers[0] or inputs.cols != 1:
            raise InvalidInputSize(
                f"Expected an input column of {self.layers[0]} values, "
                f"got a {inputs.rows}x{inputs.cols} matrix"
            )

        current = inputs
        self.activation_cache = [current]

        for weights, biases in zip(self.weights, self.biases):
            current = (
                weights.dot_multiply(current)
                .add(biases)
                .map(self.activation.forward)
            )
            self.activation_cache.append(current)

        return current

    def back_propagate(self, outputs: Matrix, targets: Matrix) -> None:
        """
        Update weights and biases from one (output, target) pair.

        Walks the layers from last to first. Each layer's weights are
        updated before the error is pushed back through them, so the error
        reaching layer ``i - 1`` is computed with the already-updated
        ``weights[i]``.

        Args:
            outputs: Output of the immediately preceding :meth:`feed_forward`
            targets: Expected output column, same shape as ``outputs``

        Raises:
            MissingForwardPass: If no forward pass has filled the cache
            DimensionMismatch: If ``targets`` and ``outputs`` differ in shape
        """
        if len(self.activation_cache) != len(self.layers):
            raise MissingForwardPass(
                "back_propagate requires the activation cache of a "
                "preceding feed_forward call"
            )

        derivative = self.activation.derivative
        learning_rate = self.learning_rate

        errors = targets.subtract(outputs)
        gradients = outputs.map(derivative)

        for i in reversed(range(len(self.weights))):
            gradients = (
                gradients.elementwise_multiply(errors)
                .map(lambda x: x * learning_rate)
            )

            self.weights[i] = self.weights[i].add(
                gradients.dot_multiply(self.activation_cache[i].transpose())
            )
            self.biases[i] = self.biases[i].add(gradients)

            errors = self.weights[i].transpose().dot_multiply(errors)
            gradients = self.activation_cache[i].map(derivative)

    # ------------------------------------------------------------------
    # Training and inference
    # ------------------------------------------------------------------

    def train(
        self,
        inputs: Sequence[Sample],
        targets: Sequence[Sample],
        epochs: int,
        callback: Optional[ProgressCallback] = None
    ) -> List[float]:
        """
        Train with one forward/backward cycle per sample, in dataset order.

        A progress line is logged every ``epochs // 100`` epochs (every
        epoch when ``epochs < 100``), and ``callback`` receives a dict with
        ``epoch``, ``total_epochs``, ``error`` and ``elapsed_time`` at the
        same points.

        Args:
            inputs: Input vectors, each of length ``layers[0]``
            targets: Target vectors, each of length ``layers[-1]``
            epochs: Number of passes over the dataset
            callback: Optional progress hook

        Returns:
            list: Mean squared error of each epoch, measured on the outputs
            produced during that epoch

        Raises:
            DatasetSizeMismatch: If inputs and targets differ in count
            ValueError: If epochs is not a positive integer
        """
        if len(inputs) != len(targets):
            raise DatasetSizeMismatch(
                f"Got {len(inputs)} inputs but {len(targets)} targets"
            )
        if not _is_positive_int(epochs):
            raise ValueError(f"epochs must be a positive integer, got {epochs}")

        samples = [
            (_as_column(x), _as_column(y)) for x, y in zip(inputs, targets)
        ]
        report_every = 1 if epochs < 100 else epochs // 100
        history: List[float] = []
        start = time.time()

        logger.info(
            f"Training on {len(samples)} samples for {epochs} epochs"
        )

        for epoch in range(1, epochs + 1):
            epoch_error = 0.0
            for index, (x, y) in enumerate(samples):
                outputs = self.feed_forward(x)
                sample_error = _mean_squared_error(outputs, y)
                epoch_error += sample_error
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug(
                        f"Epoch {epoch} sample {index}: error {sample_error:.6f}"
                    )
                self.back_propagate(outputs, y)

            mean_error = epoch_error / len(samples) if samples else 0.0
            history.append(mean_error)

            if epoch % report_every == 0:
                logger.info(f"Epoch {epoch} of {epochs}: error {mean_error:.6f}")
                if callback is not None:
                    callback({
                        'epoch': epoch,
                        'total_epochs': epochs,
                        'error': mean_error,
                        'elapsed_time': time.time() - start,
                    })

        logger.info(
            f"Training finished in {time.time() - start:.2f}s, "
            f"final error {history[-1]:.6f}"
        )
        return history

    def predict(self, values: Sequence[float]) -> List[float]:
        """
        Run a forward pass on a plain sequence of floats.

        Example:
            >>> net = Network([2, 3, 1])
            >>> len(net.predict([0.0, 1.0]))
            1
        """
        return list(self.feed_forward(_as_column(values)).data)

    def evaluate(
        self,
        inputs: Sequence[Sample],
        targets: Sequence[Sample]
    ) -> float:
        """
        Mean squared error over a dataset. Weights are left untouched.

        Raises:
            DatasetSizeMismatch: If inputs and targets differ in count
        """
        if len(inputs) != len(targets):
            raise DatasetSizeMismatch(
                f"Got {len(inputs)} inputs but {len(targets)} targets"
            )
        if len(inputs) == 0:
            return 0.0

        total = sum(
            _mean_squared_error(self.feed_forward(_as_column(x)), _as_column(y))
            for x, y in zip(inputs, targets)
        )
        return total / len(inputs)
