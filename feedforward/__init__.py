"""
feedforward package
~~~~~~~~~~~~~~~~~~~

Dense matrix algebra and a fully-connected feedforward network trained by
stochastic gradient-descent backpropagation, written from first principles.
"""

from feedforward.activations import (
    RELU,
    SIGMOID,
    TANH,
    Activation,
    ReLU,
    Sigmoid,
    Tanh,
    get_activation,
)
from feedforward.exceptions import (
    ConstructionSizeMismatch,
    DatasetSizeMismatch,
    DimensionMismatch,
    FeedforwardError,
    InvalidInputSize,
    InvalidTopology,
    MissingForwardPass,
)
from feedforward.matrix import Matrix, default_random_source
from feedforward.network import Network

__version__ = "1.0.0"
