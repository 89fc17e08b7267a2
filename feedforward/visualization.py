"""
visualization.py
~~~~~~~~~~~~~~~~

Plotting helpers for training runs.
"""

import base64
import logging
from io import BytesIO
from typing import Optional, Sequence

# Use non-GUI backend for matplotlib (scripts may run headless)
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

logger = logging.getLogger(__name__)


def plot_training_history(
    history: Sequence[float],
    path: Optional[str] = None,
    title: str = 'Training error'
) -> str:
    """
    Plot the per-epoch mean squared error returned by ``Network.train``.

    Args:
        history: Error value for each epoch
        path: If given, the PNG is also written to this file
        title: Plot title

    Returns:
        Base64-encoded PNG image string

    Raises:
        ValueError: If ``history`` is empty
    """
    if len(history) == 0:
        raise ValueError("Cannot plot an empty training history")

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.plot(range(1, len(history) + 1), history)
    ax.set_xlabel('Epoch')
    ax.set_ylabel('Mean squared error')
    ax.set_title(title)
    if min(history) > 0:
        ax.set_yscale('log')

    # Save image to a bytes buffer instead of a file
    buffer = BytesIO()
    fig.savefig(buffer, format='png', bbox_inches='tight')
    plt.close(fig)

    png = buffer.getvalue()
    if path is not None:
        with open(path, 'wb') as f:
            f.write(png)
        logger.info(f"Saved training curve to {path}")

    return base64.b64encode(png).decode('utf-8')
