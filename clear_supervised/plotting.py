"""
matplotlib renderers for the three fitted models.

Each function draws onto ``ax`` when given one, otherwise onto a fresh
figure, and returns the Axes so callers can keep styling or save it.
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import Optional, Sequence, Tuple

from .datasets import LabeledRecord, LinearRecord
from .linear import LinearModel
from .logistic import LogisticModel
from .network import NeuralModel


def value_range(values: Sequence[float]) -> Tuple[float, float]:
    """Min/max padded by 10% of the span, for nicer axes.

    A zero span widens to +/-1 and an empty input falls back to (-0.1, 1.1).
    """
    if len(values) == 0:
        return -0.1, 1.1
    low, high = float(min(values)), float(max(values))
    if low == high:
        return low - 1, high + 1
    padding = (high - low) * 0.1
    return low - padding, high + padding


def _axes(ax: Optional[plt.Axes], title: str) -> plt.Axes:
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 4.5))
    ax.set_title(title)
    ax.grid(True, alpha=0.2)
    return ax


def _scatter_labeled(ax: plt.Axes, dataset: Sequence[LabeledRecord], colors: Tuple[str, str], names: Tuple[str, str]):
    features = np.array([record.features[:2] for record in dataset], dtype=float).reshape(-1, 2)
    labels = np.array([record.label for record in dataset], dtype=int)
    for label in (0, 1):
        mask = labels == label
        if np.any(mask):
            ax.scatter(features[mask, 0], features[mask, 1], c=colors[label],
                       edgecolor='k', s=60, label=names[label], zorder=3)


def plot_linear_fit(dataset: Sequence[LinearRecord], model: LinearModel, ax: Optional[plt.Axes] = None) -> plt.Axes:
    """Scatter of (hours, score) with the fitted line across the padded x range."""
    ax = _axes(ax, "Linear Regression")
    hours = [record.hours for record in dataset]
    scores = [record.score for record in dataset]
    x_min, x_max = value_range(hours)

    ax.scatter(hours, scores, c='#1d4ed8', edgecolor='k', s=40, label='Sessions', zorder=3)
    line_x = np.array([x_min, x_max])
    ax.plot(line_x, model.predict(line_x), c='#ef4444', lw=2,
            label=f'score = {model.intercept:.2f} + {model.slope:.2f} x hours')

    ax.set_xlim(x_min, x_max)
    ax.set_ylim(*value_range(scores))
    ax.set_xlabel("Hours tasted")
    ax.set_ylabel("Sweetness score")
    ax.legend()
    return ax


def plot_logistic_boundary(dataset: Sequence[LabeledRecord], model: LogisticModel, ax: Optional[plt.Axes] = None) -> plt.Axes:
    """Points coloured by label plus the 0.5-probability decision boundary."""
    ax = _axes(ax, "Logistic Regression")
    x_min, x_max = value_range([record.features[0] for record in dataset])
    y_min, y_max = value_range([record.features[1] for record in dataset])

    _scatter_labeled(ax, dataset, ('#ef4444', '#16a34a'), ('Not ready', 'Ready'))

    y_start, y_end = model.boundary(x_min), model.boundary(x_max)
    if y_start is not None:
        ax.plot([x_min, x_max], [y_start, y_end], c='#0ea5e9', lw=2, label='Decision boundary')

    ax.set_xlim(x_min, x_max)
    ax.set_ylim(y_min, y_max)
    ax.set_xlabel("Crunchiness")
    ax.set_ylabel("Color depth")
    ax.legend()
    return ax


def plot_neural_confidence(dataset: Sequence[LabeledRecord], model: NeuralModel, ax: Optional[plt.Axes] = None,
                           grid_steps: int = 40) -> plt.Axes:
    """Shades the network's confidence over a sampling grid, then scatters the points.

    ``predict`` is evaluated on a (grid_steps + 1) x (grid_steps + 1) grid
    spanning the padded feature ranges.
    """
    ax = _axes(ax, "Neural Network Confidence")
    x_min, x_max = value_range([record.features[0] for record in dataset])
    y_min, y_max = value_range([record.features[1] for record in dataset])

    xx, yy = np.meshgrid(np.linspace(x_min, x_max, grid_steps + 1),
                         np.linspace(y_min, y_max, grid_steps + 1))
    mesh_points = np.c_[xx.ravel(), yy.ravel()]
    confidence = model.predict_batch(mesh_points).reshape(xx.shape)

    contour = ax.contourf(xx, yy, confidence, levels=np.linspace(0.0, 1.0, 11), cmap=plt.cm.PuOr_r, alpha=0.6)
    plt.colorbar(contour, ax=ax, label="P(special)")

    _scatter_labeled(ax, dataset, ('#7c3aed', '#f97316'), ('Ordinary', 'Special'))

    ax.set_xlim(x_min, x_max)
    ax.set_ylim(y_min, y_max)
    ax.set_xlabel("Flavor surprise")
    ax.set_ylabel("Texture surprise")
    ax.legend()
    return ax


def plot_training_history(history: Sequence[float], ax: Optional[plt.Axes] = None) -> plt.Axes:
    """Per-epoch training loss."""
    ax = _axes(ax, "Training History")
    ax.plot(np.arange(1, len(history) + 1), history, label='Training Loss')
    ax.set_xlabel('Epoch')
    ax.set_ylabel('Loss (BCE)')
    ax.set_ylim(bottom=0)
    ax.legend()
    return ax
