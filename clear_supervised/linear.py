import logging
from typing import NamedTuple, Sequence

import numpy as np

from .datasets import LinearRecord, ensure_records, parse_linear_dataset
from .errors import ErrorKind, TrainingError

# Below this the normal-equations denominator is treated as zero.
DEGENERATE_EPSILON = 1e-12


class LinearModel(NamedTuple):
    """A fitted line ``score = intercept + slope * hours``.

    Attributes:
        slope: Change in score per extra hour.
        intercept: Score predicted at zero hours.
        error: Mean absolute residual over the training set.
    """
    slope: float
    intercept: float
    error: float

    def predict(self, hours):
        """Evaluate the line at ``hours`` (scalar or array)."""
        return self.intercept + self.slope * np.asarray(hours, dtype=float)

    def summary(self) -> str:
        return (
            f"Linear regression: score = {self.intercept:.2f} + {self.slope:.2f} x hours\n"
            f"  Mean absolute error: {self.error:.2f}"
        )


def train_linear_regression(dataset: Sequence[LinearRecord]) -> LinearModel:
    """
    Fits a line to (hours, score) pairs with ordinary least squares.

    Closed form, no iteration:
        slope     = (n*Σxy - Σx*Σy) / (n*Σx² - (Σx)²)
        intercept = (Σy - slope*Σx) / n

    Args:
        dataset: Validated ``LinearRecord`` rows, or raw rows that
                 ``parse_linear_dataset`` accepts.

    Returns:
        The fitted ``LinearModel``.

    Raises:
        DatasetError: If raw rows fail validation.
        TrainingError: ``InsufficientData`` for fewer than two rows,
                       ``DegenerateInput`` if every row has the same hours.
    """
    records = ensure_records(dataset, LinearRecord, parse_linear_dataset)
    n = len(records)
    if n < 2:
        raise TrainingError(
            ErrorKind.INSUFFICIENT_DATA,
            "Linear regression needs at least two sessions with different hours.",
        )

    x = np.array([record.hours for record in records], dtype=float)
    y = np.array([record.score for record in records], dtype=float)

    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = np.dot(x, y)
    sum_xx = np.dot(x, x)

    denominator = n * sum_xx - sum_x * sum_x
    if abs(denominator) < DEGENERATE_EPSILON:
        raise TrainingError(
            ErrorKind.DEGENERATE_INPUT,
            "Provide varied hour values so the line has a slope.",
        )

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    error = np.mean(np.abs((intercept + slope * x) - y))

    model = LinearModel(float(slope), float(intercept), float(error))
    logging.info(f"Fitted line on {n} records: slope={model.slope:.4f}, intercept={model.intercept:.4f}, error={model.error:.4f}")
    return model
