import logging
from typing import NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .activations import sigmoid
from .datasets import LabeledRecord, ensure_records, parse_logistic_dataset
from .errors import ErrorKind, TrainingError
from .losses import accuracy_score, binary_cross_entropy_loss
from .options import LOGISTIC_EPOCHS, LOGISTIC_LEARNING_RATE, validate_training_options

# Below this |w1| the decision boundary is treated as vertical/undefined.
BOUNDARY_EPSILON = 1e-6


class LogisticModel(NamedTuple):
    """A linear decision boundary squashed through a sigmoid.

    Attributes:
        weights: One weight per feature, ``(w0, w1)``.
        bias: Offset added before the sigmoid.
        accuracy: Fraction of training records classified correctly at 0.5.
    """
    weights: Tuple[float, float]
    bias: float
    accuracy: float

    def predict(self, features) -> float:
        """Probability that ``features`` belongs to class 1."""
        return float(sigmoid(np.dot(self.weights, np.asarray(features, dtype=float)[:2]) + self.bias))

    def boundary(self, x: float) -> Optional[float]:
        """Second-feature value where the predicted probability is exactly 0.5.

        Returns None when the boundary cannot be written as a function of the
        first feature.
        """
        w0, w1 = self.weights
        if abs(w1) <= BOUNDARY_EPSILON:
            return None
        return (-self.bias - w0 * x) / w1

    def summary(self) -> str:
        return (
            f"Logistic regression:\n"
            f"  Weights: {self.weights[0]:.2f}, {self.weights[1]:.2f}\n"
            f"  Bias: {self.bias:.2f}\n"
            f"  Accuracy: {self.accuracy * 100:.2f}%"
        )


def train_logistic_regression(
    dataset: Sequence[LabeledRecord],
    learning_rate: float = LOGISTIC_LEARNING_RATE,
    epochs: int = LOGISTIC_EPOCHS,
    log_every: int = 0,
) -> LogisticModel:
    """
    Trains binary logistic regression with full-batch gradient descent.

    Weights and bias start at zero, so the result is fully deterministic.
    Every epoch accumulates the gradient of the cross-entropy over the whole
    dataset, then takes one step:

        err     = sigmoid(w·x + b) - label      (per record)
        w[i]   -= (learning_rate / n) * Σ err * x[i]
        b      -= (learning_rate / n) * Σ err

    The epoch count is fixed; there is no convergence check.

    Args:
        dataset: Validated ``LabeledRecord`` rows, or raw rows that
                 ``parse_logistic_dataset`` accepts.
        learning_rate: Step size.
        epochs: Number of full passes over the data.
        log_every: Log the loss at debug level every ``log_every`` epochs (0 disables).

    Returns:
        The fitted ``LogisticModel``.

    Raises:
        DatasetError: If raw rows fail validation.
        TrainingError: ``EmptyDataset`` for zero rows, ``InvalidOptions`` for bad options.
    """
    learning_rate, epochs = validate_training_options(learning_rate, epochs)
    records = ensure_records(dataset, LabeledRecord, parse_logistic_dataset)
    n = len(records)
    if n == 0:
        raise TrainingError(
            ErrorKind.EMPTY_DATASET,
            "Logistic regression needs at least one labeled apple.",
        )

    X = np.array([record.features[:2] for record in records], dtype=float)
    y = np.array([record.label for record in records], dtype=float)

    weights = np.zeros(2)
    bias = 0.0
    scale = learning_rate / n

    logging.info(f"Training logistic regression on {n} records: learning_rate={learning_rate}, epochs={epochs}")
    for epoch in range(epochs):
        predictions = sigmoid(X @ weights + bias)
        errors = predictions - y

        grad_w = X.T @ errors
        grad_b = np.sum(errors)

        weights = weights - scale * grad_w
        bias -= scale * grad_b

        if log_every and (epoch % log_every == 0 or epoch == epochs - 1):
            loss, _ = binary_cross_entropy_loss(predictions, y)
            logging.debug(f"Epoch {epoch+1}/{epochs} - loss: {loss:.5f}")

    accuracy = accuracy_score(sigmoid(X @ weights + bias), y)

    model = LogisticModel((float(weights[0]), float(weights[1])), float(bias), accuracy)
    logging.info(f"Logistic regression finished with accuracy {accuracy:.2%}")
    return model
