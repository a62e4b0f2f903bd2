import math
import numbers
from typing import Tuple

from .errors import ErrorKind, TrainingError

# Defaults for the two gradient-descent trainers.
LOGISTIC_LEARNING_RATE = 0.05
LOGISTIC_EPOCHS = 2500
NEURAL_LEARNING_RATE = 0.5
NEURAL_EPOCHS = 4000


def validate_training_options(learning_rate: float, epochs: int) -> Tuple[float, int]:
    """Check gradient-descent options and return them normalized.

    Raises:
        TrainingError: ``InvalidOptions`` if ``learning_rate`` is not a finite
                       positive number or ``epochs`` is not a non-negative integer.
    """
    if (isinstance(learning_rate, bool) or not isinstance(learning_rate, numbers.Real)
            or not math.isfinite(learning_rate) or learning_rate <= 0):
        raise TrainingError(
            ErrorKind.INVALID_OPTIONS,
            f"learning_rate must be a finite positive number, got {learning_rate!r}.",
        )
    if isinstance(epochs, bool) or not isinstance(epochs, numbers.Integral) or epochs < 0:
        raise TrainingError(
            ErrorKind.INVALID_OPTIONS,
            f"epochs must be a non-negative integer, got {epochs!r}.",
        )
    return float(learning_rate), int(epochs)
