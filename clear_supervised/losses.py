import numpy as np
from typing import Tuple


def binary_cross_entropy_loss(outputs: np.ndarray, targets: np.ndarray) -> Tuple[float, np.ndarray]:
    """
    Computes Binary Cross-Entropy loss for a Sigmoid output and its gradient
    w.r.t. the *inputs* to that Sigmoid (often denoted 'z').

    Loss = - (1/N) * Σ_samples [ target * log(output) + (1 - target) * log(1 - output) ]

    Gradient (dL/dz) per sample = output - target
        The Sigmoid derivative cancels against the BCE derivative, leaving the
        plain prediction error. The gradient is NOT divided by N here: layers
        sum it over the batch and divide by the batch size when they update.

    Args:
        outputs: Predicted probabilities from Sigmoid (batch_size, 1).
        targets: True labels (0 or 1) (batch_size, 1).

    Returns:
        Tuple containing:
            - bce_value (float): The binary cross-entropy loss.
            - gradient (np.ndarray): Per-sample error (output - target).
    """
    if outputs.shape != targets.shape:
        raise ValueError(f"BCE Loss: Output shape {outputs.shape} must match target shape {targets.shape}")
    num_samples = outputs.shape[0]
    if num_samples == 0:
        return 0.0, np.zeros_like(outputs)

    # Clip outputs to avoid log(0); only the reported loss uses the clipped values
    epsilon = 1e-15
    outputs_clipped = np.clip(outputs, epsilon, 1.0 - epsilon)

    term1 = targets * np.log(outputs_clipped)
    term2 = (1 - targets) * np.log(1 - outputs_clipped)
    loss = -np.sum(term1 + term2) / num_samples

    gradient = outputs - targets
    return float(loss), gradient


def accuracy_score(probabilities: np.ndarray, labels: np.ndarray) -> float:
    """Fraction of labels matched at a 0.5 threshold (ties count as class 1)."""
    probabilities = np.asarray(probabilities, dtype=float).ravel()
    labels = np.asarray(labels).ravel()
    if probabilities.size == 0:
        return 0.0
    predicted = (probabilities >= 0.5).astype(int)
    return float(np.mean(predicted == labels))
