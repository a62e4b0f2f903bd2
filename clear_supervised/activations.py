import numpy as np
from typing import Union


class Activation:
    """Base class for all activation functions."""

    def forward(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Compute the activation function value.

        Args:
            x: Input data (scalar or numpy array).

        Returns:
            Activated output.
        """
        raise NotImplementedError

    def backward(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Compute the derivative of the activation function with respect to its input 'x'.
           Note: 'x' here is the *input* to the activation function (often denoted 'z').

        Args:
            x: Input data where the derivative is evaluated (scalar or numpy array).

        Returns:
            Derivative of the activation function evaluated at x.
        """
        raise NotImplementedError


class Sigmoid(Activation):
    """Sigmoid activation function.

    Mathematical form:
        forward: f(x) = 1 / (1 + e^-x)
        backward: f'(x) = f(x) * (1 - f(x))

    Very large |x| saturates towards 0 or 1 instead of overflowing.
    """

    # exp(500) is still finite in float64
    CLIP = 500.0

    def forward(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Compute sigmoid activation with clipping so exp(-x) cannot overflow."""
        clipped_x = np.clip(x, -self.CLIP, self.CLIP)
        return 1.0 / (1.0 + np.exp(-clipped_x))

    def backward(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Compute sigmoid derivative from the pre-activation input."""
        sig = self.forward(x)
        return sig * (1.0 - sig)


# Dictionary mapping activation function names to their classes
ACTIVATION_FUNCTIONS = {
    'sigmoid': Sigmoid,
}


def get_activation(name: str, **kwargs) -> Activation:
    """Factory function to get an activation function instance by name.

    Args:
        name: Name of the activation function (case-insensitive).
        **kwargs: Additional arguments to pass to the activation's constructor.

    Returns:
        An instance of the requested Activation class.

    Raises:
        ValueError: If the activation function name is not recognized.
    """
    name_lower = name.lower()
    if name_lower not in ACTIVATION_FUNCTIONS:
        raise ValueError(
            f"Unknown activation function '{name}'. "
            f"Available functions: {list(ACTIVATION_FUNCTIONS.keys())}"
        )
    return ACTIVATION_FUNCTIONS[name_lower](**kwargs)


_SIGMOID = Sigmoid()


def sigmoid(x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Module-level shortcut for ``Sigmoid().forward``."""
    return _SIGMOID.forward(x)
