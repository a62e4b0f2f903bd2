import numpy as np
from typing import Optional, Tuple, Union
import logging

from .activations import Activation, get_activation


class Layer:
    """
    Represents a single fully connected layer, performing vectorized operations.

    Conceptually, a layer consists of a few 'neurons', where each neuron
    computes a weighted sum of its inputs, adds a bias, and applies an activation
    function. This implementation does that for a whole batch at once using
    matrix operations.

    Key Attributes:
        weights (np.ndarray): Weight matrix of shape (output_size, input_size). Each row
                               holds the weights of one neuron.
        biases (np.ndarray): Bias vector of shape (output_size,).
        activation_fn (Activation): The activation applied element-wise to the
                                    weighted sum plus bias.
        z_values (np.ndarray): Pre-activation values from the last training forward pass.
                               Shape: (batch_size, output_size).
        activations (np.ndarray): Layer outputs from the last training forward pass.
                                  Shape: (batch_size, output_size).
        inputs (np.ndarray): Inputs from the last training forward pass.
                             Shape: (batch_size, input_size).
        gradients (np.ndarray): Summed gradients of the loss w.r.t. the weights.
                                Shape: (output_size, input_size).
        bias_gradients (np.ndarray): Summed gradients of the loss w.r.t. the biases.
                                     Shape: (output_size,).
    """

    def __init__(
        self,
        input_size: int,
        output_size: int,
        activation: Union[str, Activation] = 'sigmoid',
        init_scale: float = 0.5,
        rng: Optional[np.random.Generator] = None,
        initial_weights: Optional[np.ndarray] = None,  # Expected shape (output_size, input_size)
        initial_biases: Optional[np.ndarray] = None,   # Expected shape (output_size,)
        id: int = 0,
    ):
        """
        Initializes the layer.

        Args:
            input_size: Number of input features (size of the previous layer).
            output_size: Number of neurons in this layer.
            activation: Activation function identifier (e.g., 'sigmoid') or an Activation instance.
            init_scale: Weights are drawn uniformly from (-init_scale, init_scale).
            rng: Random generator used for weight initialization.
            initial_weights: Optional pre-defined weight matrix. If provided, overrides random init.
                             Must have shape (output_size, input_size).
            initial_biases: Optional pre-defined bias vector. Defaults to zeros.
                            Must have shape (output_size,).
            id: An identifier for the layer (for logging/debugging).
        """
        self.input_size = input_size
        self.output_size = output_size
        self.id = id

        if isinstance(activation, str):
            self.activation_fn = get_activation(activation)
        elif isinstance(activation, Activation):
            self.activation_fn = activation
        else:
            raise ValueError(f"Layer {id}: Invalid activation type '{type(activation)}'.")

        if initial_weights is not None:
            initial_weights = np.asarray(initial_weights, dtype=float)
            if initial_weights.shape != (output_size, input_size):
                raise ValueError(
                    f"Layer {id}: Initial weights shape {initial_weights.shape} "
                    f"does not match expected shape ({output_size}, {input_size})"
                )
            self.weights = initial_weights.copy()
            logging.debug(f"Layer #{self.id}: Using provided initial weights.")
        else:
            if rng is None:
                raise ValueError(f"Layer {id}: A random generator is required when no initial weights are given.")
            self.weights = rng.uniform(-init_scale, init_scale, (output_size, input_size))
            logging.debug(f"Layer #{self.id}: Initializing weights uniformly in (-{init_scale}, {init_scale}).")

        if initial_biases is not None:
            initial_biases = np.asarray(initial_biases, dtype=float)
            if initial_biases.shape != (output_size,):
                raise ValueError(
                    f"Layer {id}: Initial biases shape {initial_biases.shape} "
                    f"does not match expected shape ({output_size},)"
                )
            self.biases = initial_biases.copy()
        else:
            self.biases = np.zeros(output_size, dtype=float)

        # Placeholders for values computed during the training forward pass
        self.z_values    = None
        self.activations = None
        self.inputs      = None

        self.gradients      = np.zeros_like(self.weights)
        self.bias_gradients = np.zeros_like(self.biases)

        logging.debug(
            f"Layer #{self.id} created: input_size={input_size}, "
            f"output_size={output_size}, activation={self.activation_fn.__class__.__name__}, "
            f"weight_shape={self.weights.shape}, bias_shape={self.biases.shape}"
        )

    def _as_batch(self, inputs: np.ndarray) -> np.ndarray:
        inputs = np.asarray(inputs, dtype=float)
        if inputs.ndim == 1:
            if inputs.shape[0] != self.input_size:
                raise ValueError(f"Layer {self.id}: Expected {self.input_size} inputs for a single sample, got {inputs.shape[0]}")
            return inputs.reshape(1, -1)
        if inputs.ndim == 2:
            if inputs.shape[1] != self.input_size:
                raise ValueError(f"Layer {self.id}: Expected input features {self.input_size}, got {inputs.shape[1]}")
            return inputs
        raise ValueError(f"Layer {self.id}: Unexpected input dimensions: {inputs.shape}. Expected 1D or 2D array.")

    def activate(self, inputs: np.ndarray) -> np.ndarray:
        """
        Computes the layer output without caching anything.

        Used for prediction so that a trained layer can be read concurrently.

        Args:
            inputs: Input data of shape (batch_size, input_size) or (input_size,).

        Returns:
            Output activations of shape (batch_size, output_size).
        """
        inputs = self._as_batch(inputs)
        return self.activation_fn.forward(np.dot(inputs, self.weights.T) + self.biases)

    def forward(self, inputs: np.ndarray) -> np.ndarray:
        """
        Performs the training forward pass and caches what backward() needs.

        Computes Z = X @ W.T + b, followed by A = activation_fn(Z).

        Args:
            inputs: Input data matrix of shape (batch_size, input_size).

        Returns:
            Output activations matrix of shape (batch_size, output_size).
        """
        inputs = self._as_batch(inputs)
        self.inputs = inputs

        # (batch, in) @ (in, out) + (out,) -> (batch, out)
        z = np.dot(inputs, self.weights.T) + self.biases
        self.z_values = z

        a = self.activation_fn.forward(z)
        self.activations = a
        return a

    def backward(self, gradients: np.ndarray, pre_activation: bool = False) -> np.ndarray:
        """
        Performs the backward pass through the layer.

        Computes the summed gradients w.r.t. the weights (dW) and biases (db),
        and the gradient w.r.t. the layer inputs, which is passed to the
        previous layer.

        Args:
            gradients: Gradient of the loss w.r.t. this layer's output activations
                       (dL/dA), shape (batch_size, output_size).
            pre_activation: If True, ``gradients`` is already dL/dZ (e.g. the
                            Sigmoid + Binary Cross-Entropy shortcut) and the
                            activation derivative is not applied again.

        Returns:
            Gradient of the loss w.r.t. the inputs of this layer (dL/dX_prev).
            Shape: (batch_size, input_size).

        Raises:
            ValueError: If the incoming gradient shape is incorrect.
            RuntimeError: If forward() hasn't been called.
        """
        if self.z_values is None or self.inputs is None:
            raise RuntimeError(f"Layer {self.id}: Must call forward() before backward().")

        if gradients.ndim == 1:
            gradients = gradients.reshape(1, -1)
        if gradients.shape != self.z_values.shape:
            raise ValueError(f"Layer {self.id}: Expected gradient shape {self.z_values.shape}, got {gradients.shape}.")

        # 1. dL/dZ = dL/dA * dA/dZ
        if pre_activation:
            delta = gradients
        else:
            delta = gradients * self.activation_fn.backward(self.z_values)

        # 2. dL/dW summed over the batch: delta.T @ X -> (out, in)
        self.gradients = np.dot(delta.T, self.inputs)

        # 3. dL/db summed over the batch
        self.bias_gradients = np.sum(delta, axis=0)

        # 4. dL/dX_prev = delta @ W, computed with the weights used in forward()
        return np.dot(delta, self.weights)

    def update(self, learning_rate: float, batch_size: int):
        """
        Applies one gradient-descent step with the summed gradients.

            W = W - (learning_rate / batch_size) * dL/dW
            b = b - (learning_rate / batch_size) * dL/db
        """
        if batch_size <= 0:
            raise ValueError("Batch size must be positive for gradient averaging.")

        scale = learning_rate / batch_size
        self.weights -= scale * self.gradients
        self.biases -= scale * self.bias_gradients

    def zero_grad(self):
        """Resets the summed gradients for weights and biases to zero."""
        self.gradients.fill(0.0)
        self.bias_gradients.fill(0.0)

    def get_weights(self) -> Tuple[np.ndarray, np.ndarray]:
        """Returns copies of the current weights and biases of the layer."""
        return self.weights.copy(), self.biases.copy()

    def __repr__(self):
        return (f"Layer(id={self.id}, input_size={self.input_size}, "
                f"output_size={self.output_size}, "
                f"activation={self.activation_fn.__class__.__name__})")
