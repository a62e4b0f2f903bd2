import numpy as np
from typing import Dict, List, Optional, Sequence, Tuple, Union
import logging

from .datasets import LabeledRecord, ensure_records, parse_neural_dataset
from .errors import ErrorKind, TrainingError
from .layer import Layer
from .losses import accuracy_score, binary_cross_entropy_loss
from .options import NEURAL_EPOCHS, NEURAL_LEARNING_RATE, validate_training_options

# Fixed topology: 2 inputs -> 2 hidden sigmoid units -> 1 sigmoid output.
LAYER_SIZES = (2, 2, 1)
INIT_SCALE = 0.5

# Process-level random source used when the caller does not pass one.
DEFAULT_RNG = np.random.default_rng()

RandomSource = Union[None, int, np.random.Generator]


def resolve_rng(rng: RandomSource) -> np.random.Generator:
    """Turn a seed, a Generator or None into a Generator.

    None means ``DEFAULT_RNG``, so unseeded calls draw different weights.
    """
    if rng is None:
        return DEFAULT_RNG
    return np.random.default_rng(rng)


class Network:
    """
    A small feedforward sigmoid network trained with full-batch gradient descent.

    Manages a sequence of layers, the forward pass, backward pass (backpropagation),
    parameter updates and the training loop. The output layer is assumed to be a
    single sigmoid unit trained with binary cross-entropy.
    """

    def __init__(
        self,
        layer_sizes: Sequence[int] = LAYER_SIZES,
        rng: RandomSource = None,
        init_scale: float = INIT_SCALE,
        initial_layer_weights: Optional[List[np.ndarray]] = None,  # List of (output_size, input_size) arrays
        initial_layer_biases: Optional[List[np.ndarray]] = None,   # List of (output_size,) arrays
    ):
        """
        Initializes the network.

        Args:
            layer_sizes: Neurons per layer, from the input dimension to the output dimension.
            rng: Seed or Generator for weight initialization; None uses ``DEFAULT_RNG``.
            init_scale: Weights are drawn uniformly from (-init_scale, init_scale).
            initial_layer_weights: Optional pre-defined weight matrices, one per layer.
            initial_layer_biases: Optional pre-defined bias vectors, one per layer.
        """
        if len(layer_sizes) < 2:
            raise ValueError("Network must have at least an input and an output layer size.")

        num_layers = len(layer_sizes) - 1
        if initial_layer_weights is not None and len(initial_layer_weights) != num_layers:
            raise ValueError(f"Length of initial_layer_weights ({len(initial_layer_weights)}) "
                             f"must match number of layers ({num_layers}).")
        if initial_layer_biases is not None and len(initial_layer_biases) != num_layers:
            raise ValueError(f"Length of initial_layer_biases ({len(initial_layer_biases)}) "
                             f"must match number of layers ({num_layers}).")

        generator = resolve_rng(rng)
        self.layer_sizes = tuple(layer_sizes)
        self.layers: List[Layer] = []
        for i in range(num_layers):
            self.layers.append(Layer(
                input_size      = layer_sizes[i],
                output_size     = layer_sizes[i+1],
                activation      = 'sigmoid',
                init_scale      = init_scale,
                rng             = generator,
                initial_weights = initial_layer_weights[i] if initial_layer_weights else None,
                initial_biases  = initial_layer_biases[i] if initial_layer_biases else None,
                id              = i,
            ))

        self.training_history: Dict[str, List] = {
            'epoch': [],
            'loss': [],
        }

        logging.debug(f"Created neural network with architecture: {list(self.layer_sizes)}")

    def forward(self, inputs: np.ndarray) -> np.ndarray:
        """Training forward pass; every layer caches what backward() needs."""
        current_output = inputs
        for layer in self.layers:
            current_output = layer.forward(current_output)
        return current_output

    def backward(self, initial_gradient: np.ndarray):
        """
        Backpropagates the loss gradient through all layers.

        Args:
            initial_gradient: dL/dZ of the output layer. With a sigmoid output and
                              binary cross-entropy this is simply (output - target),
                              so the output layer skips its own activation derivative.
        """
        current_gradient = initial_gradient
        for i, layer in enumerate(reversed(self.layers)):
            # The returned gradient is dL/dA for the previous layer
            current_gradient = layer.backward(current_gradient, pre_activation=(i == 0))

    def update(self, learning_rate: float, batch_size: int):
        for layer in self.layers:
            layer.update(learning_rate, batch_size)

    def zero_grad(self):
        for layer in self.layers:
            layer.zero_grad()

    def train_batch(self, X_batch: np.ndarray, y_batch: np.ndarray, learning_rate: float) -> float:
        """
        One full-batch step: forward, loss, backward, update.

        Returns:
            The loss computed before the update.
        """
        self.zero_grad()
        outputs = self.forward(X_batch)
        loss, initial_gradient = binary_cross_entropy_loss(outputs, y_batch)
        if not np.isfinite(loss):
            logging.warning(f"Non-finite loss ({loss}) during training.")
        self.backward(initial_gradient)
        self.update(learning_rate, X_batch.shape[0])
        return loss

    def fit(
        self,
        X: np.ndarray,
        y: np.ndarray,
        epochs: int,
        learning_rate: float,
        log_every: int = 0,
    ) -> Dict[str, List]:
        """
        Trains for a fixed number of epochs; every epoch is one full-batch step.

        There is no convergence check or early stopping, so the cost is always
        ``epochs`` passes over the data.

        Args:
            X: Training inputs (num_samples, input_dim).
            y: Training targets (num_samples, 1).
            epochs: Number of training epochs.
            learning_rate: Step size.
            log_every: Log the loss at debug level every ``log_every`` epochs (0 disables).

        Returns:
            The training history (epoch and loss per epoch).
        """
        X = np.asarray(X, dtype=float)
        y = np.asarray(y, dtype=float).reshape(-1, 1)
        if y.shape[0] != X.shape[0]:
            raise ValueError("Number of samples in X and y must match.")

        for epoch in range(epochs):
            loss = self.train_batch(X, y, learning_rate)
            self.training_history['epoch'].append(epoch)
            self.training_history['loss'].append(loss)

            if log_every and (epoch % log_every == 0 or epoch == epochs - 1):
                logging.debug(f"Epoch {epoch+1}/{epochs} - loss: {loss:.5f}")

        return self.training_history

    def predict(self, X: np.ndarray) -> np.ndarray:
        """
        Replays the forward pass without touching any cached training state.

        Args:
            X: Inputs (num_samples, input_dim) or a single sample (input_dim,).

        Returns:
            Output probabilities (num_samples, output_dim).
        """
        current_output = np.asarray(X, dtype=float)
        for layer in self.layers:
            current_output = layer.activate(current_output)
        return current_output

    def get_parameters(self) -> List[Tuple[np.ndarray, np.ndarray]]:
        """Copies of (weights, biases) for every layer."""
        return [layer.get_weights() for layer in self.layers]


class NeuralModel:
    """
    A trained 2-2-1 network.

    The parameters are frozen at construction; the model only exposes
    ``predict`` plus the summary fields ``accuracy`` and ``epochs``.
    """

    def __init__(self, parameters: List[Tuple[np.ndarray, np.ndarray]], accuracy: float, epochs: int,
                 history: Optional[List[float]] = None):
        weights = [w for w, _ in parameters]
        biases = [b for _, b in parameters]
        self._network = Network(
            layer_sizes=[weights[0].shape[1]] + [w.shape[0] for w in weights],
            initial_layer_weights=weights,
            initial_layer_biases=biases,
        )
        self._accuracy = float(accuracy)
        self._epochs = int(epochs)
        self._history = tuple(history or ())

    @property
    def accuracy(self) -> float:
        return self._accuracy

    @property
    def epochs(self) -> int:
        return self._epochs

    @property
    def history(self) -> Tuple[float, ...]:
        """Loss before each epoch's update."""
        return self._history

    def predict(self, features) -> float:
        """Probability in [0, 1] that ``features`` belongs to class 1."""
        return float(self._network.predict(np.asarray(features, dtype=float)[:2])[0, 0])

    def predict_batch(self, points) -> np.ndarray:
        """Probabilities for an (n, 2) array of points, shape (n,)."""
        return self._network.predict(np.asarray(points, dtype=float).reshape(-1, 2))[:, 0]

    def parameters(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray, float]:
        """Copies of (W1, b1, W2, b2); W1 is (2, 2), b1 (2,), W2 (2,)."""
        (w1, b1), (w2, b2) = self._network.get_parameters()
        return w1, b1, w2[0], float(b2[0])

    def summary(self) -> str:
        return (
            f"Neural network {'-'.join(str(s) for s in self._network.layer_sizes)}:\n"
            f"  Hidden units: {self._network.layer_sizes[1]}\n"
            f"  Epochs: {self.epochs}\n"
            f"  Accuracy: {self.accuracy * 100:.2f}%"
        )

    def __repr__(self):
        return f"NeuralModel(accuracy={self.accuracy}, epochs={self.epochs})"


def train_neural_network(
    dataset: Sequence[LabeledRecord],
    learning_rate: float = NEURAL_LEARNING_RATE,
    epochs: int = NEURAL_EPOCHS,
    rng: RandomSource = None,
    log_every: int = 0,
) -> NeuralModel:
    """
    Trains a 2-2-1 sigmoid network with manual backpropagation.

    Weights start uniform in (-0.5, 0.5) and biases at zero. Each epoch sums
    the gradients over every record and takes a single step scaled by
    ``learning_rate / n``.

    Args:
        dataset: Validated ``LabeledRecord`` rows, or raw rows that
                 ``parse_neural_dataset`` accepts.
        learning_rate: Step size.
        epochs: Number of full passes over the data.
        rng: Seed or Generator for the initial weights. None uses the
             process-level ``DEFAULT_RNG``, so repeated calls differ.
        log_every: Log the loss at debug level every ``log_every`` epochs (0 disables).

    Returns:
        The trained ``NeuralModel``.

    Raises:
        DatasetError: If raw rows fail validation.
        TrainingError: ``EmptyDataset`` for zero rows, ``InvalidOptions`` for bad options.
    """
    learning_rate, epochs = validate_training_options(learning_rate, epochs)
    records = ensure_records(dataset, LabeledRecord, parse_neural_dataset)
    n = len(records)
    if n == 0:
        raise TrainingError(
            ErrorKind.EMPTY_DATASET,
            "The neural network needs some labeled surprises to learn from.",
        )

    X = np.array([record.features[:2] for record in records], dtype=float)
    y = np.array([record.label for record in records], dtype=float).reshape(-1, 1)

    network = Network(LAYER_SIZES, rng=rng)
    logging.info(f"Training neural network on {n} records: learning_rate={learning_rate}, epochs={epochs}")
    history = network.fit(X, y, epochs=epochs, learning_rate=learning_rate, log_every=log_every)

    accuracy = accuracy_score(network.predict(X), y)
    logging.info(f"Neural network finished with accuracy {accuracy:.2%}")
    return NeuralModel(network.get_parameters(), accuracy, epochs, history['loss'])
