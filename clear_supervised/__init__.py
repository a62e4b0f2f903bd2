from .datasets import (
    LINEAR_SAMPLE,
    LOGISTIC_SAMPLE,
    NEURAL_SAMPLE,
    Failure,
    LabeledRecord,
    LinearRecord,
    Success,
    parse_linear_dataset,
    parse_logistic_dataset,
    parse_neural_dataset,
)
from .errors import ClearSupervisedError, DatasetError, ErrorKind, TrainingError
from .linear import LinearModel, train_linear_regression
from .logistic import LogisticModel, train_logistic_regression
from .network import NeuralModel, train_neural_network

__version__ = "0.1.0"

__all__ = [
    "ErrorKind",
    "ClearSupervisedError",
    "DatasetError",
    "TrainingError",
    "LinearRecord",
    "LabeledRecord",
    "Success",
    "Failure",
    "parse_linear_dataset",
    "parse_logistic_dataset",
    "parse_neural_dataset",
    "LINEAR_SAMPLE",
    "LOGISTIC_SAMPLE",
    "NEURAL_SAMPLE",
    "LinearModel",
    "LogisticModel",
    "NeuralModel",
    "train_linear_regression",
    "train_logistic_regression",
    "train_neural_network",
]
