from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of failure reported by the validators and trainers."""

    NOT_AN_ARRAY = "NotAnArray"
    NOT_AN_OBJECT = "NotAnObject"
    INSUFFICIENT_DATA = "InsufficientData"
    EMPTY_DATASET = "EmptyDataset"
    MISSING_FIELD = "MissingField"
    MISSING_FEATURES = "MissingFeatures"
    MISSING_LABEL = "MissingLabel"
    INVALID_LABEL = "InvalidLabel"
    DEGENERATE_INPUT = "DegenerateInput"
    INVALID_OPTIONS = "InvalidOptions"


class ClearSupervisedError(ValueError):
    """Base class for recoverable input errors.

    Every error carries a machine-readable ``kind`` alongside the
    human-readable message, so callers can branch on the kind and show the
    message as-is.
    """

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self):
        return f"{self.__class__.__name__}(kind={self.kind.value!r}, message={self.message!r})"


class DatasetError(ClearSupervisedError):
    """Raw input could not be turned into records."""


class TrainingError(ClearSupervisedError):
    """A trainer refused its dataset or options."""
