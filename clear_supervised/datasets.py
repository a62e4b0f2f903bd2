"""
Dataset validators.

Turn parsed-JSON-like input (a list of dicts with loosely typed values) into
one of the strict record shapes the trainers consume:

    parse_linear_dataset   -> [LinearRecord(hours, score), ...]
    parse_logistic_dataset -> [LabeledRecord(features, label), ...]
    parse_neural_dataset   -> [LabeledRecord(features, label), ...]

The parsers never raise for bad input. They return either ``Success`` with
the records or ``Failure`` with an ``ErrorKind`` and a message naming the
1-based position of the offending record, so callers can branch on the
result without exception handling.
"""

import math
import numbers
from collections.abc import Mapping, Sequence
from typing import Any, Iterable, List, NamedTuple, Optional, Tuple, Union

from .errors import DatasetError, ErrorKind


# --- Records ---

class LinearRecord(NamedTuple):
    """One (input, target) observation for line fitting."""
    hours: float
    score: float


class LabeledRecord(NamedTuple):
    """One labeled 2-D observation for binary classification."""
    features: Tuple[float, float]
    label: int


# --- Results ---

class Success(NamedTuple):
    """A parse that produced records."""
    value: List[Any]

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> List[Any]:
        return self.value


class Failure(NamedTuple):
    """A parse that was rejected, with the reason."""
    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        raise DatasetError(self.kind, self.message)


ParseResult = Union[Success, Failure]


# --- Coercion rules ---

TRUE_LABELS = frozenset({'1', 'yes', 'y', 'true', 'ready', 'special'})
FALSE_LABELS = frozenset({'0', 'no', 'n', 'false', 'ordinary'})


def to_number(value: Any) -> Optional[float]:
    """Coerce a value to a finite float, or None if it is not provided.

    Accepts finite real numbers and non-empty strings that convert to a finite
    number. Booleans, empty strings, NaN and infinities are rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        try:
            numeric = float(value)
        except OverflowError:
            # ints beyond the float range are as non-finite as "inf"
            return None
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        try:
            numeric = float(stripped)
        except ValueError:
            return None
    else:
        return None
    return numeric if math.isfinite(numeric) else None


def extract_number(entry: Mapping, keys: Iterable[str]) -> Optional[float]:
    """Try keys in order and return the first one holding a numeric value."""
    for key in keys:
        if key in entry:
            numeric = to_number(entry[key])
            if numeric is not None:
                return numeric
    return None


def parse_binary_label(value: Any, description: str) -> int:
    """Normalize boolean-like inputs into a 0/1 label.

    Raises:
        DatasetError: With kind ``InvalidLabel`` if the value is not label-like.
    """
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, numbers.Real):
        if value == 0 or value == 1:
            return int(value)
    elif isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in TRUE_LABELS:
            return 1
        if normalized in FALSE_LABELS:
            return 0
    raise DatasetError(
        ErrorKind.INVALID_LABEL,
        f"{description} should be either 0/1, yes/no, or true/false.",
    )


def _is_array(raw: Any) -> bool:
    return isinstance(raw, Sequence) and not isinstance(raw, (str, bytes, bytearray))


def _first_present(entry: Mapping, keys: Iterable[str]) -> Any:
    """Return the first value that is present and not null, else None."""
    for key in keys:
        value = entry.get(key)
        if value is not None:
            return value
    return None


def _feature_pair(entry: Mapping, first_keys: Tuple[str, ...], second_keys: Tuple[str, ...]) -> Optional[Tuple[float, float]]:
    features = entry.get('features')
    if _is_array(features) and len(features) >= 2:
        first = to_number(features[0])
        second = to_number(features[1])
        if first is not None and second is not None:
            return (first, second)

    first = extract_number(entry, first_keys)
    second = extract_number(entry, second_keys)
    if first is not None and second is not None:
        return (first, second)
    return None


# --- Parsers ---

def _parse(raw: Any, minimum: int, short_kind: ErrorKind, messages: dict, parse_entry) -> ParseResult:
    if not _is_array(raw):
        return Failure(ErrorKind.NOT_AN_ARRAY, messages['not_array'])
    if len(raw) < minimum:
        return Failure(short_kind, messages['too_short'])

    records = []
    try:
        for index, entry in enumerate(raw, start=1):
            if not isinstance(entry, Mapping):
                raise DatasetError(ErrorKind.NOT_AN_OBJECT, messages['not_object'].format(index=index))
            records.append(parse_entry(entry, index))
    except DatasetError as e:
        return Failure(e.kind, e.message)
    return Success(records)


def parse_linear_dataset(raw: Any) -> ParseResult:
    """Parse linear-regression rows: ``[{"hours": .., "score": ..}, ...]``.

    At least two records are required. ``Hours``/``Score`` capitalizations are
    accepted too.
    """
    def parse_entry(entry: Mapping, index: int) -> LinearRecord:
        hours = extract_number(entry, ('hours', 'Hours'))
        if hours is None:
            raise DatasetError(ErrorKind.MISSING_FIELD, f'Entry {index} needs a numeric "hours" value.')
        score = extract_number(entry, ('score', 'Score'))
        if score is None:
            raise DatasetError(ErrorKind.MISSING_FIELD, f'Entry {index} needs a numeric "score" value.')
        return LinearRecord(hours, score)

    return _parse(raw, 2, ErrorKind.INSUFFICIENT_DATA, {
        'not_array': 'Please provide a JSON array of tasting sessions.',
        'too_short': 'Add at least two sessions so the line can be estimated.',
        'not_object': 'Entry {index} must be an object with "hours" and "score".',
    }, parse_entry)


def parse_logistic_dataset(raw: Any) -> ParseResult:
    """Parse logistic-regression rows with either a features array or named fields.

    Features come from ``features`` when it holds two numbers, otherwise from
    the crunchiness and color depth fields. The label comes from the first of
    ``label``, ``ready``, ``Ready`` or ``Ready for market?``.
    """
    def parse_entry(entry: Mapping, index: int) -> LabeledRecord:
        features = _feature_pair(
            entry,
            ('crunchiness', 'Crunchiness'),
            ('color', 'Color', 'colorDepth', 'Color depth'),
        )
        if features is None:
            raise DatasetError(
                ErrorKind.MISSING_FEATURES,
                f'Entry {index} needs either a "features" array or numeric "crunchiness" and "color depth" values.',
            )
        label_source = _first_present(entry, ('label', 'ready', 'Ready', 'Ready for market?'))
        if label_source is None:
            raise DatasetError(ErrorKind.MISSING_LABEL, f'Entry {index} needs a yes/no outcome ("label" or "ready").')
        return LabeledRecord(features, parse_binary_label(label_source, f'Entry {index} outcome'))

    return _parse(raw, 1, ErrorKind.EMPTY_DATASET, {
        'not_array': 'Provide a JSON array where each item represents an apple.',
        'too_short': 'Add at least one apple example to train the classifier.',
        'not_object': 'Entry {index} must be an object with tasting clues.',
    }, parse_entry)


def parse_neural_dataset(raw: Any) -> ParseResult:
    """Parse XOR-like rows for the neural network.

    Same shape as the logistic rows, with flavor/texture surprise as the
    named features and ``label``/``special``/``Special``/``Special batch?``
    as the label.
    """
    def parse_entry(entry: Mapping, index: int) -> LabeledRecord:
        features = _feature_pair(
            entry,
            ('flavor', 'Flavor', 'flavorSurprise', 'Flavor surprise'),
            ('texture', 'Texture', 'textureSurprise', 'Texture surprise'),
        )
        if features is None:
            raise DatasetError(
                ErrorKind.MISSING_FEATURES,
                f'Entry {index} needs a "features" array or flavor & texture numbers.',
            )
        label_source = _first_present(entry, ('label', 'special', 'Special', 'Special batch?'))
        if label_source is None:
            raise DatasetError(ErrorKind.MISSING_LABEL, f'Entry {index} needs a yes/no label ("label" or "special").')
        return LabeledRecord(features, parse_binary_label(label_source, f'Entry {index} label'))

    return _parse(raw, 1, ErrorKind.EMPTY_DATASET, {
        'not_array': 'Provide a JSON array describing the surprising flavor pairs.',
        'too_short': 'Add at least one flavor pair so the network has something to learn.',
        'not_object': 'Entry {index} must be an object with "features" or taste fields.',
    }, parse_entry)


def ensure_records(dataset: Any, record_type: type, parser) -> List[Any]:
    """Return ``dataset`` as validated records, parsing it first if needed.

    Already-validated records pass through untouched. Anything else goes
    through ``parser``; a rejected parse is raised as ``DatasetError``.
    """
    if _is_array(dataset) and all(isinstance(record, record_type) for record in dataset):
        return list(dataset)
    return parser(dataset).unwrap()


# --- Sample datasets ---

# Hours of tasting practice against the sweetness score given to an apple.
LINEAR_SAMPLE = [
    {'hours': 1, 'score': 52},
    {'hours': 2, 'score': 57},
    {'hours': 3, 'score': 63},
    {'hours': 4, 'score': 69},
    {'hours': 5, 'score': 75},
    {'hours': 6, 'score': 83},
]

# Crunchiness and color depth (1-10) against "ready for market".
LOGISTIC_SAMPLE = [
    {'features': [2, 2], 'label': 0},
    {'features': [3, 3], 'label': 0},
    {'features': [4, 2], 'label': 0},
    {'features': [6, 5], 'label': 1},
    {'features': [7, 6], 'label': 1},
    {'features': [8, 5], 'label': 1},
    {'features': [5, 7], 'label': 1},
    {'features': [3, 6], 'label': 0},
]

# Flavor and texture surprise: special batches follow XOR.
NEURAL_SAMPLE = [
    {'features': [0, 0], 'label': 0},
    {'features': [0, 1], 'label': 1},
    {'features': [1, 0], 'label': 1},
    {'features': [1, 1], 'label': 0},
]
