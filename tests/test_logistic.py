import numpy as np
import pytest

from clear_supervised.datasets import LabeledRecord, parse_logistic_dataset
from clear_supervised.errors import DatasetError, ErrorKind, TrainingError
from clear_supervised.logistic import LogisticModel, train_logistic_regression


@pytest.fixture
def apples(separable_apples):
    return parse_logistic_dataset(separable_apples).unwrap()


def test_separable_data_is_perfectly_classified(apples):
    model = train_logistic_regression(apples, learning_rate=0.1, epochs=2500)
    assert isinstance(model, LogisticModel)
    assert model.accuracy == 1.0
    for record in apples:
        assert (model.predict(record.features) >= 0.5) == bool(record.label)


def test_single_step_matches_hand_computed_gradient():
    # weights start at zero, so p = 0.5 and err = -0.5
    model = train_logistic_regression([LabeledRecord((1.0, 2.0), 1)], learning_rate=0.5, epochs=1)
    assert model.weights == (0.25, 0.5)
    assert model.bias == 0.25


def test_zero_epochs_keeps_zero_parameters_and_ties_go_to_class_one(apples):
    model = train_logistic_regression(apples, epochs=0)
    assert model.weights == (0.0, 0.0)
    assert model.bias == 0.0
    # every prediction is exactly 0.5 -> class 1; half the apples are ready
    assert model.accuracy == 0.5


def test_defaults_are_used(apples):
    assert train_logistic_regression(apples) == train_logistic_regression(apples, learning_rate=0.05, epochs=2500)


def test_repeated_calls_are_identical(apples):
    first = train_logistic_regression(apples, learning_rate=0.1, epochs=500)
    second = train_logistic_regression(apples, learning_rate=0.1, epochs=500)
    assert first == second


def test_huge_inputs_saturate_instead_of_overflowing():
    dataset = [LabeledRecord((1e6, 1e6), 1), LabeledRecord((-1e6, -1e6), 0)]
    with np.errstate(over='raise'):
        model = train_logistic_regression(dataset, epochs=50)
    assert np.all(np.isfinite(model.weights))
    assert model.accuracy == 1.0


def test_boundary_is_where_probability_is_one_half(apples):
    model = train_logistic_regression(apples, learning_rate=0.1, epochs=2500)
    for x in (2.0, 5.0, 8.0):
        assert model.predict([x, model.boundary(x)]) == pytest.approx(0.5)


def test_boundary_undefined_for_flat_second_weight():
    assert LogisticModel((1.0, 0.0), 0.5, 1.0).boundary(3.0) is None


def test_accepts_raw_rows(separable_apples, apples):
    assert train_logistic_regression(separable_apples, epochs=100) == train_logistic_regression(apples, epochs=100)


def test_empty_dataset():
    with pytest.raises(TrainingError) as excinfo:
        train_logistic_regression([])
    assert excinfo.value.kind is ErrorKind.EMPTY_DATASET


def test_invalid_raw_rows():
    with pytest.raises(DatasetError) as excinfo:
        train_logistic_regression([{"features": [1, 2]}])
    assert excinfo.value.kind is ErrorKind.MISSING_LABEL


@pytest.mark.parametrize("options", [
    {"learning_rate": 0},
    {"learning_rate": -0.1},
    {"learning_rate": float("nan")},
    {"epochs": -1},
    {"epochs": 2.5},
    {"epochs": True},
])
def test_invalid_options(apples, options):
    with pytest.raises(TrainingError) as excinfo:
        train_logistic_regression(apples, **options)
    assert excinfo.value.kind is ErrorKind.INVALID_OPTIONS


def test_summary_reports_accuracy_as_percent(apples):
    model = train_logistic_regression(apples, learning_rate=0.1, epochs=2500)
    assert "100.00%" in model.summary()
