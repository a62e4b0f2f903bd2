import json

import pytest

from clear_supervised.datasets import (
    Failure,
    LabeledRecord,
    LinearRecord,
    Success,
    ensure_records,
    extract_number,
    parse_binary_label,
    parse_linear_dataset,
    parse_logistic_dataset,
    parse_neural_dataset,
    to_number,
)
from clear_supervised.errors import DatasetError, ErrorKind


class TestToNumber:
    @pytest.mark.parametrize("value, expected", [
        (3, 3.0),
        (2.5, 2.5),
        ("4", 4.0),
        ("  -1.5 ", -1.5),
        ("1e3", 1000.0),
    ])
    def test_accepts_finite_numbers(self, value, expected):
        assert to_number(value) == expected

    @pytest.mark.parametrize("value", ["", "   ", "abc", "nan", "inf", float("nan"), float("inf"), None, True, [1], {}])
    def test_rejects_everything_else(self, value):
        assert to_number(value) is None

    def test_rejects_ints_beyond_float_range(self):
        assert to_number(10**400) is None
        assert to_number(-10**400) is None

    def test_oversized_json_ints_are_reported_not_raised(self):
        raw = json.loads('[{"hours": 1' + '0' * 400 + ', "score": 1}, {"hours": 2, "score": 3}]')
        result = parse_linear_dataset(raw)
        assert result.kind is ErrorKind.MISSING_FIELD
        assert "Entry 1" in result.message

        result = parse_logistic_dataset([{"features": [10**400, 1], "label": 1}])
        assert result.kind is ErrorKind.MISSING_FEATURES

        result = parse_neural_dataset([{"flavor": 1, "texture": 10**400, "label": 0}])
        assert result.kind is ErrorKind.MISSING_FEATURES

    def test_extract_number_falls_through_to_next_key(self):
        assert extract_number({"hours": "", "Hours": 2}, ("hours", "Hours")) == 2.0
        assert extract_number({"other": 1}, ("hours", "Hours")) is None


class TestBinaryLabel:
    @pytest.mark.parametrize("value", ["Yes", 1, True, 1.0, " TRUE ", "y", "ready", "Special", "1"])
    def test_positive_labels(self, value):
        assert parse_binary_label(value, "Entry 1 label") == 1

    @pytest.mark.parametrize("value", ["no", 0, False, 0.0, "N", "false", "Ordinary", "0"])
    def test_negative_labels(self, value):
        assert parse_binary_label(value, "Entry 1 label") == 0

    @pytest.mark.parametrize("value", ["maybe", 2, -1, 0.5, "", None, [1]])
    def test_invalid_labels(self, value):
        with pytest.raises(DatasetError) as excinfo:
            parse_binary_label(value, "Entry 3 label")
        assert excinfo.value.kind is ErrorKind.INVALID_LABEL
        assert "Entry 3 label" in str(excinfo.value)


class TestParseLinearDataset:
    def test_parses_in_order(self):
        result = parse_linear_dataset([
            {"hours": 1, "score": 52},
            {"Hours": "2", "Score": " 57.5 "},
            {"hours": 0.5, "score": 40},
        ])
        assert isinstance(result, Success)
        assert result.ok
        assert result.value == [LinearRecord(1.0, 52.0), LinearRecord(2.0, 57.5), LinearRecord(0.5, 40.0)]

    @pytest.mark.parametrize("raw", ["not a list", {"hours": 1, "score": 2}, 42, None])
    def test_not_an_array(self, raw):
        result = parse_linear_dataset(raw)
        assert isinstance(result, Failure)
        assert not result.ok
        assert result.kind is ErrorKind.NOT_AN_ARRAY

    @pytest.mark.parametrize("raw", [[], [{"hours": 1, "score": 2}]])
    def test_insufficient_data(self, raw):
        assert parse_linear_dataset(raw).kind is ErrorKind.INSUFFICIENT_DATA

    def test_not_an_object_names_position(self):
        result = parse_linear_dataset([{"hours": 1, "score": 2}, [3, 4]])
        assert result.kind is ErrorKind.NOT_AN_OBJECT
        assert "Entry 2" in result.message

    def test_missing_score_names_field_and_position(self):
        result = parse_linear_dataset([{"hours": 1, "score": 2}, {"hours": 2}, {"hours": 3, "score": 4}])
        assert result.kind is ErrorKind.MISSING_FIELD
        assert "Entry 2" in result.message
        assert '"score"' in result.message

    def test_non_numeric_hours_is_missing(self):
        result = parse_linear_dataset([{"hours": "lots", "score": 2}, {"hours": 2, "score": 3}])
        assert result.kind is ErrorKind.MISSING_FIELD
        assert "Entry 1" in result.message
        assert '"hours"' in result.message

    def test_unwrap(self):
        assert parse_linear_dataset([{"hours": 1, "score": 2}, {"hours": 2, "score": 3}]).unwrap()[1] == LinearRecord(2.0, 3.0)
        with pytest.raises(DatasetError) as excinfo:
            parse_linear_dataset([]).unwrap()
        assert excinfo.value.kind is ErrorKind.INSUFFICIENT_DATA


class TestParseLogisticDataset:
    def test_features_array(self):
        result = parse_logistic_dataset([{"features": [2, "3", 99], "label": 0}])
        assert result.value == [LabeledRecord((2.0, 3.0), 0)]

    def test_named_field_fallback(self):
        result = parse_logistic_dataset([{"crunchiness": 4, "Color depth": 7, "ready": "yes"}])
        assert result.ok
        record = result.value[0]
        assert record.features == (4.0, 7.0)
        assert record.label == 1

    def test_bad_features_array_falls_back_to_named_fields(self):
        result = parse_logistic_dataset([{"features": ["a", 1], "Crunchiness": 1, "colorDepth": "2", "Ready for market?": "No"}])
        assert result.value == [LabeledRecord((1.0, 2.0), 0)]

    def test_label_candidates_in_order(self):
        result = parse_logistic_dataset([
            {"features": [1, 2], "label": None, "ready": "no"},
            {"features": [1, 2], "Ready": True},
            {"features": [1, 2], "label": 1, "ready": "no"},
        ])
        assert [record.label for record in result.value] == [0, 1, 1]

    def test_same_record_with_equivalent_labels(self):
        for positive in ("Yes", 1, True):
            assert parse_logistic_dataset([{"features": [1, 1], "label": positive}]).value[0].label == 1
        for negative in ("no", 0, False):
            assert parse_logistic_dataset([{"features": [1, 1], "label": negative}]).value[0].label == 0

    def test_empty_dataset(self):
        assert parse_logistic_dataset([]).kind is ErrorKind.EMPTY_DATASET

    def test_not_an_array(self):
        assert parse_logistic_dataset({"features": [1, 2]}).kind is ErrorKind.NOT_AN_ARRAY

    def test_not_an_object(self):
        result = parse_logistic_dataset(["apple"])
        assert result.kind is ErrorKind.NOT_AN_OBJECT
        assert "Entry 1" in result.message

    def test_missing_features(self):
        result = parse_logistic_dataset([{"features": [1, 2], "label": 1}, {"crunchiness": 3, "label": 0}])
        assert result.kind is ErrorKind.MISSING_FEATURES
        assert "Entry 2" in result.message

    def test_missing_label(self):
        result = parse_logistic_dataset([{"features": [1, 2]}])
        assert result.kind is ErrorKind.MISSING_LABEL
        assert "Entry 1" in result.message

    def test_invalid_label(self):
        result = parse_logistic_dataset([{"features": [1, 2], "label": 1}, {"features": [1, 2], "label": "perhaps"}])
        assert result.kind is ErrorKind.INVALID_LABEL
        assert "Entry 2" in result.message


class TestParseNeuralDataset:
    def test_named_field_fallback(self):
        result = parse_neural_dataset([
            {"Flavor surprise": 1, "Texture surprise": 0, "Special batch?": "special"},
            {"flavorSurprise": "0", "textureSurprise": "0", "special": "ordinary"},
            {"flavor": 1, "Texture": 1, "Special": False},
        ])
        assert result.value == [
            LabeledRecord((1.0, 0.0), 1),
            LabeledRecord((0.0, 0.0), 0),
            LabeledRecord((1.0, 1.0), 0),
        ]

    def test_single_record_is_enough(self):
        assert parse_neural_dataset([{"features": [0, 1], "label": 1}]).ok

    def test_logistic_field_names_are_not_accepted(self):
        result = parse_neural_dataset([{"crunchiness": 4, "color": 7, "label": 1}])
        assert result.kind is ErrorKind.MISSING_FEATURES

    def test_ready_is_not_a_neural_label(self):
        result = parse_neural_dataset([{"features": [0, 1], "ready": "yes"}])
        assert result.kind is ErrorKind.MISSING_LABEL

    def test_empty_dataset(self):
        assert parse_neural_dataset([]).kind is ErrorKind.EMPTY_DATASET


class TestEnsureRecords:
    def test_validated_records_pass_through(self):
        records = [LinearRecord(1.0, 2.0), LinearRecord(2.0, 3.0)]
        assert ensure_records(records, LinearRecord, parse_linear_dataset) == records

    def test_raw_rows_are_parsed(self):
        rows = [{"hours": 1, "score": 2}, {"hours": 2, "score": 3}]
        assert ensure_records(rows, LinearRecord, parse_linear_dataset) == [LinearRecord(1.0, 2.0), LinearRecord(2.0, 3.0)]

    def test_rejected_rows_raise(self):
        with pytest.raises(DatasetError) as excinfo:
            ensure_records([{"hours": 1}], LinearRecord, parse_linear_dataset)
        assert excinfo.value.kind is ErrorKind.INSUFFICIENT_DATA
