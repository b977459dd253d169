import pytest

from capacity_reporter.collectors.prometheus import extract_scalar
from capacity_reporter.core.errors import (
    EmptyResultError,
    InvalidSampleValueError,
    ResultExtractionError,
    UnexpectedResponseShapeError,
)


class TestExtractScalar:

    def test_truncates_instead_of_rounding(self, make_vector):
        assert extract_scalar(make_vector('128000.7')) == 128000

    def test_negative_values_truncate_toward_zero(self, make_vector):
        assert extract_scalar(make_vector('-3.9')) == -3

    def test_uses_first_sample_only(self, make_vector):
        assert extract_scalar(make_vector('42', '1000')) == 42

    def test_integer_string(self, make_vector):
        assert extract_scalar(make_vector('131072')) == 131072

    def test_empty_vector_raises_empty_result(self):
        with pytest.raises(EmptyResultError, match="check whether the cluster is added to Thanos query"):
            extract_scalar([])

    @pytest.mark.parametrize('result', [
        [1700000000.0, '5'],                                    # scalar
        [1700000000.0, 'hello'],                                # string
        [{'metric': {}, 'values': [[1700000000.0, '1']]}],      # matrix
        {'resultType': 'vector', 'result': []},
        None,
    ])
    def test_non_vector_shapes_are_rejected(self, result):
        with pytest.raises(UnexpectedResponseShapeError):
            extract_scalar(result)

    def test_malformed_sample_pair(self):
        with pytest.raises(UnexpectedResponseShapeError, match="malformed sample value"):
            extract_scalar([{'metric': {}, 'value': ['1']}])

    def test_non_numeric_sample(self):
        with pytest.raises(UnexpectedResponseShapeError, match="not numeric"):
            extract_scalar([{'metric': {}, 'value': [1700000000.0, 'abc']}])

    @pytest.mark.parametrize('raw', ['NaN', '+Inf', '-Inf'])
    def test_non_finite_values_raise(self, make_vector, raw):
        with pytest.raises(InvalidSampleValueError):
            extract_scalar(make_vector(raw))

    def test_value_beyond_int64_raises(self, make_vector):
        with pytest.raises(InvalidSampleValueError, match="int64"):
            extract_scalar(make_vector('1e19'))

    def test_all_extraction_errors_share_base(self):
        assert issubclass(EmptyResultError, ResultExtractionError)
        assert issubclass(UnexpectedResponseShapeError, ResultExtractionError)
        assert issubclass(InvalidSampleValueError, ResultExtractionError)
