import array
import math

import numpy as np
import pandas as pd
import pytest

from gammakit import dgamma, make_engine, qgamma, qgamma_into, rf_matrix, rgamma, rgamma_matrix
from gammakit.containers import backend_for, list_backends


def test_builtin_backends_registered() -> None:
    assert list(list_backends()) == ["numpy", "pandas", "list"]


def test_scalar_input_returns_float() -> None:
    value = qgamma(0.5, 2.0, 1.0)
    assert isinstance(value, float)
    assert qgamma(np.float32(0.5), 2.0, 1.0) == pytest.approx(value, rel=1e-7)


def test_numpy_matrix_shape_preserved() -> None:
    probs = np.array([[0.1, 0.2, 0.3], [0.4, 0.5, 0.6]])
    result = qgamma(probs, 2.0, 3.0)
    assert isinstance(result, np.ndarray)
    assert result.shape == (2, 3)
    for (row, col), p in np.ndenumerate(probs):
        assert result[row, col] == qgamma(float(p), 2.0, 3.0)
    assert probs[0, 0] == 0.1


def test_numpy_vector_and_float32() -> None:
    probs = np.array([0.25, 0.5, 0.75], dtype=np.float32)
    result = qgamma(probs, 1.5, 1.0)
    assert result.shape == (3,)
    assert result.dtype == np.float32
    integer_input = dgamma(np.array([1, 2, 3]), 2.0, 1.0)
    assert integer_input.dtype == np.float64


def test_invalid_elements_do_not_abort() -> None:
    probs = np.array([0.2, -0.5, 0.0, 1.0, 1.5, 0.8])
    result = qgamma(probs, 2.0, 1.0)
    assert math.isnan(result[1])
    assert math.isnan(result[4])
    assert result[2] == 0.0
    assert result[3] == math.inf
    assert math.isfinite(result[0]) and math.isfinite(result[5])


def test_pandas_frame_keeps_labels() -> None:
    frame = pd.DataFrame({"a": [0.1, 0.9], "b": [0.5, 0.5]}, index=["x", "y"])
    result = qgamma(frame, 3.0, 2.0)
    assert isinstance(result, pd.DataFrame)
    assert result.shape == frame.shape
    assert list(result.columns) == ["a", "b"]
    assert list(result.index) == ["x", "y"]
    assert result.loc["y", "a"] == qgamma(0.9, 3.0, 2.0)


def test_pandas_series() -> None:
    series = pd.Series([0.1, 0.5], name="p")
    result = qgamma(series, 2.0, 1.0)
    assert isinstance(result, pd.Series)
    assert result.name == "p"
    assert result.iloc[1] == qgamma(0.5, 2.0, 1.0)


def test_nested_lists() -> None:
    result = qgamma([[0.1, 0.2], [0.3, 0.4], [0.5, 0.6]], 2.0, 1.0)
    assert len(result) == 3
    assert all(len(row) == 2 for row in result)
    assert result[2][1] == qgamma(0.6, 2.0, 1.0)
    flat = qgamma([0.1, 0.2], 2.0, 1.0)
    assert flat == [qgamma(0.1, 2.0, 1.0), qgamma(0.2, 2.0, 1.0)]


def test_ragged_lists_rejected() -> None:
    with pytest.raises(ValueError):
        qgamma([[0.1, 0.2], [0.3]], 2.0, 1.0)


def test_unsupported_container_rejected() -> None:
    with pytest.raises(TypeError):
        qgamma("0.5", 2.0, 1.0)
    with pytest.raises(TypeError):
        backend_for(np.zeros((2, 2, 2)))


def test_buffer_form_matches_scalar() -> None:
    vals_in = array.array("d", [0.05, 0.5, 0.95, 2.0])
    vals_out = np.zeros(4)
    qgamma_into(vals_in, 4.0, 0.5, vals_out)
    for p, x in zip(vals_in[:3], vals_out[:3], strict=True):
        assert x == qgamma(p, 4.0, 0.5)
    assert math.isnan(vals_out[3])


def test_buffer_form_respects_count() -> None:
    vals_out = [-1.0, -1.0, -1.0]
    qgamma_into([0.5, 0.5, 0.5], 2.0, 1.0, vals_out, num_elem=2)
    assert vals_out[2] == -1.0
    with pytest.raises(ValueError):
        qgamma_into([0.5], 2.0, 1.0, vals_out, num_elem=2)


def test_sample_matrix_backends() -> None:
    matrix = rgamma_matrix(4, 3, 2.0, 1.0, engine=make_engine(8))
    assert matrix.shape == (4, 3)
    assert np.all(matrix > 0)
    frame = rgamma_matrix(2, 5, 2.0, 1.0, engine=8, backend="pandas")
    assert isinstance(frame, pd.DataFrame)
    assert frame.shape == (2, 5)
    nested = rf_matrix(3, 2, 4.0, 9.0, engine=8, backend="list")
    assert len(nested) == 3 and all(len(row) == 2 for row in nested)


def test_sample_matrix_fills_row_major_from_one_engine() -> None:
    matrix = rgamma_matrix(2, 2, 2.0, 1.0, engine=make_engine(21))
    engine = make_engine(21)
    expected = [rgamma(2.0, 1.0, engine) for _ in range(4)]
    assert matrix.ravel().tolist() == expected


def test_unknown_backend_rejected() -> None:
    with pytest.raises(KeyError):
        rgamma_matrix(2, 2, 2.0, 1.0, backend="blaze")
