import numpy as np
import pytest

from tinydual.dual import Dual
from tinydual.linalg import Matrix, Vector, sqrt


def test_float_vector_ops():
    u = Vector([1.0, 2.0, 2.0])
    v = Vector([3.0, -1.0, 0.5])

    assert u.dot(v) == 2.0
    assert u.length_square() == 9.0
    assert u.length() == 3.0
    assert list(u + v) == [4.0, 1.0, 2.5]
    assert list(u - v) == [-2.0, 3.0, 1.5]
    assert list(u * 2.0) == [2.0, 4.0, 4.0]
    assert list(0.5 * u) == [0.5, 1.0, 1.0]


def test_length_mismatch_rejected():
    with pytest.raises(ValueError):
        Vector([1.0, 2.0]).dot(Vector([1.0]))
    with pytest.raises(ValueError):
        Vector([1.0, 2.0]) + Vector([1.0, 2.0, 3.0])


def test_dot_of_one_dual_is_mul():
    a = Dual(1.5, [1.0, -2.0])
    b = Dual(-2.0, [0.5, 3.0])
    d = Vector([a]).dot(Vector([b]))
    m = a * b
    assert d.value == m.value
    assert np.array_equal(d.partials, m.partials)


def test_dual_vector_length():
    vals = np.array([3.0, 4.0])
    v = Vector(Dual.variables(vals))
    L = v.length()
    assert np.isclose(L.value, 5.0)
    # d|v|/dv = v/|v|
    assert np.allclose(L.partials, [0.6, 0.8])


def test_sqrt_dispatch():
    assert sqrt(16.0) == 4.0
    assert np.isnan(sqrt(-1.0))
    d = sqrt(Dual(9.0, [1.0]))
    assert np.isclose(d.value, 3.0)
    assert np.isclose(d.partials[0], 1.0 / 6.0)


def test_dual_scaling_mixes_with_floats():
    s = Dual.variable(2.0, 0, 1)
    v = Vector([1.0, -3.0]) * s
    assert [x.value for x in v] == [2.0, -6.0]
    assert [x.partials[0] for x in v] == [1.0, -3.0]


def test_matrix_add_sub():
    A = Matrix.from_rows([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
    B = Matrix.from_rows([[0.5, 0.5], [1.0, 1.0], [0.0, -1.0]])
    assert A.shape == (3, 2)
    assert np.array_equal((A + B).to_numpy(), A.to_numpy() + B.to_numpy())
    assert np.array_equal((A - B).to_numpy(), A.to_numpy() - B.to_numpy())

    with pytest.raises(ValueError):
        A + Matrix.diagonal([1.0, 1.0])


def test_matrix_vector_product():
    rows = [[1.0, 2.0, 0.0], [0.0, -1.0, 3.0]]
    A = Matrix.from_rows(rows)
    v = Vector([1.0, 2.0, 3.0])
    out = A @ v
    assert np.array_equal(out.to_numpy(), np.array(rows) @ v.to_numpy())

    with pytest.raises(ValueError):
        A @ Vector([1.0, 2.0])


def test_diagonal_identity_is_noop():
    I = Matrix.diagonal([1.0, 1.0, 1.0])
    v = Vector([0.25, -7.0, 3.5])
    assert list(I @ v) == list(v)

    duals = Vector(Dual.variables([0.25, -7.0, 3.5]))
    out = I @ duals
    for a, b in zip(out, duals):
        assert a.value == b.value
        assert np.array_equal(a.partials, b.partials)


def test_empty_matrix_vector_rejected():
    with pytest.raises(ValueError):
        Matrix((), rows=2) @ Vector([])


def test_matrix_matrix_product():
    rng = np.random.RandomState(0)
    a = rng.randn(2, 3)
    b = rng.randn(3, 4)
    C = Matrix.from_rows(a.tolist()) @ Matrix.from_rows(b.tolist())
    assert C.shape == (2, 4)
    assert np.allclose(C.to_numpy(), a @ b)


def test_matrix_over_duals():
    # rotate a differentiable point by a constant matrix
    R = Matrix.from_rows([[0.0, -1.0], [1.0, 0.0]])
    p = Vector(Dual.variables([2.0, 1.0]))
    q = R @ p
    assert [x.value for x in q] == [-1.0, 2.0]
    assert q[0].partials.tolist() == [0.0, -1.0]
    assert q[1].partials.tolist() == [1.0, 0.0]


def test_ragged_columns_rejected():
    with pytest.raises(ValueError):
        Matrix([[1.0, 2.0], [1.0]])
    with pytest.raises(ValueError):
        Matrix.from_rows([[1.0, 2.0], [3.0]])


def test_from_columns_matches_from_rows():
    A = Matrix.from_columns([[1.0, 3.0], [2.0, 4.0]])
    B = Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]])
    assert A.shape == B.shape == (2, 2)
    assert np.array_equal(A.to_numpy(), B.to_numpy())
    assert list(A[1]) == [2.0, 4.0]
