import math

import numpy as np
import pytest

from polysym.matrix import *
from polysym.vector import vclose
## unit tests for polysym matrix.py


class TestMatrix:
    """unit tests for polysym matrix operations"""

    def test_construction(self):
        foo = Matrix([1, 2, 3, 4])
        assert foo.ndim == 2
        assert foo.get(0, 1) == 2.0
        assert foo.get(1, 0) == 3.0
        # beyond ndim reads as the identity
        assert foo.get(2, 2) == 1.0
        assert foo.get(2, 0) == 0.0
        assert Matrix(foo, 3).ndim == 3
        assert EMPTY_IDENT.ndim == 0
        with pytest.raises(ValueError):
            Matrix([1, 2, 3])

    def test_mul(self):
        foo = Matrix([[1, 2], [3, 4]])
        I3 = Matrix.ident(3)
        assert I3.mul(foo).approx_eq(foo)
        assert foo.mul(I3).ndim == 3
        assert foo.mul(foo).approx_eq(Matrix([[7, 10], [15, 22]]))
        assert vclose(foo.mul([1, 1]), [3, 7])
        assert vclose(foo.mul([1, 1, 5]), [3, 7, 5])
        assert foo.mul(2).approx_eq(Matrix([[2, 4], [6, 8]]))
        assert (foo @ foo).approx_eq(foo.mul(foo))

    def test_transpose_inverse_determinant(self):
        foo = Matrix([[2, 1], [1, 1]])
        assert foo.transpose().approx_eq(foo)
        assert math.isclose(foo.determinant(), 1.0)
        assert foo.mul(foo.inverse()).approx_eq(Matrix.ident(2))
        assert EMPTY_IDENT.determinant() == 1.0
        with pytest.raises(ValueError):
            Matrix([[1, 2], [2, 4]]).inverse()

    def test_from_cols_and_outer_product(self):
        m = Matrix.from_cols([[1, 2], [3, 4]])
        assert m.approx_eq(Matrix([[1, 3], [2, 4]]))
        assert vclose(m.getcol(1), [3, 4])
        assert vclose(m.getrow(0), [1, 3])
        assert vclose(m.getrow(2), [0, 0, 1])
        assert Matrix.from_outer_product([1, 2], [3, 4]).approx_eq(
            Matrix([[3, 4], [6, 8]]))

    def test_flat(self):
        m = Matrix([[1, 2], [3, 4]])
        assert list(m.flat()) == [1.0, 2.0, 3.0, 4.0]
        assert list(m.flat(3)) == [1.0, 2.0, 0.0, 3.0, 4.0, 0.0, 0.0, 0.0, 1.0]

    def test_reflection(self):
        r = Reflection([0, 2, 0])
        assert vclose(r.mul([1, 1, 1]), [1, -1, 1])
        assert r.mul(r).approx_eq(Matrix.ident(3))
        assert math.isclose(r.determinant(), -1.0)
        diag = Reflection([1, -1])
        assert vclose(diag.mul([1, 0]), [0, 1])
        with pytest.raises(ValueError):
            Reflection([0, 0, 0])
