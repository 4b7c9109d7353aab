## generalized n-dimensional matrix operations for polysym

## Copyright (c) 2026 polysym contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

import numpy as np

import polysym.vector as vector

## a matrix is a square ndim x ndim array of rows.  Vectors are
## interpreted as columns, so ``M.mul(v)`` is Mv.

## Any index beyond ``ndim`` reads as the identity: 1 on the diagonal,
## 0 elsewhere.  This lets matrices of different sizes be multiplied
## and compared as though both were embedded in a common larger space,
## and it is why the zero-dimensional matrix is a perfectly good
## identity.


class Matrix:
    """square transformation matrix of arbitrary dimension"""

    def __init__(self, a=None, ndim=None):
        if isinstance(a, Matrix):
            self.m = a.m.copy()
        elif a is None:
            self.m = np.identity(ndim or 0)
        else:
            arr = np.asarray(a, dtype=float)
            if arr.ndim == 1:
                n = int(round(np.sqrt(len(arr))))
                if n * n != len(arr):
                    raise ValueError('bad element count in matrix initialization: {}'.format(len(arr)))
                arr = arr.reshape((n, n))
            if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
                raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))
            self.m = arr.copy()
        if ndim is not None and ndim != self.ndim:
            self.m = self.expand(ndim)

    @classmethod
    def ident(cls, ndim):
        return cls(None, ndim)

    @classmethod
    def from_cols(cls, cols):
        cols = [np.asarray(c, dtype=float) for c in cols]
        n = len(cols)
        return cls(np.column_stack([vector.pad(c, n) for c in cols]) if n else None)

    @classmethod
    def from_outer_product(cls, u, v):
        u, v = vector._common(u, v)
        return cls(np.outer(u, v))

    def __repr__(self):
        return "Matrix({})".format(self.m.tolist())

    @property
    def ndim(self):
        return self.m.shape[0]

    # return value indexed by i,j (row, column)
    def get(self, i, j):
        if i < 0 or j < 0:
            raise ValueError('bad index passed to get: {},{}'.format(i, j))
        n = self.ndim
        if i < n and j < n:
            return float(self.m[i, j])
        return 1.0 if i == j else 0.0

    def set(self, i, j, x):
        if i < 0 or i >= self.ndim or j < 0 or j >= self.ndim:
            raise ValueError('bad index passed to set: {},{}'.format(i, j))
        if not vector.isgoodnum(x):
            raise ValueError('bad value passed to set: {}'.format(x))
        self.m[i, j] = x

    def getrow(self, i):
        return self.expand(max(self.ndim, i + 1))[i]

    def getcol(self, j):
        return self.expand(max(self.ndim, j + 1))[:, j]

    def expand(self, ndim):
        """return the matrix as an ``ndim`` x ``ndim`` array, padding with
        the identity or truncating as required"""
        n = self.ndim
        if ndim == n:
            return self.m.copy()
        r = np.identity(ndim)
        k = min(n, ndim)
        r[:k, :k] = self.m[:k, :k]
        return r

    def _pair(self, other):
        n = max(self.ndim, other.ndim)
        return self.expand(n), other.expand(n)

    # matrix multiply.  If x is a matrix, compute MX.  If x is a
    # vector, compute Mx. If x is a scalar, compute xM.

    def mul(self, x):
        if isinstance(x, Matrix):
            a, b = self._pair(x)
            return Matrix(a @ b)
        elif vector.isgoodnum(x):
            return self.scale(x)
        elif isinstance(x, (list, tuple, np.ndarray)):
            return self.transform(x)
        raise ValueError('bad thing passed to mul(): {}'.format(x))

    def __matmul__(self, x):
        return self.mul(x)

    def transform(self, v):
        """transform the column vector ``v``; the result has
        ``max(ndim, len(v))`` components"""
        v = np.asarray(v, dtype=float)
        n = max(self.ndim, len(v))
        return self.expand(n) @ vector.pad(v, n)

    def scale(self, c):
        return Matrix(self.m * c)

    def add(self, x):
        a, b = self._pair(x)
        return Matrix(a + b)

    def sub(self, x):
        a, b = self._pair(x)
        return Matrix(a - b)

    def transpose(self):
        return Matrix(self.m.T)

    def determinant(self):
        if self.ndim == 0:
            return 1.0
        return float(np.linalg.det(self.m))

    def inverse(self):
        if self.ndim == 0:
            return Matrix()
        try:
            return Matrix(np.linalg.inv(self.m))
        except np.linalg.LinAlgError as exc:
            raise ValueError('singular matrix has no inverse') from exc

    def approx_eq(self, other):
        """componentwise equality within epsilon, after padding both
        matrices with the identity to a common size"""
        a, b = self._pair(other)
        return bool(np.all(np.abs(a - b) < vector.epsilon))

    def flat(self, ndim=None):
        """row-major components, optionally after expansion to ``ndim``"""
        return self.expand(self.ndim if ndim is None else ndim).ravel()


# the zero-dimensional identity
EMPTY_IDENT = Matrix()


# return the reflection through the hyperplane perpendicular to normal
def Reflection(normal):
    n = np.asarray(normal, dtype=float)
    m = vector.mag(n)
    if m < vector.epsilon:
        raise ValueError('zero-length mirror normal not allowed')
    if not vector.close(m, 1.0):
        n = n / m
    return Matrix(np.identity(len(n)) - 2.0 * np.outer(n, n))


__all__ = [
    'Matrix',
    'EMPTY_IDENT',
    'Reflection',
]
