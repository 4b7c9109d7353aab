## vector primitives for polysym

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

"""vector primitives for **polysym**

Vectors are one-dimensional ``numpy`` float arrays of any length.  Two
vectors of different length are compared or combined as though the
shorter one were padded with zeros, so a 3D vector and a 5D vector can
be mixed freely.

``epsilon`` is the single absolute tolerance used throughout the
package, for vectors and matrices alike.  It governs both uniqueness of
group elements and the half-space classification of polytope vertices.
Redefine it at your peril.
"""

import numpy as np

## constants
epsilon = 0.001


## operations on scalars
## -----------------------

def isgoodnum(n):
    """ determine if an argument is actually a scalar number, and not boolean
    """
    return (not isinstance(n, bool)) and isinstance(n, (int, float, np.integer, np.floating))


def close(a, b):
    """ are two scalars the same within epsilon
    """
    return abs(a - b) < epsilon


## operations on vectors
## ------------------------

def vect(*xs):
    """Convenience function for making a vector from practically anything:
    a list of numbers, a tuple, an array, or the numbers themselves.
    """
    if len(xs) == 1 and not isgoodnum(xs[0]):
        xs = xs[0]
    r = np.asarray(xs, dtype=float)
    if r.ndim != 1:
        raise ValueError('bad thing used in attempt to make a vector: {}'.format(xs))
    return r.copy()


def unit(axis, ndim=None):
    """unit vector along ``axis``; ``ndim`` defaults to ``axis+1``"""
    if ndim is None:
        ndim = axis + 1
    if axis < 0 or axis >= ndim:
        raise ValueError('bad axis for unit vector: {} (ndim {})'.format(axis, ndim))
    r = np.zeros(ndim)
    r[axis] = 1.0
    return r


def pad(v, ndim):
    """return ``v`` truncated or zero-extended to exactly ``ndim``
    components"""
    v = np.asarray(v, dtype=float)
    if len(v) >= ndim:
        return v[:ndim].copy()
    r = np.zeros(ndim)
    r[:len(v)] = v
    return r


def _common(a, b):
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    n = max(len(a), len(b))
    if len(a) != n:
        a = pad(a, n)
    if len(b) != n:
        b = pad(b, n)
    return a, b


def add(a, b):
    """ `a + b`, zero-extending the shorter vector"""
    a, b = _common(a, b)
    return a + b


def sub(a, b):
    """ `a - b`, zero-extending the shorter vector"""
    a, b = _common(a, b)
    return a - b


def scale(a, c):
    """ vector ``a`` times scalar ``c``"""
    return np.asarray(a, dtype=float) * c


def dot(a, b):
    a, b = _common(a, b)
    return float(np.dot(a, b))


def mag(a):
    return float(np.linalg.norm(a))


def vclose(a, b):
    """determine if two vectors are the same, componentwise, to within
    epsilon"""
    a, b = _common(a, b)
    return bool(np.all(np.abs(a - b) < epsilon))


class VectorTable:
    """Append-only table of equal-length vectors with approximate lookup.

    ``find()`` compares ``v`` against every stored row in a single
    ``numpy`` operation.  That is still a linear scan, so filling a table
    of ``n`` rows through ``find()`` costs O(n^2): fine for groups of a few
    thousand elements, slow (around a minute) for ``[5,3,3]``.  Rows are
    never removed, so an index returned by ``append()`` stays valid.
    """

    def __init__(self, width, capacity=64):
        self.width = width
        self._rows = np.zeros((max(capacity, 1), width))
        self._count = 0

    def __len__(self):
        return self._count

    def __getitem__(self, i):
        if i < 0 or i >= self._count:
            raise IndexError('bad row index: {}'.format(i))
        return self._rows[i]

    def append(self, v):
        v = pad(v, self.width)
        if self._count == len(self._rows):
            grown = np.zeros((2 * len(self._rows), self.width))
            grown[:self._count] = self._rows[:self._count]
            self._rows = grown
        self._rows[self._count] = v
        self._count += 1
        return self._count - 1

    def find(self, v, start=0):
        """index of the first row at or after ``start`` within epsilon of
        ``v``, or ``None``"""
        if self._count <= start:
            return None
        v = pad(v, self.width)
        diff = np.abs(self._rows[start:self._count] - v)
        hits = np.flatnonzero(np.all(diff < epsilon, axis=1))
        if len(hits) == 0:
            return None
        return int(hits[0]) + start


__all__ = [
    'epsilon',
    'isgoodnum',
    'close',
    'vect',
    'unit',
    'pad',
    'add',
    'sub',
    'scale',
    'dot',
    'mag',
    'vclose',
    'VectorTable',
]
