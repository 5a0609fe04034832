"""
Fixed-size vectors and matrices, generic over the scalar type.

Elements only need ``+``, ``-``, ``*`` and a square root, so the same
code runs over plain floats (for drawing) and over ``Dual`` scalars
(for gradients).
"""
import numbers
from functools import reduce
from typing import Protocol, Union

import numpy as np


class SupportsSqrt(Protocol):
    def sqrt(self): ...


def sqrt(x: Union[float, SupportsSqrt]):
    # plain reals get IEEE sqrt (nan for negatives), anything else brings its own
    if isinstance(x, numbers.Real):
        with np.errstate(invalid="ignore"):
            return float(np.sqrt(x))
    return x.sqrt()


class Vector:
    __slots__ = ("_items",)
    __array_ufunc__ = None

    def __init__(self, items):
        self._items = tuple(items)

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __getitem__(self, idx):
        return self._items[idx]

    def __repr__(self):
        return f"Vector({list(self._items)!r})"

    def _check(self, other):
        if len(other) != len(self):
            raise ValueError(f"vector length mismatch: {len(self)} vs {len(other)}")

    def dot(self, other):
        self._check(other)
        return sum(a * b for a, b in zip(self._items, other))

    def length_square(self):
        return self.dot(self)

    def length(self):
        return sqrt(self.length_square())

    def __add__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        self._check(other)
        return Vector(a + b for a, b in zip(self._items, other._items))

    def __sub__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        self._check(other)
        return Vector(a - b for a, b in zip(self._items, other._items))

    def __mul__(self, s):
        if isinstance(s, (Vector, Matrix)):
            return NotImplemented
        return Vector(a * s for a in self._items)

    def __rmul__(self, s):
        if isinstance(s, (Vector, Matrix)):
            return NotImplemented
        return Vector(s * a for a in self._items)

    def to_numpy(self):
        return np.array([float(a) for a in self._items], dtype=np.float64)


#N x M matrix stored as M column vectors of length N
class Matrix:
    __slots__ = ("_columns", "_rows")
    __array_ufunc__ = None

    def __init__(self, columns, rows=None):
        cols = tuple(c if isinstance(c, Vector) else Vector(c) for c in columns)
        if cols:
            n = len(cols[0])
            for j, c in enumerate(cols):
                if len(c) != n:
                    raise ValueError(f"column {j} has length {len(c)}, expected {n}")
            if rows is not None and rows != n:
                raise ValueError(f"columns have length {n}, expected {rows}")
        else:
            n = 0 if rows is None else rows
        self._columns = cols
        self._rows = n

    @classmethod
    def from_columns(cls, columns):
        return cls(columns)

    @classmethod
    def from_rows(cls, rows):
        rows = [list(r) for r in rows]
        if not rows:
            return cls(())
        m = len(rows[0])
        for i, r in enumerate(rows):
            if len(r) != m:
                raise ValueError(f"row {i} has length {len(r)}, expected {m}")
        return cls((Vector(r[j] for r in rows) for j in range(m)), rows=len(rows))

    @classmethod
    def diagonal(cls, values, zero=0.0):
        values = list(values)
        k = len(values)
        return cls(
            (Vector(values[j] if i == j else zero for i in range(k)) for j in range(k)),
            rows=k,
        )

    @property
    def shape(self):
        return (self._rows, len(self._columns))

    @property
    def columns(self):
        return self._columns

    def __len__(self):
        return len(self._columns)

    def __iter__(self):
        return iter(self._columns)

    def __getitem__(self, j):
        return self._columns[j]

    def __repr__(self):
        return f"Matrix({[list(c) for c in self._columns]!r})"

    def _check(self, other):
        if other.shape != self.shape:
            raise ValueError(f"matrix shape mismatch: {self.shape} vs {other.shape}")

    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check(other)
        return Matrix((a + b for a, b in zip(self._columns, other._columns)), rows=self._rows)

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        self._check(other)
        return Matrix((a - b for a, b in zip(self._columns, other._columns)), rows=self._rows)

    def _mul_vector(self, v):
        m = len(self._columns)
        if m == 0:
            raise ValueError("matrix-vector product needs at least one column")
        if len(v) != m:
            raise ValueError(f"matrix has {m} columns but vector has length {len(v)}")
        # sum of columns scaled by the matching input component
        return reduce(lambda acc, col: acc + col, (c * s for c, s in zip(self._columns, v)))

    def __matmul__(self, other):
        if isinstance(other, Vector):
            return self._mul_vector(other)
        if isinstance(other, Matrix):
            if other.shape[0] != len(self._columns):
                raise ValueError(f"cannot multiply {self.shape} by {other.shape}")
            return Matrix((self._mul_vector(c) for c in other._columns), rows=self._rows)
        return NotImplemented

    def to_numpy(self):
        n, m = self.shape
        out = np.zeros((n, m), dtype=np.float64)
        for j, c in enumerate(self._columns):
            out[:, j] = c.to_numpy()
        return out
