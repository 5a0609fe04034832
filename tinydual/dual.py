import numbers

import numpy as np

# numeric degeneracies (1/0, pow of a negative base) must come out as inf/nan
_QUIET = dict(divide="ignore", invalid="ignore", over="ignore")


def _frozen(partials):
    partials.flags.writeable = False
    return partials


#a dual scalar carries a value plus its partial derivative w.r.t. every input variable
class Dual:
    __slots__ = ("_value", "_partials")

    # keep numpy scalars from swallowing Dual operands
    __array_ufunc__ = None

    def __init__(self, value, partials):
        partials = np.array(partials, dtype=np.float64)
        if partials.ndim != 1:
            raise ValueError(f"partials must be 1-d, got shape {partials.shape}")
        self._value = np.float64(value)
        self._partials = _frozen(partials)

    @classmethod
    def _make(cls, value, partials):
        # partials already a fresh float64 array owned by the result
        out = cls.__new__(cls)
        out._value = np.float64(value)
        out._partials = _frozen(partials)
        return out

    @property
    def value(self):
        return self._value

    @property
    def partials(self):
        return self._partials

    @property
    def n(self):
        return self._partials.shape[0]

    # ---- construction ----

    @classmethod
    def constant(cls, value, n):
        return cls._make(value, np.zeros(n, dtype=np.float64))

    @classmethod
    def zero(cls, n):
        return cls.constant(0.0, n)

    @classmethod
    def variable(cls, value, index, n):
        if not 0 <= index < n:
            raise IndexError(f"variable index {index} out of range for {n} variables")
        partials = np.zeros(n, dtype=np.float64)
        partials[index] = 1.0
        return cls._make(value, partials)

    @classmethod
    def select(cls, values, index):
        return cls.variable(values[index], index, len(values))

    @classmethod
    def variables(cls, values):
        n = len(values)
        return [cls.variable(values[i], i, n) for i in range(n)]

    @classmethod
    def sum(cls, items, n=None):
        """
        Fold ``items`` with ``+`` starting from the all-zero dual.
        ``n`` may be omitted when ``items`` is non-empty.
        """
        items = iter(items)
        if n is None:
            first = next(items, None)
            if first is None:
                raise ValueError("Dual.sum of an empty sequence needs n")
            n = first.n
            acc = cls.zero(n) + first
        else:
            acc = cls.zero(n)
        for item in items:
            acc = acc + item
        return acc

    # ---- coercion ----

    def _coerce(self, other):
        if isinstance(other, Dual):
            if other.n != self.n:
                raise ValueError(f"dual size mismatch: {self.n} vs {other.n}")
            return other
        if isinstance(other, numbers.Real):
            return Dual.constant(other, self.n)
        return None

    # ---- arithmetic ----

    def __add__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        with np.errstate(**_QUIET):
            return Dual._make(self._value + other._value, self._partials + other._partials)

    def __sub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        with np.errstate(**_QUIET):
            return Dual._make(self._value - other._value, self._partials - other._partials)

    def __mul__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        a, b = self, other
        with np.errstate(**_QUIET):
            # product rule
            partials = a._partials * b._value + a._value * b._partials
            return Dual._make(a._value * b._value, partials)

    def __truediv__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other.recip() * self

    def __radd__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other + self

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other - self

    def __rmul__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other * self

    def __rtruediv__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.recip() * other

    def __neg__(self):
        return Dual._make(-self._value, -self._partials)

    def __pow__(self, p):
        if isinstance(p, bool):
            return NotImplemented
        if isinstance(p, numbers.Integral):
            return self.powi(int(p))
        if isinstance(p, numbers.Real):
            return self.powf(float(p))
        return NotImplemented

    def recip(self):
        v = self._value
        with np.errstate(**_QUIET):
            return Dual._make(np.float64(1.0) / v, -self._partials / (v * v))

    def powu(self, n):
        # exponentiation by squaring
        if n < 0:
            raise ValueError(f"powu needs a non-negative exponent, got {n}")
        acc = Dual.constant(1.0, self.n)
        base = self
        while n > 0:
            if n & 1:
                acc = acc * base
            n >>= 1
            if n:
                base = base * base
        return acc

    def powi(self, n):
        if n >= 0:
            return self.powu(n)
        return self.recip().powu(-n)

    def powf(self, p):
        v = self._value
        with np.errstate(**_QUIET):
            # chain rule through x**p
            partials = self._partials * p * np.power(v, p - 1.0)
            return Dual._make(np.power(v, p), partials)

    def sqrt(self):
        return self.powf(0.5)

    def __float__(self):
        return float(self._value)

    def __repr__(self):
        return f"Dual(value={self._value!r}, partials={self._partials.tolist()!r})"
