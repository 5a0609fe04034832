import math

import numpy as np

from tinydual.dual import Dual
from tinydual.linalg import Vector
from tinydual.optim import Optimizable

DEFAULT_CONNECTIONS = (
    (0, 1), (0, 2), (0, 3), (3, 4), (1, 2), (3, 7),
    (0, 6), (1, 9), (9, 8), (5, 9), (4, 5),
)


def circle_start(points, radius=1.0):
    # interleaved x0, y0, x1, y1, ... on a circle around the origin
    out = np.zeros(2 * points, dtype=np.float64)
    for i in range(points):
        t = i / points * 6.28318
        out[2 * i] = math.sin(t) * radius
        out[2 * i + 1] = math.cos(t) * radius
    return out


def to_points(vars):
    vars = np.asarray(vars, dtype=np.float64)
    if vars.ndim != 1 or vars.shape[0] % 2:
        raise ValueError(f"expected an even-length 1-d vector, got shape {vars.shape}")
    return [Vector((float(x), float(y))) for x, y in vars.reshape(-1, 2)]


class PointLayout(Optimizable):
    """
    Lays out ``points`` 2-d points. The loss pulls every point towards
    the origin, pushes every pair apart through the reciprocal of their
    squared distance and pulls connected points together with weight
    ``connection_weight``.
    """

    def __init__(self, connections=DEFAULT_CONNECTIONS, points=10, connection_weight=10.0, hook=None):
        connections = [(int(i), int(j)) for i, j in connections]
        for i, j in connections:
            if not (0 <= i < points and 0 <= j < points):
                raise ValueError(f"connection ({i}, {j}) out of range for {points} points")
        self.connections = connections
        self.points = points
        self.connection_weight = connection_weight
        self.hook = hook

    @property
    def n(self):
        return 2 * self.points

    def dual_points(self, vars):
        if len(vars) != self.n:
            raise ValueError(f"expected {self.n} variables, got {len(vars)}")
        return [Vector((Dual.select(vars, 2 * i), Dual.select(vars, 2 * i + 1)))
                for i in range(self.points)]

    def loss(self, vars):
        points = self.dual_points(vars)
        acc = Dual.zero(self.n)

        # close to the origin
        for p in points:
            acc = acc + p.length_square()

        # far from each other
        for i, p1 in enumerate(points):
            for j, p2 in enumerate(points):
                if i == j:
                    continue
                acc = acc + (p1 - p2).length_square().recip()

        # connected points close together
        for i, j in self.connections:
            acc = acc + (points[i] - points[j]).length() * self.connection_weight

        return acc

    def report(self, i, vars):
        if self.hook is not None:
            self.hook(i, vars)

    def start(self, radius=1.0):
        return circle_start(self.points, radius=radius)
