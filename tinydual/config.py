from dataclasses import dataclass, asdict, field
from typing import Tuple

from tinydual.layout import DEFAULT_CONNECTIONS, PointLayout, circle_start


@dataclass(frozen=True)
class LayoutConfig:
    points: int = 10
    iterations: int = 1000
    learning_rate: float = 0.01
    connection_weight: float = 10.0
    radius: float = 1.0
    connections: Tuple[Tuple[int, int], ...] = field(default=DEFAULT_CONNECTIONS)

    def __post_init__(self):
        if self.points <= 0:
            raise ValueError(f"points must be positive, got {self.points}")
        if self.iterations < 0:
            raise ValueError(f"iterations must be non-negative, got {self.iterations}")
        # normalise lists from json/argparse into hashable tuples
        object.__setattr__(self, "connections", tuple((int(i), int(j)) for i, j in self.connections))

    def build_layout(self, hook=None):
        return PointLayout(self.connections, points=self.points,
                           connection_weight=self.connection_weight, hook=hook)

    def start(self):
        return circle_start(self.points, radius=self.radius)

    def to_dict(self):
        d = asdict(self)
        d["connections"] = [list(c) for c in self.connections]
        return d
