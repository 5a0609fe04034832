import logging
from pathlib import Path

import matplotlib.patches as patches
from matplotlib.figure import Figure

from tinydual.layout import to_points

logger = logging.getLogger(__name__)

WIDTH = 5.0
HEIGHT = 5.0


def layout_figure(connections, points, width=WIDTH, height=HEIGHT):
    """
    Draw ``points`` (2-d float vectors) centred on a width x height canvas.
    Y grows downwards, matching SVG coordinates.
    """
    fig = Figure(figsize=(6, 6))
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_aspect("equal")
    ax.axis("off")

    cx, cy = width * 0.5, height * 0.5

    # axes through the centre
    ax.plot([0, width], [cy, cy], color="black", linewidth=0.5)
    ax.plot([cx, cx], [0, height], color="black", linewidth=0.5)

    for i, j in connections:
        p1, p2 = points[i], points[j]
        ax.plot([p1[0] + cx, p2[0] + cx], [p1[1] + cy, p2[1] + cy],
                color="gray", linewidth=0.5)

    for i, p in enumerate(points):
        x, y = p[0] + cx, p[1] + cy
        ax.add_patch(patches.Circle((x, y), 0.1, facecolor="white",
                                    edgecolor="black", linewidth=0.5, zorder=3))
        ax.text(x, y, str(i), ha="center", va="center", fontsize=6, zorder=4)

    return fig


def render_points(connections, points, path, width=WIDTH, height=HEIGHT):
    path = Path(path)
    fig = layout_figure(connections, points, width=width, height=height)
    fig.savefig(path, format="svg")
    logger.debug("wrote %s", path)
    return path


class FrameWriter:
    # reporting hook: dump frameNNNN.svg every `every` iterations
    def __init__(self, connections, directory="frames", every=10):
        if every <= 0:
            raise ValueError(f"every must be positive, got {every}")
        self.connections = list(connections)
        self.directory = Path(directory)
        self.every = every
        self.written = []

    def __call__(self, i, vars):
        if i % self.every:
            return
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / f"frame{i // self.every:04d}.svg"
        render_points(self.connections, to_points(vars), path)
        self.written.append(path)
