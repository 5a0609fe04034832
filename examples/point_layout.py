import argparse
import logging
import time

import numpy as np

from tinydual.config import LayoutConfig
from tinydual.layout import to_points
from tinydual.render import FrameWriter, render_points
from tinydual.report import chain, log_progress
from tinydual.serialization import save_result


def parse_args():
    p = argparse.ArgumentParser(description="Lay out connected points by gradient descent.")
    p.add_argument("--points", type=int, default=10)
    p.add_argument("--iterations", type=int, default=1000)
    p.add_argument("--lr", type=float, default=0.01)
    p.add_argument("--connection-weight", type=float, default=10.0)
    p.add_argument("--out", default="image.svg")
    p.add_argument("--frames", default=None, help="directory for per-iteration SVG frames")
    p.add_argument("--save", default=None, help="write the result to this .npz file")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args()


def main():
    args = parse_args()
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")

    cfg = LayoutConfig(
        points=args.points,
        iterations=args.iterations,
        learning_rate=args.lr,
        connection_weight=args.connection_weight,
    )
    # the default connections refer to 10 points
    if args.points != 10:
        cfg = LayoutConfig(**{**cfg.to_dict(), "connections": [(i, i + 1) for i in range(args.points - 1)]})

    hooks = []
    layout = cfg.build_layout()
    if args.verbose:
        hooks.append(log_progress(layout.loss, period=100))
    if args.frames:
        hooks.append(FrameWriter(cfg.connections, args.frames, every=10))
    layout.hook = chain(*hooks) if hooks else None

    t0 = time.time()
    result = layout.optimize(cfg.start(), cfg.iterations, cfg.learning_rate)
    dt = time.time() - t0

    loss = float(layout.loss(result).value)
    print(loss)
    if not np.isfinite(loss):
        print("warning: loss is not finite, points probably overlapped")
    print(f"{cfg.iterations} iterations in {dt:.2f}s")

    render_points(cfg.connections, to_points(result), args.out)
    print(f"wrote {args.out}")

    if args.save:
        save_result(args.save, result, loss=loss, meta=cfg.to_dict())
        print(f"saved result to {args.save}")


if __name__ == "__main__":
    main()
