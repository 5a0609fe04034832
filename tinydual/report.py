"""
Reporting hooks for the gradient-descent driver.

A hook is any callable ``hook(i, vars)``; it runs once per iteration
before the loss is evaluated and must not change ``vars``.
"""
import logging

logger = logging.getLogger(__name__)


def every(k, hook):
    # fire on iterations 0, k, 2k, ...
    if k <= 0:
        raise ValueError(f"every() needs a positive period, got {k}")

    def _hook(i, vars):
        if i % k == 0:
            hook(i, vars)

    return _hook


def chain(*hooks):
    def _hook(i, vars):
        for h in hooks:
            h(i, vars)

    return _hook


class LossHistory:
    """Records (iteration, loss value) by evaluating ``loss_fn`` at each call."""

    def __init__(self, loss_fn):
        self.loss_fn = loss_fn
        self.iterations = []
        self.values = []

    def __call__(self, i, vars):
        self.iterations.append(i)
        self.values.append(float(self.loss_fn(vars).value))

    def __len__(self):
        return len(self.values)


def log_progress(loss_fn, period=100):
    def _hook(i, vars):
        logger.info("iter %d loss %.6g", i, float(loss_fn(vars).value))

    return every(period, _hook)
