import logging

import numpy as np

from tinydual.dual import Dual

logger = logging.getLogger(__name__)


def _as_vars(vars):
    out = np.array(vars, dtype=np.float64)
    if out.ndim != 1:
        raise ValueError(f"variables must be a 1-d vector, got shape {out.shape}")
    return out


def _readonly(vars):
    view = vars.view()
    view.flags.writeable = False
    return view


class GradientDescent:
    # plain steepest descent: no momentum, no schedule, no stopping rule
    def __init__(self, lr=1e-2):
        self.lr = lr

    def step(self, vars, loss: Dual):
        if loss.n != vars.shape[0]:
            raise ValueError(f"loss has {loss.n} partials but there are {vars.shape[0]} variables")
        with np.errstate(over="ignore", invalid="ignore"):
            return vars - self.lr * loss.partials

    def run(self, vars, loss_fn, iterations, report=None):
        """
        Evaluate ``loss_fn`` and step every variable against its partial,
        ``iterations`` times. ``report(i, vars)`` is called before each
        evaluation and gets a read-only view. Returns a new array.
        """
        if iterations < 0:
            raise ValueError(f"iterations must be non-negative, got {iterations}")
        vars = _as_vars(vars)
        logger.debug("gradient descent: %d variables, %d iterations, lr=%g",
                     vars.shape[0], iterations, self.lr)

        for i in range(iterations):
            view = _readonly(vars)
            if report is not None:
                report(i, view)
            loss = loss_fn(view)
            vars = self.step(vars, loss)

        logger.debug("gradient descent finished after %d iterations", iterations)
        return vars


def gradient_descent(vars, loss_fn, iterations, learning_rate, report=None):
    return GradientDescent(lr=learning_rate).run(vars, loss_fn, iterations, report=report)


class Optimizable:
    """
    Base for loss collaborators. Subclasses implement ``loss(vars)``
    returning a ``Dual`` over ``len(vars)`` variables and may override
    ``report(i, vars)``, which does nothing by default.
    """

    def loss(self, vars) -> Dual:
        raise NotImplementedError

    def report(self, i: int, vars) -> None:
        pass

    def optimize(self, vars, iterations: int, learning_rate: float):
        return gradient_descent(vars, self.loss, iterations, learning_rate, report=self.report)
