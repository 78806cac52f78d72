import logging
from typing import Optional

import numpy as np

from .config import SolverConfig, load_config, quiet_from_env
from .matrix import CacheableMatrix
from .solvers import get_solver

logger = logging.getLogger(__name__)


def cache_solve(x: CacheableMatrix, method: Optional[str] = None, *,
                config: Optional[SolverConfig] = None,
                quiet: Optional[bool] = None, **options) -> np.ndarray:
    """
    Return the inverse of the matrix held by `x`.

    The first call for a given value computes the inverse and stores it on
    `x`; later calls return that same array until `x.set(...)` replaces the
    value.

    Args:
        x: Matrix created with CacheableMatrix
        method: solver name (see `solvers.available_solvers()`); defaults
            to the configured `default_method`
        config: defaults for method, quiet and solver options; read from
            the environment when omitted
        quiet: suppress the "getting cached inverse" log record
        **options: passed unchanged to the solver

    Note:
        `method` and `options` only matter on a cache miss. A cached
        inverse is returned as-is even if it was computed with different
        solver options.
        The returned array is read-only; copy it before modifying.

    Raises:
        InversionFailure: the value is not square, singular or not finite.
            Nothing is cached, so a later call retries.
    """
    inverse = x.get_inverse()
    if inverse is not None:
        if quiet is None:
            quiet = config.quiet if config is not None else quiet_from_env()
        if not quiet:
            logger.info("getting cached inverse")
        return inverse

    if config is None:
        config = load_config()

    method = method or config.default_method
    solver = get_solver(method)
    options = {**config.solver_defaults(method), **options}

    value = x.get()
    logger.debug(f"Computing inverse with {method} (shape={value.shape}, generation={x.generation})")
    inverse = solver(value, **options)
    x.set_inverse(inverse)
    return inverse
