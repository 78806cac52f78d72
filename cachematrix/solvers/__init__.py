"""
Inversion routines available to `cache_solve`, looked up by name.

Every solver takes a square matrix plus keyword options and returns the
inverse as a numpy array, raising `InversionFailure` subclasses on bad input.
"""

from typing import Callable, Dict, List

import numpy as np

from ..exceptions import UnknownSolverError
from . import gauss_jordan, lu_numpy, numpy_inv

Solver = Callable[..., np.ndarray]


def _torch_solver(A, **options):
    try:
        from .lu_torch import invert_matrix
    except ImportError as e:
        raise ImportError(
            "The 'torch' solver needs PyTorch: pip install 'cachematrix[gpu]'"
        ) from e
    return invert_matrix(A, **options)


_SOLVERS: Dict[str, Solver] = {
    "numpy": numpy_inv.invert_matrix,
    "lu": lu_numpy.invert_matrix,
    "gauss_jordan": gauss_jordan.invert_matrix,
    "torch": _torch_solver,
}


def register_solver(name: str, fn: Solver) -> None:
    _SOLVERS[name] = fn


def get_solver(name: str) -> Solver:
    try:
        return _SOLVERS[name]
    except KeyError:
        raise UnknownSolverError(
            f"Unknown solver {name!r}, expected one of {available_solvers()}"
        ) from None


def available_solvers() -> List[str]:
    return sorted(_SOLVERS)


__all__ = ["Solver", "register_solver", "get_solver", "available_solvers"]
