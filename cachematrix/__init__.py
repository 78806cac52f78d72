"""
cachematrix: a square matrix whose inverse is computed once and cached
until the matrix changes.
"""

from .config import SolverConfig, load_config
from .exceptions import (
    ConfigError,
    InversionFailure,
    NonFiniteMatrixError,
    NonSquareMatrixError,
    SingularMatrixError,
    UnknownSolverError,
)
from .matrix import ABSENT, Absent, CacheableMatrix, Present
from .solve import cache_solve
from .solvers import available_solvers, get_solver, register_solver

__version__ = "0.1.0"

__all__ = [
    "CacheableMatrix",
    "cache_solve",
    "Absent",
    "Present",
    "ABSENT",
    "SolverConfig",
    "load_config",
    "available_solvers",
    "get_solver",
    "register_solver",
    "InversionFailure",
    "NonSquareMatrixError",
    "SingularMatrixError",
    "NonFiniteMatrixError",
    "UnknownSolverError",
    "ConfigError",
]
