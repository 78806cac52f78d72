import numpy as np

from ..exceptions import NonFiniteMatrixError, NonSquareMatrixError


def validate_square(A) -> np.ndarray:
    """Return `A` as a 2-D float (or complex) array, or raise if it cannot be inverted."""
    A = np.asarray(A)
    A = A.astype(np.result_type(A, np.float64), copy=False)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise NonSquareMatrixError(f"Matrix must be square (n x n), got shape {A.shape}")
    if A.shape[0] == 0:
        raise NonSquareMatrixError("Matrix must have at least one row")
    if not np.all(np.isfinite(A)):
        raise NonFiniteMatrixError("Matrix contains NaN or inf entries")
    return A
