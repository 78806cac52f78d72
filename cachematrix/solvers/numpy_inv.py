import numpy as np

from ..exceptions import SingularMatrixError
from .validation import validate_square


def invert_matrix(A):
    """Invert with numpy.linalg.inv (LAPACK getrf + getri)."""
    A = validate_square(A)
    try:
        return np.linalg.inv(A)
    except np.linalg.LinAlgError as e:
        raise SingularMatrixError(f"Singular matrix: {e}") from e
