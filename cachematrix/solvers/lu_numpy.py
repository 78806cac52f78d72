import numpy as np

from ..exceptions import SingularMatrixError
from .validation import validate_square


def lu_decomposition(A, tol=0.0):
    U = A.astype(np.result_type(A, np.float64))
    n = U.shape[0]
    L = np.eye(n, dtype=U.dtype)
    P = np.eye(n)
    for i in range(n):
        # Pivot selection
        max_row = np.argmax(np.abs(U[i:, i])) + i
        if abs(U[max_row, i]) <= tol:
            raise SingularMatrixError(f"Singular matrix: zero pivot in column {i}")

        # Swap rows in U
        U[[i, max_row]] = U[[max_row, i]]
        P[[i, max_row]] = P[[max_row, i]]

        # Swap rows in L (only left part)
        if i > 0:
            L[[i, max_row], :i] = L[[max_row, i], :i]

        # Elimination, whole trailing block at once
        factors = U[i+1:, i] / U[i, i]
        L[i+1:, i] = factors
        U[i+1:, i:] -= np.outer(factors, U[i, i:])
    return P, L, U


def forward_substitution(L, B):
    # L has a unit diagonal
    n = L.shape[0]
    Y = np.zeros(B.shape, dtype=np.result_type(L, B))
    for i in range(n):
        Y[i] = B[i] - L[i, :i] @ Y[:i]
    return Y


def backward_substitution(U, Y):
    n = U.shape[0]
    X = np.zeros(Y.shape, dtype=np.result_type(U, Y))
    for i in reversed(range(n)):
        X[i] = (Y[i] - U[i, i+1:] @ X[i+1:]) / U[i, i]
    return X


def invert_matrix(A, tol=0.0):
    A = validate_square(A)
    P, L, U = lu_decomposition(A, tol=tol)

    # PA = LU  →  A⁻¹ = U⁻¹ L⁻¹ P, one substitution sweep per side
    Y = forward_substitution(L, P)
    return backward_substitution(U, Y)
