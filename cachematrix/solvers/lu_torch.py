import logging
from typing import Tuple

import torch

from ..exceptions import SingularMatrixError
from .validation import validate_square

logger = logging.getLogger(__name__)


class LUPyTorch:
    """
    Matrix inversion using PyTorch's linear algebra routines.

    On a CUDA device these dispatch to cuSOLVER / cuBLAS; on CPU to LAPACK.
    Matrices stay in float64 (complex128 for complex input) so results
    agree with the numpy solvers.
    """

    def __init__(self, device: str = 'cpu'):
        """
        Args:
            device: 'cuda' for GPU, 'cpu' for CPU
        """
        if device == 'cuda' and not torch.cuda.is_available():
            logger.warning("CUDA not available, falling back to CPU")
            device = 'cpu'
        self.device = torch.device(device)

    def lu_decomposition(self, A: torch.Tensor, tol: float = 0.0) -> Tuple[torch.Tensor, torch.Tensor, torch.Tensor]:
        """
        Compute LU decomposition with partial pivoting: PA = LU

        Args:
            A: Input matrix [n, n]
            tol: pivots with magnitude <= tol count as zero

        Returns:
            L: Lower triangular with ones on diagonal [n, n]
            U: Upper triangular [n, n]
            P: Permutation matrix [n, n]
        """
        A = A.to(self.device)
        n = A.shape[0]

        LU, pivots, info = torch.linalg.lu_factor_ex(A)
        if info.item() != 0:
            raise SingularMatrixError(f"Singular matrix: zero pivot at position {info.item() - 1}")

        L = torch.tril(LU, diagonal=-1) + torch.eye(n, dtype=A.dtype, device=self.device)
        U = torch.triu(LU)
        if torch.any(torch.abs(torch.diagonal(U)) <= tol):
            raise SingularMatrixError("Singular matrix: pivot below tolerance")

        # LAPACK pivots are 1-based sequential row swaps
        P = torch.eye(n, dtype=A.dtype, device=self.device)
        for i, pivot in enumerate((pivots - 1).tolist()):
            if i != pivot:
                P[[i, pivot]] = P[[pivot, i]]

        return L, U, P

    def invert_triangular(self, T: torch.Tensor, lower: bool = True) -> torch.Tensor:
        n = T.shape[0]
        I = torch.eye(n, dtype=T.dtype, device=self.device)
        return torch.linalg.solve_triangular(T, I, upper=not lower)

    def invert_via_lu(self, A: torch.Tensor, tol: float = 0.0) -> torch.Tensor:
        """A^(-1) = U^(-1) @ L^(-1) @ P"""
        L, U, P = self.lu_decomposition(A, tol=tol)

        L_inv = self.invert_triangular(L, lower=True)
        U_inv = self.invert_triangular(U, lower=False)

        return U_inv @ L_inv @ P

    def invert_direct(self, A: torch.Tensor) -> torch.Tensor:
        A = A.to(self.device)
        try:
            return torch.linalg.inv(A)
        except RuntimeError as e:
            raise SingularMatrixError(f"Singular matrix: {e}") from e


def invert_matrix(A, device='cpu', via_lu=False, tol=0.0):
    A = validate_square(A)
    lu = LUPyTorch(device=device)
    A_t = torch.tensor(A)

    if via_lu:
        A_inv = lu.invert_via_lu(A_t, tol=tol)
    else:
        A_inv = lu.invert_direct(A_t)

    return A_inv.cpu().numpy()
