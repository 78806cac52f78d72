"""
A square matrix that remembers its inverse.

The inverse is stored by `cache_solve` and thrown away every time the
matrix value is replaced, so a stored inverse always belongs to the
current value.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Absent:
    """No inverse stored for the current value."""


@dataclass(frozen=True, eq=False)
class Present:
    matrix: np.ndarray


CacheSlot = Union[Absent, Present]

ABSENT = Absent()


def placeholder() -> np.ndarray:
    # 1x1 unpopulated matrix
    return np.full((1, 1), np.nan)


def frozen_copy(matrix) -> np.ndarray:
    """Read-only private copy of `matrix`."""
    out = np.array(matrix)
    out.setflags(write=False)
    return out


class CacheableMatrix:
    """
    Holds one matrix value and, optionally, its cached inverse.

    Usage:
        m = CacheableMatrix()                  # unpopulated 1x1 placeholder
        m.set(np.array([[2.0, 0.0], [0.0, 2.0]]))
        m.get()                                # current value
        cache_solve(m)                         # computes, then caches

    `set_inverse` / `get_inverse` are for `cache_solve`; callers should
    not need them.
    """

    def __init__(self, initial=None):
        self._value = frozen_copy(placeholder() if initial is None else initial)
        self._inverse: CacheSlot = ABSENT
        self.generation = 0

    def set(self, new_matrix) -> None:
        """Replace the value and drop any cached inverse. No validation."""
        if isinstance(self._inverse, Present):
            logger.debug(f"Discarding cached inverse (generation {self.generation})")
        self._value = frozen_copy(new_matrix)
        self._inverse = ABSENT
        self.generation += 1

    def get(self) -> np.ndarray:
        return self._value

    def set_inverse(self, matrix) -> None:
        """Store `matrix` as the inverse. The array is made read-only in place."""
        matrix = np.asarray(matrix)
        matrix.setflags(write=False)
        self._inverse = Present(matrix)

    def get_inverse(self) -> Optional[np.ndarray]:
        if isinstance(self._inverse, Present):
            return self._inverse.matrix
        return None

    @property
    def cache_state(self) -> CacheSlot:
        return self._inverse

    def has_inverse(self) -> bool:
        return isinstance(self._inverse, Present)

    def __repr__(self):
        state = "cached" if self.has_inverse() else "absent"
        return (f"CacheableMatrix(shape={self._value.shape}, "
                f"generation={self.generation}, inverse={state})")
