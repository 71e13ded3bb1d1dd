from __future__ import annotations

import logging
from typing import List

import sympy as sp

logger = logging.getLogger(__name__)


def _matrix_from_nullspace(nullspace: List[sp.Matrix], n: int) -> sp.Matrix:
    """Stack a list of n×1 vectors into an n×k matrix."""
    if not nullspace:
        return sp.Matrix.zeros(n, 0)
    cols = [sp.Matrix(v) for v in nullspace]
    return sp.Matrix.hstack(*cols)


def left_null_space(N: sp.Matrix) -> sp.Matrix:
    """Return a basis W of the left null space of N as an m×k matrix.

    Every column w satisfies wᵗN = 0. The basis is the exact rational one
    obtained from the reduced row echelon form of Nᵗ: each column has a 1 at
    its own free variable and 0 at every other free variable.

    A matrix with no columns has every coordinate vector in its left null
    space.
    """
    N = sp.Matrix(N)
    m = N.rows
    if N.cols == 0:
        return sp.eye(m)

    # Left nullspace of N is right nullspace of N.T.
    W = _matrix_from_nullspace(N.T.nullspace(), m)
    logger.debug("left null space of %dx%d matrix has dimension %d", N.rows, N.cols, W.cols)
    return W
