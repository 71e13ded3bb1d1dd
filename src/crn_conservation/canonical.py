"""Canonical 0/1 basis of the conservation-law space.

A raw null-space basis W (m×k) generally has negative or fractional
entries. `canonical_basis` looks for k columns that

- have every entry in {0, 1} and are nonzero,
- are linearly independent (hence span the same space as W),
- have irredundant supports: no accepted support contains another.

The basis is first brought to reduced form (rref of Wᵗ, transposed back):
each column then has a 1 at its own pivot row and 0 at every other pivot
row, so a sum of columns contains another law only if its subset of
columns does. Columns that already qualify are kept, then subsets of
the reduced columns are summed in order of increasing size. Within a size,
subsets are visited in lexicographic order of their column indices, so the
result is reproducible. The number of candidates is C(k, i) per size i;
this is only practical for small k, the usual case for biochemical
networks.
"""

from __future__ import annotations

import logging
from itertools import combinations
from typing import FrozenSet, List, Optional

import sympy as sp

from .exceptions import CanonicalBasisError

logger = logging.getLogger(__name__)


def _is_binary(v: sp.Matrix) -> bool:
    """True iff every entry of v is 0 or 1 and at least one is 1."""
    return all(x == 0 or x == 1 for x in v) and any(x == 1 for x in v)


def _support(v: sp.Matrix) -> FrozenSet[int]:
    return frozenset(i for i, x in enumerate(v) if x != 0)


def _stack(cols: List[sp.Matrix], m: int) -> sp.Matrix:
    if not cols:
        return sp.Matrix.zeros(m, 0)
    return sp.Matrix.hstack(*cols)


def _is_new_law(candidate: sp.Matrix, accepted: List[sp.Matrix]) -> bool:
    """Check nonnegativity, 0/1 range, irredundancy and independence."""
    if any(x < 0 for x in candidate):
        return False
    if any(x > 1 for x in candidate):
        return False
    if not _is_binary(candidate):
        return False

    supp = _support(candidate)
    for law in accepted:
        if _support(law) <= supp:
            return False

    if accepted:
        M = sp.Matrix.hstack(*accepted, candidate)
        if M.rank() < M.cols:
            return False
    return True


def canonical_basis(
    W: sp.Matrix,
    *,
    max_subset_size: Optional[int] = None,
    allow_partial: bool = False,
) -> sp.Matrix:
    """Transform a null-space basis into nonnegative 0/1 conservation laws.

    Parameters
    ----------
    W:
        m×k basis matrix (columns span the left null space of N).
    max_subset_size:
        Largest number of columns of W summed in one candidate. Defaults to k.
    allow_partial:
        If True, return the laws found so far when no complete basis exists
        instead of raising.

    Returns
    -------
    sympy.Matrix
        m×k matrix of 0/1 columns in discovery order (seed columns first).
        Use `order_columns` for the canonical column order.

    Raises
    ------
    CanonicalBasisError
        If fewer than k laws are found and `allow_partial` is False.
    """
    W = sp.Matrix(W)
    m, k = W.shape
    if k == 0:
        return sp.Matrix.zeros(m, 0)

    # One pivot 1 per column; dependent columns of W drop out here.
    R = W.T.rref()[0]
    rows = [R[i, :] for i in range(R.rows) if any(x != 0 for x in R[i, :])]
    if not rows:
        return sp.Matrix.zeros(m, 0)
    W = sp.Matrix.vstack(*rows).T
    k = W.cols

    columns = [W[:, j] for j in range(k)]

    # Seed with the columns that are already 0/1-valued.
    accepted: List[sp.Matrix] = [c for c in columns if _is_binary(c)]
    logger.debug("seeded canonical basis with %d of %d columns", len(accepted), k)

    limit = k if max_subset_size is None else min(int(max_subset_size), k)
    done = len(accepted) == k
    for size in range(2, limit + 1):
        if done:
            break
        for subset in combinations(range(k), size):
            candidate = columns[subset[0]]
            for j in subset[1:]:
                candidate = candidate + columns[j]
            if _is_new_law(candidate, accepted):
                logger.debug("accepted sum of columns %s", subset)
                accepted.append(candidate)
                if len(accepted) == k:
                    done = True
                    break

    W_new = _stack(accepted, m)
    if not done:
        if allow_partial:
            logger.warning("found only %d of %d nonnegative 0/1 conservation laws", len(accepted), k)
            return W_new
        raise CanonicalBasisError(W_new, k)
    return W_new


def first_nonzero_rows(W: sp.Matrix) -> List[int]:
    """Row index of the first nonzero entry of each column."""
    out: List[int] = []
    for j in range(W.cols):
        rows = [i for i in range(W.rows) if W[i, j] != 0]
        if not rows:
            raise ValueError(f"column {j} is zero")
        out.append(rows[0])
    return out


def order_columns(W: sp.Matrix) -> sp.Matrix:
    """Reorder columns so that their first nonzero rows are ascending.

    The sort is stable: columns with the same first nonzero row keep their
    relative order.
    """
    if W.cols == 0:
        return sp.Matrix(W)
    firsts = first_nonzero_rows(W)
    order = sorted(range(W.cols), key=lambda j: firsts[j])
    return sp.Matrix.hstack(*[W[:, j] for j in order])
