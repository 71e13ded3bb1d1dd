"""Exception hierarchy for crn_conservation.

Malformed input raises a subclass of :class:`NetworkError`, which is also a
``ValueError`` so callers that already guard with ``except ValueError`` keep
working. A network without conservation laws is a normal result, never an
exception.
"""

from __future__ import annotations

from typing import Optional

import sympy as sp


class ConservationError(Exception):
    """Base class for all errors raised by this package."""


class NetworkError(ConservationError, ValueError):
    """The reaction network description is malformed."""


class EmptyNetworkError(NetworkError):
    """The network has no reactions."""


class UnknownSpeciesError(NetworkError):
    """A reaction refers to a species outside the declared species list."""

    def __init__(self, species: str, known=None) -> None:
        self.species = species
        self.known = list(known) if known is not None else None
        msg = f"Unknown species '{species}'"
        if self.known is not None:
            msg += f". Known: {self.known}"
        super().__init__(msg)


class StoichiometryError(NetworkError):
    """A stoichiometric coefficient or species name is invalid."""


class ReactionSyntaxError(NetworkError):
    """A reaction string could not be parsed."""


class CanonicalBasisError(ConservationError, RuntimeError):
    """No 0/1 nonnegative basis could be completed from the null space.

    Attributes
    ----------
    partial:
        The laws accepted before the search gave up (m×j matrix, j < k).
    expected:
        The null-space dimension k.
    """

    def __init__(self, partial: Optional[sp.Matrix], expected: int) -> None:
        self.partial = partial
        self.expected = int(expected)
        found = partial.cols if partial is not None else 0
        super().__init__(
            f"Could not canonicalize basis: found {found} of {self.expected} "
            "nonnegative 0/1 conservation laws"
        )
