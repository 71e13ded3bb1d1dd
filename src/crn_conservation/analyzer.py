from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np
import sympy as sp

from .canonical import canonical_basis, order_columns
from .network import ReactionNetwork
from .nullspace import left_null_space

logger = logging.getLogger(__name__)


def _sanitize_symbol_name(name: str) -> str:
    # SymPy symbols may include many characters, but we keep a conservative subset
    allowed = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_")
    if not name:
        return "x"
    cleaned = "".join(ch if ch in allowed else "_" for ch in name)
    if cleaned[0].isdigit():
        cleaned = "x_" + cleaned
    return cleaned


def concentration_symbols(species: List[str], lowercase: bool = False) -> List[sp.Symbol]:
    """One real symbol per species, in the given order.

    With ``lowercase`` the names are lowercased, unless that would make two
    species share a symbol, in which case the original case is kept.
    """
    names = [_sanitize_symbol_name(s) for s in species]
    if lowercase:
        lowered = [n.lower() for n in names]
        if len(set(lowered)) == len(lowered):
            names = lowered
        else:
            logger.debug("lowercase concentration names collide; keeping original case")
    if len(set(names)) != len(names):
        raise ValueError(f"Species names collide after sanitizing: {species}")
    return [sp.Symbol(n, real=True) for n in names]


def _to_int_array(M: sp.Matrix) -> np.ndarray:
    return np.array([[int(x) for x in row] for row in M.tolist()], dtype=np.int64).reshape(M.shape)


@dataclass
class ConservationOptions:
    """Tunable knobs for the conservation-law computation."""

    total_prefix: str = "T"
    lowercase_concentrations: bool = False
    allow_partial: bool = False
    max_subset_size: Optional[int] = None


@dataclass
class ConservationLaws:
    """Result of `ConservationAnalyzer.compute`.

    Attributes
    ----------
    network:
        The analysed network.
    species:
        Species in canonical order (rows of N, W and W_new).
    N:
        Stoichiometric matrix.
    W:
        Raw left null-space basis of N.
    W_new:
        Canonical 0/1 basis, columns ordered by first nonzero row.
    lhs:
        Left-hand sides Σ concentrations, one per law.
    T:
        Total-amount symbols T1..Tk.
    equations:
        ``sympy.Eq(lhs[i], T[i])``.
    notice:
        Human-readable notice when there are no laws or only some of them
        have a 0/1 form, else ``None``.
    """

    network: ReactionNetwork
    species: List[str]
    N: sp.Matrix
    W: sp.Matrix
    W_new: sp.Matrix
    concentrations: List[sp.Symbol]
    lhs: List[sp.Expr] = field(default_factory=list)
    T: List[sp.Symbol] = field(default_factory=list)
    equations: List[sp.Eq] = field(default_factory=list)
    notice: Optional[str] = None

    def __len__(self) -> int:
        return len(self.T)

    @property
    def has_laws(self) -> bool:
        return len(self) > 0

    @property
    def is_complete(self) -> bool:
        """True iff every null-space direction has a 0/1 law."""
        return len(self) == self.W.cols

    def supports(self) -> List[Tuple[str, ...]]:
        """Species of each law, in canonical species order."""
        out: List[Tuple[str, ...]] = []
        for j in range(self.W_new.cols):
            out.append(tuple(s for i, s in enumerate(self.species) if self.W_new[i, j] == 1))
        return out

    def as_strings(self) -> List[str]:
        """Equations as text, e.g. "A + B + C = T1"."""
        lines: List[str] = []
        for j, total in enumerate(self.T):
            terms = [str(c) for i, c in enumerate(self.concentrations) if self.W_new[i, j] == 1]
            lines.append(f"{' + '.join(terms)} = {total}")
        return lines

    def to_numpy(self) -> Dict[str, np.ndarray]:
        """Return N and W_new as integer arrays and W as a float array."""
        return {
            "N": _to_int_array(self.N),
            "W_new": _to_int_array(self.W_new),
            "W": np.array(self.W.tolist(), dtype=float).reshape(self.W.shape),
        }

    def to_latex(self) -> str:
        """Export the laws as an ``align`` environment."""
        lines = [f"{sp.latex(lhs)} &= {sp.latex(t)}" for lhs, t in zip(self.lhs, self.T)]
        body = " \\\\\n".join(lines)
        return "\\begin{align}\n" + body + "\n\\end{align}"


@dataclass
class ConservationAnalyzer:
    """Compute the conservation laws of a reaction network.

    Parameters
    ----------
    network:
        A `ReactionNetwork`.
    options:
        `ConservationOptions`; defaults are used when omitted.

    Examples
    --------
    >>> net = ReactionNetwork.from_string("A -> B; B -> C")
    >>> ConservationAnalyzer(net).compute().as_strings()
    ['A + B + C = T1']
    """

    network: ReactionNetwork
    options: ConservationOptions = field(default_factory=ConservationOptions)

    def stoichiometric_matrix(self) -> sp.Matrix:
        return self.network.stoichiometric_matrix()

    def raw_basis(self, N: Optional[sp.Matrix] = None) -> sp.Matrix:
        """Return the left null-space basis W of N."""
        if N is None:
            N = self.stoichiometric_matrix()
        return left_null_space(N)

    def canonical_basis(self, W: Optional[sp.Matrix] = None) -> sp.Matrix:
        """Return W_new, columns in canonical order."""
        if W is None:
            W = self.raw_basis()
        W_new = canonical_basis(
            W,
            max_subset_size=self.options.max_subset_size,
            allow_partial=self.options.allow_partial,
        )
        return order_columns(W_new)

    def compute(self) -> ConservationLaws:
        net = self.network
        species = net.species
        conc = concentration_symbols(species, lowercase=self.options.lowercase_concentrations)
        N = net.stoichiometric_matrix()
        W = left_null_space(N)
        logger.debug("%s: %d species, %d reaction columns, %d conservation laws", net.id, N.rows, N.cols, W.cols)

        if W.cols == 0:
            notice = f"{net.id} has no conservation laws."
            logger.info(notice)
            return ConservationLaws(
                network=net,
                species=species,
                N=N,
                W=W,
                W_new=sp.Matrix.zeros(len(species), 0),
                concentrations=conc,
                notice=notice,
            )

        W_new = self.canonical_basis(W)
        k = W_new.cols
        notice = None
        if k < W.cols:
            notice = f"{net.id}: found {k} of {W.cols} nonnegative 0/1 conservation laws."
        T = [sp.Symbol(f"{self.options.total_prefix}{i+1}", real=True) for i in range(k)]
        lhs = [sp.Add(*[c for i, c in enumerate(conc) if W_new[i, j] == 1]) for j in range(k)]
        equations = [sp.Eq(l, t) for l, t in zip(lhs, T)]

        return ConservationLaws(
            network=net,
            species=species,
            N=N,
            W=W,
            W_new=W_new,
            concentrations=conc,
            lhs=lhs,
            T=T,
            equations=equations,
            notice=notice,
        )


def conservation_laws(network: ReactionNetwork, options: Optional[ConservationOptions] = None) -> ConservationLaws:
    """Shortcut for ``ConservationAnalyzer(network, options).compute()``."""
    return ConservationAnalyzer(network, options or ConservationOptions()).compute()
