from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Sequence

import sympy as sp

from .exceptions import EmptyNetworkError, UnknownSpeciesError
from .parser import ReactionParser
from .reaction import Reaction, _complex_to_str

logger = logging.getLogger(__name__)

# Names like "X1", "X10", "Ia2".
_NUMBERED_RE = re.compile(r"^([A-Za-z]+)(\d+)$")

SPECIES_ORDERS = ("auto", "lexicographic", "numeric")


def _numeric_suffix(name: str) -> Optional[int]:
    m = _NUMBERED_RE.match(name)
    return int(m.group(2)) if m else None


def order_species(names: Iterable[str], mode: str = "auto") -> List[str]:
    """Deduplicate species names and put them in canonical order.

    Parameters
    ----------
    names:
        Species names in discovery order; duplicates are allowed.
    mode:
        - "lexicographic": sorted by name.
        - "numeric": every name must be an alphabetic prefix followed by an
          integer ("X1", "X2", "X10"); sorted by that integer, ties by name.
        - "auto": "numeric" when every name has that form, otherwise
          "lexicographic".
    """
    if mode not in SPECIES_ORDERS:
        raise ValueError(f"Unknown species order '{mode}'. Use one of {SPECIES_ORDERS}")

    unique = list(dict.fromkeys(names))
    suffixes = [_numeric_suffix(s) for s in unique]
    numbered = bool(unique) and all(n is not None for n in suffixes)

    if mode == "numeric" and not numbered:
        bad = [s for s, n in zip(unique, suffixes) if n is None]
        raise ValueError(f"Species names without a numeric suffix: {bad}")

    if mode == "lexicographic" or not numbered:
        return sorted(unique)
    return [s for _, s in sorted(zip(suffixes, unique))]


@dataclass
class ReactionNetwork:
    """A chemical reaction network.

    Parameters
    ----------
    reactions:
        List of `Reaction` objects, in declaration order.
    species_names:
        Optional explicit species ordering. When given it is used as is for
        every matrix row; otherwise the ordering is inferred from the names
        (see `order_species`).
    id:
        Label used in reports.
    species_order:
        Ordering rule used when `species_names` is not given.

    Notes
    -----
    The stoichiometric matrix N has one column per reaction, followed
    immediately by the negated column when the reaction is reversible.
    Conservation laws are the vectors w with wᵗN = 0.
    """

    reactions: List[Reaction] = field(default_factory=list)
    species_names: Optional[List[str]] = None
    id: str = "network"
    species_order: str = "auto"

    def __post_init__(self) -> None:
        self.reactions = list(self.reactions)
        if self.species_order not in SPECIES_ORDERS:
            raise ValueError(f"Unknown species order '{self.species_order}'. Use one of {SPECIES_ORDERS}")
        if self.species_names is not None:
            self.species_names = [str(s) for s in self.species_names]
            if len(set(self.species_names)) != len(self.species_names):
                raise ValueError("species_names must not contain duplicates")

    # -----------------------------
    # Builder
    # -----------------------------

    def add_reaction(
        self,
        reactants: Optional[Mapping[str, Any]] = None,
        products: Optional[Mapping[str, Any]] = None,
        reversible: bool = False,
        rate: Optional[sp.Expr] = None,
        name: Optional[str] = None,
    ) -> Reaction:
        """Append a reaction and return it."""
        rxn = Reaction(reactants or {}, products or {}, reversible=reversible, rate=rate, name=name)
        self.reactions.append(rxn)
        return rxn

    # -----------------------------
    # Network Normalizer
    # -----------------------------

    @property
    def species(self) -> List[str]:
        """Species in canonical order; this order indexes every matrix row."""
        if not self.reactions:
            raise EmptyNetworkError(f"{self.id} has no reactions")

        # Reactant species of every reaction first, then product species.
        seen = list(r for rxn in self.reactions for r in rxn.reactants)
        seen += list(p for rxn in self.reactions for p in rxn.products)

        if self.species_names is not None:
            known = set(self.species_names)
            for name in seen:
                if name not in known:
                    raise UnknownSpeciesError(name, self.species_names)
            return list(self.species_names)

        if not seen:
            raise EmptyNetworkError(f"{self.id} has reactions but no species")
        return order_species(seen, self.species_order)

    @property
    def n_species(self) -> int:
        return len(self.species)

    @property
    def n_reactions(self) -> int:
        """Number of declared reactions (reverse directions not counted)."""
        return len(self.reactions)

    @property
    def n_columns(self) -> int:
        """Number of columns of N, reverse directions included."""
        return sum(2 if r.reversible else 1 for r in self.reactions)

    # -----------------------------
    # Stoichiometric Matrix Builder
    # -----------------------------

    def directed_reactions(self) -> List[Reaction]:
        """Reactions in column order, each reversible one followed by its reverse."""
        out: List[Reaction] = []
        for r in self.reactions:
            out.append(r)
            if r.reversible:
                out.append(r.reverse())
        return out

    def stoichiometric_matrix(self) -> sp.Matrix:
        """Return the m×r stoichiometric matrix N with columns reaction vectors."""
        species = self.species
        cols: List[sp.Matrix] = []
        for r in self.reactions:
            v = r.reaction_vector(species)
            cols.append(v)
            if r.reversible:
                cols.append(-v)
        N = sp.Matrix.hstack(*cols)
        logger.debug("%s: stoichiometric matrix %dx%d", self.id, N.rows, N.cols)
        return N

    def reactant_matrix(self) -> sp.Matrix:
        """Return the reactant complexes, one column per column of N."""
        species = self.species
        return sp.Matrix.hstack(*[r.reactant_vector(species) for r in self.directed_reactions()])

    def product_matrix(self) -> sp.Matrix:
        """Return the product complexes, one column per column of N."""
        species = self.species
        return sp.Matrix.hstack(*[r.product_vector(species) for r in self.directed_reactions()])

    # -----------------------------
    # Text views
    # -----------------------------

    def summary(self) -> str:
        """Human-readable summary."""
        lines = []
        lines.append(
            f"ReactionNetwork(id={self.id!r}, n_species={self.n_species}, "
            f"n_reactions={self.n_reactions}, n_columns={self.n_columns})"
        )
        lines.append("Species: " + ", ".join(self.species))
        for r in self.reactions:
            lines.append("  " + r.to_string())
        return "\n".join(lines)

    def reactions_to_latex(self) -> str:
        """Export reactions to LaTeX, one line per declared reaction."""
        lines = []
        for r in self.reactions:
            lhs = _complex_to_str(r.reactants)
            rhs = _complex_to_str(r.products)
            arrow = "\\rightleftharpoons" if r.reversible else "\\rightarrow"
            lines.append(f"{lhs} &{arrow} {rhs}")
        body = " \\\\\n".join(lines)
        return "\\begin{align}\n" + body + "\n\\end{align}"

    # -----------------------------
    # Constructors
    # -----------------------------

    @classmethod
    def from_string(
        cls,
        text: str,
        species_names: Optional[Sequence[str]] = None,
        network_id: str = "network",
        rate_prefix: str = "k",
    ) -> "ReactionNetwork":
        """Parse a reaction network from a multi-line string.

        Parameters
        ----------
        text:
            Reaction lines separated by newlines or semicolons.
            Supported arrows: "->"/"=>" (irreversible) and "<->"/"<=>" (reversible).
            Optional rate constants in brackets after the arrow, e.g. "A ->[k1] B".
        species_names:
            Optional explicit ordering of species.
        network_id:
            Label used in reports.
        rate_prefix:
            Prefix used when auto-generating rate constants.
        """
        parser = ReactionParser(rate_prefix=rate_prefix)
        return parser.parse_network(text=text, species_names=species_names, network_id=network_id)

    @classmethod
    def from_dict(cls, model: Mapping[str, Any]) -> "ReactionNetwork":
        """Build a network from a model mapping.

        Expected form::

            {"id": "mm",
             "species": ["S", "E", "C", "P"],          # optional
             "reaction": [
                 {"reactant": [{"species": "S", "stoichiometry": 1},
                               {"species": "E", "stoichiometry": 1}],
                  "product": [{"species": "C", "stoichiometry": 1}],
                  "reversible": True},
                 ...]}

        Kinetic fields such as ``kinetic`` are accepted and ignored.
        """
        records = model.get("reaction", model.get("reactions"))
        if not records:
            raise EmptyNetworkError(f"{model.get('id', 'network')} has no reactions")
        species = model.get("species")
        return cls(
            reactions=[Reaction.from_dict(r) for r in records],
            species_names=list(species) if species else None,
            id=str(model.get("id", "network")),
        )
