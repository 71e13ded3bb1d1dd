from __future__ import annotations

import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import sympy as sp

from .exceptions import StoichiometryError, UnknownSpeciesError


def _as_coefficient(species: str, value: Any) -> int:
    """Return a stoichiometric coefficient as a nonnegative int."""
    if isinstance(value, bool):
        raise StoichiometryError(f"Coefficient of '{species}' must be an integer, got {value!r}")
    if isinstance(value, sp.Basic):
        if not (value.is_Integer):
            raise StoichiometryError(f"Coefficient of '{species}' must be an integer, got {value}")
        c = int(value)
    elif isinstance(value, numbers.Integral):
        c = int(value)
    elif isinstance(value, numbers.Real) and float(value).is_integer():
        c = int(value)
    else:
        raise StoichiometryError(f"Coefficient of '{species}' must be an integer, got {value!r}")
    if c < 0:
        raise StoichiometryError("stoichiometric coefficients must be nonnegative integers")
    return c


def _normalize_complex(cplx: Optional[Mapping[str, Any]]) -> Dict[str, int]:
    """Validate a complex and drop zero coefficients."""
    if cplx is None:
        return {}
    out: Dict[str, int] = {}
    for name, value in cplx.items():
        if not isinstance(name, str) or not name.strip():
            raise StoichiometryError(f"Species names must be non-empty strings, got {name!r}")
        c = _as_coefficient(name, value)
        if c:
            out[name.strip()] = out.get(name.strip(), 0) + c
    return out


@dataclass(frozen=True)
class Reaction:
    """A single reaction between two complexes.

    Parameters
    ----------
    reactants:
        Reactant complex as a mapping species name -> stoichiometric coefficient.
    products:
        Product complex, same form. An empty mapping is the zero complex.
    reversible:
        If True the reverse direction is also part of the network.
    rate:
        Optional symbol (or SymPy expression) for the forward rate constant.
        Kinetic information is carried along but not used by the
        conservation-law computation.
    name:
        Optional human-readable label.

    Notes
    -----
    The reaction vector of Y1 -> Y2 is y2 - y1 expressed over a species
    ordering. A reversible reaction contributes y2 - y1 and y1 - y2.
    """

    reactants: Mapping[str, int] = field(default_factory=dict)
    products: Mapping[str, int] = field(default_factory=dict)
    reversible: bool = False
    rate: Optional[sp.Expr] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        # Frozen dataclass: normalise through object.__setattr__.
        object.__setattr__(self, "reactants", _normalize_complex(self.reactants))
        object.__setattr__(self, "products", _normalize_complex(self.products))
        object.__setattr__(self, "reversible", bool(self.reversible))

    def __hash__(self) -> int:
        return hash(
            (
                tuple(sorted(self.reactants.items())),
                tuple(sorted(self.products.items())),
                self.reversible,
                self.rate,
                self.name,
            )
        )

    @property
    def species(self) -> List[str]:
        """Species in this reaction, reactants first, in order of appearance."""
        return list(dict.fromkeys(list(self.reactants) + list(self.products)))

    def reactant_vector(self, species_order: Sequence[str]) -> sp.Matrix:
        return self._complex_vector(self.reactants, species_order)

    def product_vector(self, species_order: Sequence[str]) -> sp.Matrix:
        return self._complex_vector(self.products, species_order)

    def reaction_vector(self, species_order: Sequence[str]) -> sp.Matrix:
        """Return v = products - reactants as an m×1 SymPy Matrix."""
        return self.product_vector(species_order) - self.reactant_vector(species_order)

    def reverse(self) -> "Reaction":
        """Return the reaction with reactant and product complexes swapped.

        The copy is irreversible: it stands for one direction only.
        """
        return Reaction(
            reactants=dict(self.products),
            products=dict(self.reactants),
            reversible=False,
            rate=None,
            name=f"{self.name} (reverse)" if self.name else None,
        )

    def to_string(self) -> str:
        arrow = "<->" if self.reversible else "->"
        return f"{_complex_to_str(self.reactants)} {arrow} {_complex_to_str(self.products)}"

    @staticmethod
    def _complex_vector(cplx: Mapping[str, int], species_order: Sequence[str]) -> sp.Matrix:
        index = {name: i for i, name in enumerate(species_order)}
        col = [sp.Integer(0)] * len(species_order)
        for name, c in cplx.items():
            if name not in index:
                raise UnknownSpeciesError(name, species_order)
            col[index[name]] = sp.Integer(c)
        return sp.Matrix(col)

    @staticmethod
    def from_coeff_vectors(
        reactants: Iterable[int],
        products: Iterable[int],
        species_names: Sequence[str],
        reversible: bool = False,
        rate: Optional[sp.Expr] = None,
    ) -> "Reaction":
        """Build a reaction from dense coefficient vectors over ``species_names``."""
        r = tuple(reactants)
        p = tuple(products)
        if len(r) != len(species_names) or len(p) != len(species_names):
            raise ValueError("reactants and products must have one entry per species")
        return Reaction(
            dict(zip(species_names, r)),
            dict(zip(species_names, p)),
            reversible=reversible,
            rate=rate,
        )

    @staticmethod
    def from_dict(record: Mapping[str, Any]) -> "Reaction":
        """Build a reaction from a record of the form

        ``{"reactant": [{"species": "A", "stoichiometry": 1}, ...],
        "product": [...], "reversible": False}``.

        Plain mappings (``{"A": 1}``) are accepted for ``reactant`` and
        ``product`` as well.
        """
        if "reactant" not in record and "product" not in record:
            raise StoichiometryError(f"Reaction record has no 'reactant' or 'product' field: {record!r}")
        return Reaction(
            reactants=_complex_from_records(record.get("reactant")),
            products=_complex_from_records(record.get("product")),
            reversible=bool(record.get("reversible", False)),
            name=record.get("id") or record.get("name"),
        )


def _complex_from_records(entries: Any) -> Dict[str, Any]:
    if entries is None:
        return {}
    if isinstance(entries, Mapping):
        return dict(entries)
    out: Dict[str, Any] = {}
    for entry in entries:
        try:
            name = entry["species"]
        except (KeyError, TypeError):
            raise StoichiometryError(f"Complex entry has no 'species' field: {entry!r}") from None
        if name is None or name == "":
            continue
        coeff = entry.get("stoichiometry", 1)
        out[name] = out.get(name, 0) + _as_coefficient(name, coeff)
    return out


def _complex_to_str(cplx: Mapping[str, int]) -> str:
    terms: List[str] = []
    for name, c in cplx.items():
        terms.append(name if c == 1 else f"{c}{name}")
    return " + ".join(terms) if terms else "0"
