"""Top-level package API for crn_conservation.

This package computes the **conservation laws** of a chemical reaction
network: 0/1-weighted sums of species concentrations that stay constant for
any reaction rates. The pipeline is

1. collect and order the species,
2. build the stoichiometric matrix N (reversible reactions add a negated column),
3. compute a basis of the left null space of N,
4. search for a canonical nonnegative 0/1 basis of that space,
5. render each basis vector as an equation Σ concentrations = Tᵢ.

Public API:
- Reaction, ReactionNetwork, ReactionParser
- ConservationAnalyzer, ConservationOptions, ConservationLaws
- canonical_basis, order_columns, left_null_space, order_species
- Built-in example networks
"""

from .exceptions import (
    CanonicalBasisError,
    ConservationError,
    EmptyNetworkError,
    NetworkError,
    ReactionSyntaxError,
    StoichiometryError,
    UnknownSpeciesError,
)
from .reaction import Reaction
from .parser import ReactionParser
from .network import ReactionNetwork, order_species
from .nullspace import left_null_space
from .canonical import canonical_basis, order_columns
from .analyzer import (
    ConservationAnalyzer,
    ConservationLaws,
    ConservationOptions,
    conservation_laws,
)
from .report import ReportOptions, format_conservation_laws
from .examples import (
    dimerization_network,
    enzyme_inhibition_network,
    gpl_replication_network,
    linear_chain_network,
    michaelis_menten_network,
    two_isomerizations_network,
)

__version__ = "1.0.0"

__all__ = [
    "Reaction",
    "ReactionNetwork",
    "ReactionParser",
    "order_species",
    "left_null_space",
    "canonical_basis",
    "order_columns",
    "ConservationAnalyzer",
    "ConservationLaws",
    "ConservationOptions",
    "conservation_laws",
    "ReportOptions",
    "format_conservation_laws",
    "ConservationError",
    "NetworkError",
    "EmptyNetworkError",
    "UnknownSpeciesError",
    "StoichiometryError",
    "ReactionSyntaxError",
    "CanonicalBasisError",
    "linear_chain_network",
    "two_isomerizations_network",
    "michaelis_menten_network",
    "enzyme_inhibition_network",
    "gpl_replication_network",
    "dimerization_network",
]
