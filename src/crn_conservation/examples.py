from __future__ import annotations

from .network import ReactionNetwork
from .reaction import Reaction


def linear_chain_network() -> ReactionNetwork:
    """Irreversible chain A -> B -> C.

    One conservation law: A + B + C.
    """
    return ReactionNetwork(
        reactions=[
            Reaction({"A": 1}, {"B": 1}),
            Reaction({"B": 1}, {"C": 1}),
        ],
        id="linear_chain",
    )


def two_isomerizations_network() -> ReactionNetwork:
    """Two disjoint reversible isomerizations X <-> Y and Z <-> W.

    Species order: [X, Y, Z, W]. Conservation laws: X + Y, Z + W.
    """
    return ReactionNetwork(
        reactions=[
            Reaction({"X": 1}, {"Y": 1}, reversible=True),
            Reaction({"Z": 1}, {"W": 1}, reversible=True),
        ],
        species_names=["X", "Y", "Z", "W"],
        id="two_isomerizations",
    )


def michaelis_menten_network() -> ReactionNetwork:
    """Michaelis--Menten mechanism.

    Reaction scheme:
        S + E <-> C -> E + P

    Species order: [S, E, C, P]. Conservation laws: S + C + P (substrate)
    and E + C (enzyme).
    """
    return ReactionNetwork.from_string(
        """
        S + E <->[k1][km1] C
        C ->[k2] E + P
        """,
        species_names=["S", "E", "C", "P"],
        network_id="michaelis_menten",
    )


def enzyme_inhibition_network() -> ReactionNetwork:
    """Competitive inhibition in numbered-species form.

    X1 = S, X2 = E, X3 = C, X4 = P, X5 = I, X6 = EI:
        X1 + X2 <-> X3 -> X2 + X4
        X2 + X5 <-> X6

    Conservation laws: X1 + X3 + X4, X2 + X3 + X6, X5 + X6.
    """
    return ReactionNetwork.from_string(
        """
        X1 + X2 <-> X3
        X3 -> X2 + X4
        X2 + X5 <-> X6
        """,
        network_id="enzyme_inhibition",
    )


def gpl_replication_network() -> ReactionNetwork:
    """Self-replication model.

    Species mapping:
        X1 = A, X2 = B, X3 = P, X4 = I_a, X5 = I_b, X6 = I

    Five reversible reactions:
        X1 + X3 <-> X4
        X2 + X4 <-> X6
        X2 + X3 <-> X5
        X1 + X5 <-> X6
        X6 <-> 2 X3

    The dimerization X6 <-> 2 X3 makes the conserved quantities carry
    coefficient 2, so no 0/1 basis exists.
    """
    return ReactionNetwork.from_string(
        """
        A + P <-> Ia
        B + Ia <-> I
        B + P <-> Ib
        A + Ib <-> I
        I <-> 2 P
        """,
        species_names=["A", "B", "P", "Ia", "Ib", "I"],
        network_id="gpl_replication",
    )


def dimerization_network() -> ReactionNetwork:
    """Reversible dimerization 2A <-> B.

    The only conservation law is A + 2B, which has no 0/1 form.
    """
    return ReactionNetwork(
        reactions=[Reaction({"A": 2}, {"B": 1}, reversible=True)],
        id="dimerization",
    )
