"""Conservation laws from a model dictionary with numbered species.

Species named X1, X2, ... are ordered by their number, so X10 comes after X9.

Run:
    python examples/example_model_dict.py
"""

from __future__ import annotations

import logging

from crn_conservation import ReactionNetwork, conservation_laws, format_conservation_laws


def _complex(*terms):
    return [{"species": s, "stoichiometry": c} for s, c in terms]


MODEL = {
    "id": "inhibition",
    "reaction": [
        {"id": "R1", "reactant": _complex(("X1", 1), ("X2", 1)), "product": _complex(("X3", 1)), "reversible": True},
        {"id": "R2", "reactant": _complex(("X3", 1)), "product": _complex(("X2", 1), ("X4", 1)), "reversible": False},
        {"id": "R3", "reactant": _complex(("X2", 1), ("X5", 1)), "product": _complex(("X6", 1)), "reversible": True},
    ],
}


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    net = ReactionNetwork.from_dict(MODEL)
    res = conservation_laws(net)
    print(format_conservation_laws(res))

    for eq in res.equations:
        print(eq)


if __name__ == "__main__":
    main()
