"""Conservation laws of the Michaelis--Menten mechanism.

    S + E <-> C -> E + P

The enzyme (E + C) and the substrate (S + C + P) are conserved.

Run:
    python examples/example_michaelis_menten_conservation.py
"""

from __future__ import annotations

import sympy as sp

from crn_conservation import (
    ConservationAnalyzer,
    ReportOptions,
    format_conservation_laws,
    michaelis_menten_network,
)


def main() -> None:
    net = michaelis_menten_network()
    print(net.summary())

    res = ConservationAnalyzer(net).compute()

    print("\nRaw left null-space basis W:")
    sp.pprint(res.W)

    print()
    print(format_conservation_laws(res, options=ReportOptions(include_matrices=True)))


if __name__ == "__main__":
    main()
