"""Human-readable reporting utilities.

Nothing here is required for the core computation; it is strictly
presentation of a `ConservationLaws` result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import sympy as sp

from .analyzer import ConservationLaws


@dataclass
class ReportOptions:
    """Tunable knobs for report verbosity."""

    include_matrices: bool = False
    max_laws: Optional[int] = None


def format_matrix(M: sp.Matrix) -> str:
    if M.cols == 0:
        return f"[] ({M.rows}x0)"
    return sp.pretty(M)


def format_conservation_laws(result: ConservationLaws, *, options: Optional[ReportOptions] = None) -> str:
    """Format a result as console text.

    Example
    -------
    ::

        The conservation laws for chain are:

        A + B + C = T1
    """
    opt = options or ReportOptions()
    lines: List[str] = []

    if not result.has_laws:
        lines.append(result.notice or f"{result.network.id} has no conservation laws.")
    else:
        lines.append(f"The conservation laws for {result.network.id} are:")
        lines.append("")
        laws = result.as_strings()
        shown = laws if opt.max_laws is None else laws[: int(opt.max_laws)]
        lines.extend(shown)
        if len(laws) > len(shown):
            lines.append(f"... ({len(laws) - len(shown)} more)")
        if not result.is_complete and result.notice:
            lines.append("")
            lines.append(result.notice)

    if opt.include_matrices:
        lines.append("")
        lines.append("Species: " + ", ".join(result.species))
        lines.append("N =")
        lines.append(format_matrix(result.N))
        lines.append("W_new =")
        lines.append(format_matrix(result.W_new))

    return "\n".join(lines) + "\n"
