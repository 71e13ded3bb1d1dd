from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import sympy as sp

from .exceptions import EmptyNetworkError, ReactionSyntaxError
from .reaction import Reaction


# A single term like "2A" or "2 A" or "A".
_TERM_RE = re.compile(r"^\s*(?:(\d+)\s*)?([A-Za-z_][A-Za-z0-9_]*)\s*$")

# Supported arrow tokens. We normalize these to either "->" or "<->".
_ARROW_RE = re.compile(r"(<=>|<->|=>|->)")


def _parse_complex(complex_str: str) -> Dict[str, int]:
    """Parse a complex string like '2A + B' into {'A':2, 'B':1}.

    Accepted:
    - '0' or '' for the empty complex (so "A ->" and "A -> 0" agree)
    - terms separated by '+'
    - coefficients as nonnegative integers (e.g. '2A', '2 A')
    """
    s = complex_str.strip()
    if s == "" or s == "0":
        return {}

    parts = [p.strip() for p in s.split("+")]
    if any(not p for p in parts):
        raise ReactionSyntaxError(f"Empty term in complex: '{complex_str}'")
    coeffs: Dict[str, int] = {}
    for part in parts:
        m = _TERM_RE.match(part)
        if not m:
            raise ReactionSyntaxError(f"Could not parse complex term: '{part}'")
        c_str, name = m.group(1), m.group(2)
        c = int(c_str) if c_str is not None else 1
        coeffs[name] = coeffs.get(name, 0) + c
    return coeffs


def _consume_leading_rate_brackets(s: str) -> Tuple[List[str], str]:
    """Consume leading [ ... ] blocks and return (tokens, remainder).

    Supported forms:
        "[k1] C"
        "[k1][km1] C"
        "[k1, km1] C"
    """
    tokens: List[str] = []
    rest = s.strip()

    while rest.startswith("["):
        end = rest.find("]")
        if end == -1:
            raise ReactionSyntaxError(f"Unclosed '[' in rate specification: '{s}'")
        inside = rest[1:end].strip()
        if inside:
            parts = [p.strip() for p in re.split(r"[;,]", inside) if p.strip()]
            tokens.extend(parts)
        rest = rest[end + 1 :].strip()

    return tokens, rest


@dataclass
class ReactionParser:
    """Parse reaction strings into `Reaction` objects.

    Supported arrows
    ---------------
    - irreversible: '->' or '=>'
    - reversible: '<->' or '<=>'

    A reversible line becomes a single reaction flagged ``reversible``; the
    reverse column is added when the stoichiometric matrix is built.

    Rate constants (optional)
    -------------------------
    Square brackets immediately after the arrow name the rate constants:
    - 'A + B ->[k1] C'
    - 'A + B <->[k1][km1] C'

    Only the forward rate is stored. Without brackets the parser names the
    forward rate ``k1``, ``k2``, ... in line order.
    """

    rate_prefix: str = "k"
    assume_positive_rates: bool = True

    def parse_reactions(self, text: str) -> List[Reaction]:
        raw_lines: List[str] = []
        for chunk in text.split(";"):
            raw_lines.extend(chunk.splitlines())
        lines = [ln.strip() for ln in raw_lines if ln.strip() and not ln.strip().startswith("#")]
        if not lines:
            raise EmptyNetworkError("No reactions found in input")

        reactions: List[Reaction] = []
        for idx, ln in enumerate(lines, start=1):
            lhs_str, arrow, rhs_str, rate_tokens = self._split_reaction_line(ln)
            reversible = arrow == "<->"
            max_tokens = 2 if reversible else 1
            if len(rate_tokens) > max_tokens:
                raise ReactionSyntaxError(
                    f"Too many rate tokens for reaction '{ln}'. Use at most {max_tokens}."
                )
            rate_name = rate_tokens[0] if rate_tokens else f"{self.rate_prefix}{idx}"
            reactions.append(
                Reaction(
                    reactants=_parse_complex(lhs_str),
                    products=_parse_complex(rhs_str),
                    reversible=reversible,
                    rate=self._make_rate_symbol(rate_name),
                )
            )
        return reactions

    def parse_network(
        self,
        text: str,
        species_names: Optional[Sequence[str]] = None,
        network_id: str = "network",
    ):
        from .network import ReactionNetwork  # local import to avoid circular import

        return ReactionNetwork(
            reactions=self.parse_reactions(text),
            species_names=list(species_names) if species_names is not None else None,
            id=network_id,
        )

    def _make_rate_symbol(self, name: str) -> sp.Symbol:
        if self.assume_positive_rates:
            return sp.Symbol(name, positive=True)
        return sp.Symbol(name)

    @staticmethod
    def _split_reaction_line(line: str) -> Tuple[str, str, str, List[str]]:
        """Split a reaction line into (lhs, arrow, rhs, rate_tokens)."""
        ln = line.strip()
        m = _ARROW_RE.search(ln)
        if not m:
            raise ReactionSyntaxError(f"No supported arrow found in line: '{line}'")

        arrow_raw = m.group(1)
        arrow = "<->" if arrow_raw in {"<->", "<=>"} else "->"

        lhs = ln[: m.start()].strip()
        rest = ln[m.end() :].strip()

        rate_tokens, rhs = _consume_leading_rate_brackets(rest)
        rhs = rhs.strip()

        return lhs, arrow, rhs, rate_tokens
