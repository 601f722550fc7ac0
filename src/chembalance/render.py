"""Formatting balanced equations as text."""

from __future__ import annotations

import re
from typing import Sequence

from chembalance.models import Equation

SIDE_SEPARATOR = " == "
COMPOUND_SEPARATOR = " + "

_TERM = re.compile(r"([0-9]*)(.+)", re.DOTALL)


def _render_side(compounds: Sequence[str], coefficients: Sequence[int]) -> str:
    return COMPOUND_SEPARATOR.join(
        (str(coefficient) if coefficient != 1 else "") + compound
        for coefficient, compound in zip(coefficients, compounds, strict=True)
    )


def render_solution(equation: Equation, vector: Sequence[int]) -> str:
    """Render one coefficient vector, e.g. ``2H2 + O2 == 2H2O``."""
    if len(vector) != len(equation.compounds):
        raise ValueError(
            f"Expected {len(equation.compounds)} coefficients, got {len(vector)}"
        )
    split = len(equation.reactants)
    return (
        _render_side(equation.reactants, vector[:split])
        + SIDE_SEPARATOR
        + _render_side(equation.products, vector[split:])
    )


def render_solutions(equation: Equation, solutions: Sequence[Sequence[int]]) -> str:
    return "\n".join(render_solution(equation, vector) for vector in solutions)


def parse_rendered(text: str) -> tuple[tuple[int, ...], Equation]:
    """Read a line produced by :func:`render_solution` back.

    Compounds never start with a digit, so a leading digit run is the
    coefficient.
    """
    halves = text.strip().split(SIDE_SEPARATOR.strip())
    if len(halves) != 2:
        raise ValueError(f"Not a rendered equation: {text!r}")

    coefficients: list[int] = []
    sides: list[list[str]] = []
    for half in halves:
        compounds = []
        for term in half.split(COMPOUND_SEPARATOR.strip()):
            match = _TERM.fullmatch(term.strip())
            if match is None:
                raise ValueError(f"Empty term in {text!r}")
            digits, compound = match.groups()
            coefficients.append(int(digits) if digits else 1)
            compounds.append(compound)
        sides.append(compounds)
    return tuple(coefficients), Equation.from_lists(*sides)
