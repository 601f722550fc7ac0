"""Splitting equation text into reactant and product compounds."""

from __future__ import annotations

from chembalance.errors import IncompleteEquation, InvalidEquation
from chembalance.models import Equation

ARROW = "->"
PLUS = "+"


def strip_whitespace(text: str) -> str:
    return "".join(text.split())


def split_half_equation(half: str, side: str = "half-equation") -> list[str]:
    """Split one side of an equation on ``+``.

    A single compound without any ``+`` is a valid half-equation.
    """
    if not half:
        raise IncompleteEquation(f"The {side} is empty", side=side)

    compounds = half.split(PLUS)
    for index, compound in enumerate(compounds):
        if not compound:
            raise IncompleteEquation(
                f"Compound {index + 1} of the {side} is empty",
                side=side,
                index=index,
            )
    return compounds


def split_equation(text: str) -> Equation:
    """Parse ``"Fe + O2 -> Fe2O3"`` into its reactant and product lists."""
    stripped = strip_whitespace(text)
    halves = stripped.split(ARROW)
    if len(halves) != 2:
        raise InvalidEquation(
            f"Expected exactly one '{ARROW}' in {stripped!r}, found {len(halves) - 1}",
            equation=text,
        )

    reactants = split_half_equation(halves[0], "reactant side")
    products = split_half_equation(halves[1], "product side")
    return Equation.from_lists(reactants, products)
