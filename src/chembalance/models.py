"""Data structures for equations and stoichiometric matrices."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from chembalance.errors import EmptyCompoundList


@dataclass(frozen=True)
class Equation:
    """Reactant and product compound strings, in input order."""

    reactants: tuple[str, ...]
    products: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "reactants", tuple(self.reactants))
        object.__setattr__(self, "products", tuple(self.products))
        if not self.reactants or not self.products:
            raise EmptyCompoundList(
                "Both sides of an equation need at least one compound",
                reactants=list(self.reactants),
                products=list(self.products),
            )

    @classmethod
    def from_lists(cls, reactants: Sequence[str], products: Sequence[str]) -> Equation:
        return cls(tuple(reactants), tuple(products))

    @property
    def compounds(self) -> tuple[str, ...]:
        return self.reactants + self.products

    def __str__(self) -> str:
        return " + ".join(self.reactants) + " -> " + " + ".join(self.products)


@dataclass(frozen=True, eq=False)
class StoichiometricMatrix:
    """Signed element-by-compound matrix.

    Attributes:
        elements: Sorted element symbols, one per row.
        values: Integer array of shape ``(len(elements), compounds)``. Reactant
            columns hold atom counts, product columns their negation.
    """

    elements: tuple[str, ...]
    values: np.ndarray

    @property
    def shape(self) -> tuple[int, int]:
        return self.values.shape

    def row(self, element: str) -> np.ndarray:
        return self.values[self.elements.index(element)]

    def residuals(self, vector: Sequence[int]) -> np.ndarray:
        """Weighted sum of every row; all zero for a balanced vector."""
        return self.values @ np.asarray(vector, dtype=np.int64)
