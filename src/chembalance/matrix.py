"""Building the signed stoichiometric matrix."""

from __future__ import annotations

from typing import Mapping, Sequence

import numpy as np

from chembalance.constants import MAX_INT64
from chembalance.errors import ElementMismatch, InvalidNumber
from chembalance.models import StoichiometricMatrix

Composition = Mapping[str, int]


def element_universe(compositions: Sequence[Composition]) -> list[str]:
    """Sorted, deduplicated element symbols of all compositions."""
    elements: set[str] = set()
    for composition in compositions:
        elements.update(composition.keys())
    return sorted(elements)


def check_conservation(
    reactant_compositions: Sequence[Composition],
    product_compositions: Sequence[Composition],
) -> list[str]:
    """Return the element universe shared by both sides.

    Raises:
        ElementMismatch: If an element appears on only one side.
    """
    reactant_elements = element_universe(reactant_compositions)
    product_elements = element_universe(product_compositions)
    if reactant_elements != product_elements:
        missing = sorted(set(reactant_elements) - set(product_elements))
        extra = sorted(set(product_elements) - set(reactant_elements))
        details = []
        if missing:
            details.append(f"missing from products: {', '.join(missing)}")
        if extra:
            details.append(f"missing from reactants: {', '.join(extra)}")
        raise ElementMismatch(
            "Elements mismatch between reactants and products (" + "; ".join(details) + ")",
            missing=missing,
            extra=extra,
        )
    return reactant_elements


def build_matrix(
    elements: Sequence[str],
    reactant_compositions: Sequence[Composition],
    product_compositions: Sequence[Composition],
) -> np.ndarray:
    """Build the element-by-compound matrix.

    Rows follow ``elements``; columns are the reactants followed by the
    products. Product entries are negated so that a balanced coefficient
    vector makes every row sum to zero.
    """
    compositions = list(reactant_compositions) + list(product_compositions)
    sign = np.array(
        [1] * len(reactant_compositions) + [-1] * len(product_compositions),
        dtype=np.int64,
    )

    counts = np.zeros((len(elements), len(compositions)), dtype=np.int64)
    for i, element in enumerate(elements):
        for j, composition in enumerate(compositions):
            counts[i, j] = composition.get(element, 0)

    return counts * sign


def check_search_range(
    elements: Sequence[str],
    compositions: Sequence[Composition],
    max_coefficient: int,
) -> None:
    """Raise InvalidNumber if a row sum of the search could leave int64.

    Every partial dot product of a row with a vector in
    ``[1, max_coefficient]^columns`` is bounded by the row's absolute sum
    times ``max_coefficient``.
    """
    for element in elements:
        bound = sum(abs(c.get(element, 0)) for c in compositions) * max_coefficient
        if bound > MAX_INT64:
            raise InvalidNumber(
                f"Counts of {element} are too large to search with coefficients up to {max_coefficient}",
                element=element,
                max_coefficient=max_coefficient,
            )


def build_stoichiometric_matrix(
    reactant_compositions: Sequence[Composition],
    product_compositions: Sequence[Composition],
    max_coefficient: int | None = None,
) -> StoichiometricMatrix:
    elements = check_conservation(reactant_compositions, product_compositions)
    if max_coefficient is not None:
        check_search_range(
            elements, list(reactant_compositions) + list(product_compositions), max_coefficient
        )
    values = build_matrix(elements, reactant_compositions, product_compositions)
    return StoichiometricMatrix(elements=tuple(elements), values=values)
