"""Brute-force coefficient search and solution filtering.

The search tries every coefficient vector in ``[1, M]^columns`` in
lexicographic order (first compound most significant), exactly as a
depth-first recursion over the compounds would. The leading columns are
advanced as an odometer; for each of their settings the trailing columns
are checked at once against a precomputed block of numpy row sums holding
at most ``TAIL_BLOCK_SIZE`` combinations. When ``M`` alone exceeds that,
the block is empty and every column runs on the odometer. The
cost is ``O(M^columns * elements)``, so only small equations and small
bounds are practical.
"""

from __future__ import annotations

import itertools
import logging
from typing import Sequence

import numpy as np

from chembalance.constants import RATIO_TOLERANCE, TAIL_BLOCK_SIZE

logger = logging.getLogger(__name__)

Vector = tuple[int, ...]


def search_space_size(columns: int, max_coefficient: int) -> int:
    return max(max_coefficient, 0) ** columns


def is_balanced(matrix: np.ndarray, vector: Sequence[int]) -> bool:
    """True if every row of ``matrix`` has a zero dot product with ``vector``."""
    return not np.any(np.asarray(matrix, dtype=np.int64) @ np.asarray(vector, dtype=np.int64))


def find_coefficients(
    matrix: np.ndarray,
    max_coefficient: int,
    multiple_results: bool = True,
    verbose: bool = True,
) -> list[Vector]:
    """Search for positive integer vectors that balance ``matrix``.

    Args:
        matrix: Signed stoichiometric matrix, rows = elements,
            columns = compounds.
        max_coefficient: Largest coefficient tried for any compound.
        multiple_results: Search the whole space and return every balanced
            vector. When False, stop at the first one found.
        verbose: Log progress at INFO instead of DEBUG.

    Returns:
        Balanced vectors in discovery order; empty if none exists within
        the bound.
    """
    log = logger.info if verbose else logger.debug
    values = np.asarray(matrix, dtype=np.int64)
    if values.ndim != 2 or values.shape[1] == 0:
        raise ValueError(f"Expected a 2-D matrix with at least one column, got shape {values.shape}")
    if max_coefficient < 1:
        return []

    columns = values.shape[1]
    tail_width = _tail_width(columns, max_coefficient)
    head_width = columns - tail_width
    coefficients = range(1, max_coefficient + 1)
    log(
        "Searching %d coefficient vectors (%d elements, %d compounds)",
        search_space_size(columns, max_coefficient),
        values.shape[0],
        columns,
    )

    tail = np.array(list(itertools.product(coefficients, repeat=tail_width)), dtype=np.int64)
    tail_sums = tail @ values[:, head_width:].T
    head_matrix = values[:, :head_width]

    solutions: list[Vector] = []
    for prefix in itertools.product(coefficients, repeat=head_width):
        target = -(head_matrix @ np.array(prefix, dtype=np.int64))
        for hit in np.flatnonzero(np.all(tail_sums == target, axis=1)):
            vector = prefix + tuple(int(c) for c in tail[hit])
            log("A possible result found: %s", vector)
            solutions.append(vector)
            if not multiple_results:
                return solutions
    return solutions


def are_linearly_dependent(
    a: Sequence[int],
    b: Sequence[int],
    tolerance: float = RATIO_TOLERANCE,
) -> bool:
    """True if ``b`` is a scalar multiple of ``a``.

    Every non-zero entry of ``a`` must give the same ratio ``b[i] / a[i]``
    within ``tolerance``, and ``b`` must be zero wherever ``a`` is.
    """
    if len(a) == 0 or len(b) == 0 or len(a) != len(b):
        return False

    ratio = None
    for x, y in zip(a, b):
        if x != 0:
            current = y / x
            if ratio is None:
                ratio = current
            elif abs(ratio - current) > tolerance:
                return False
        elif y != 0:
            return False
    return True


def are_linearly_dependent_exact(a: Sequence[int], b: Sequence[int]) -> bool:
    """Integer variant of :func:`are_linearly_dependent` using cross products."""
    if len(a) == 0 or len(b) == 0 or len(a) != len(b):
        return False
    if any(x == 0 and y != 0 for x, y in zip(a, b)):
        return False
    return all(
        a[i] * b[j] == a[j] * b[i]
        for i in range(len(a))
        for j in range(i + 1, len(a))
    )


def filter_independent(
    solutions: Sequence[Sequence[int]],
    exact: bool = False,
    verbose: bool = True,
) -> list[Vector]:
    """Drop every solution that is a multiple of an earlier accepted one."""
    log = logger.info if verbose else logger.debug
    log("Filtering linearly independent results out of %d", len(solutions))
    dependent = are_linearly_dependent_exact if exact else are_linearly_dependent

    accepted: list[Vector] = []
    for candidate in solutions:
        if not any(dependent(kept, candidate) for kept in accepted):
            accepted.append(tuple(candidate))
    return accepted


def _tail_width(columns: int, max_coefficient: int) -> int:
    width = 0
    while width < columns and max_coefficient ** (width + 1) <= TAIL_BLOCK_SIZE:
        width += 1
    return width
