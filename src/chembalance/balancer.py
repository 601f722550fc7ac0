"""Balancing pipeline: text to compositions to matrix to coefficients.

Example:
    >>> from chembalance import Balancer
    >>> Balancer().balance("Fe + O2 -> Fe2O3").render()
    '4Fe + 3O2 == 2Fe2O3'

A :class:`Balancer` keeps only its settings and the last successful
:class:`BalanceResult`. Every attempt builds its intermediate state from
scratch, so a failed attempt never leaves a partial result behind. The
class is not thread-safe; use one instance per concurrent caller.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, replace
from typing import Sequence

import numpy as np

from chembalance.constants import DEFAULT_MAX_COEFFICIENT
from chembalance.equation import split_equation
from chembalance.errors import FailedToBalance, IncompleteEquation, NoResult, SuspiciousElementWarning
from chembalance.formula import parse_compound
from chembalance.matrix import build_stoichiometric_matrix
from chembalance.models import Equation, StoichiometricMatrix
from chembalance.render import render_solution, render_solutions
from chembalance.solver import filter_independent, find_coefficients

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BalancerSettings:
    """Options applied to every balance attempt.

    Attributes:
        multiple_results: Search the whole coefficient space and report every
            independent solution. When False, stop at the first solution.
        max_coefficient: Largest coefficient tried for any compound.
        verbose_logging: Log progress messages at INFO rather than DEBUG.
    """

    multiple_results: bool = True
    max_coefficient: int = DEFAULT_MAX_COEFFICIENT
    verbose_logging: bool = True

    def __post_init__(self) -> None:
        if self.max_coefficient < 1:
            raise ValueError(f"max_coefficient must be at least 1, got {self.max_coefficient}")


@dataclass(frozen=True, eq=False)
class BalanceResult:
    equation: Equation
    matrix: StoichiometricMatrix
    solutions: tuple[tuple[int, ...], ...]
    advisories: tuple[str, ...] = ()

    @property
    def elements(self) -> tuple[str, ...]:
        return self.matrix.elements

    @property
    def ambiguous(self) -> bool:
        """More than one independent solution was found."""
        return len(self.solutions) > 1

    @property
    def best(self) -> tuple[int, ...]:
        return self.solutions[0]

    def render(self) -> str:
        return render_solutions(self.equation, self.solutions)

    def render_lines(self) -> list[str]:
        return [render_solution(self.equation, vector) for vector in self.solutions]


class Balancer:
    """Stateful front end to the balancing pipeline."""

    def __init__(self, settings: BalancerSettings | None = None) -> None:
        self.settings = settings or BalancerSettings()
        self._result: BalanceResult | None = None

    def set_multiple_results(self, option: bool) -> None:
        self.settings = replace(self.settings, multiple_results=option)

    def set_max_coefficient(self, max_coefficient: int) -> None:
        self.settings = replace(self.settings, max_coefficient=max_coefficient)

    def set_verbose_logging(self, option: bool) -> None:
        self.settings = replace(self.settings, verbose_logging=option)

    @property
    def result(self) -> BalanceResult | None:
        return self._result

    def balance(self, equation_text: str) -> BalanceResult:
        """Split, parse and balance an equation such as ``"H2 + O2 -> H2O"``."""
        self._result = None
        return self._balance(split_equation(equation_text))

    def balance_with_compounds(
        self,
        reactants: Sequence[str],
        products: Sequence[str],
    ) -> BalanceResult:
        """Balance an equation whose compound lists are already known."""
        self._result = None
        for side, compounds in (("reactant", reactants), ("product", products)):
            for index, compound in enumerate(compounds):
                if not compound:
                    raise IncompleteEquation(
                        f"Empty {side} at position {index + 1}", side=side, index=index
                    )
        return self._balance(Equation.from_lists(reactants, products))

    def get_result(self, strict: bool = False) -> str:
        """Render the solutions of the last successful attempt.

        Without such an attempt this returns ``""``, or raises
        :class:`NoResult` when ``strict`` is set.
        """
        if self._result is None:
            if strict:
                raise NoResult("No balancing result available")
            logger.warning("No balancing result available")
            return ""
        if self._result.ambiguous:
            logger.warning(
                "There are %d independent solutions. Please select the most correct one.",
                len(self._result.solutions),
            )
        return self._result.render()

    def get_reactants_and_products(self) -> tuple[list[str], list[str]]:
        if self._result is None:
            return [], []
        equation = self._result.equation
        return list(equation.reactants), list(equation.products)

    def get_matrix(self) -> tuple[list[str], np.ndarray]:
        if self._result is None:
            return [], np.zeros((0, 0), dtype=np.int64)
        matrix = self._result.matrix
        return list(matrix.elements), matrix.values.copy()

    def clear(self) -> None:
        self._result = None

    def _balance(self, equation: Equation) -> BalanceResult:
        settings = self.settings
        log = logger.info if settings.verbose_logging else logger.debug
        log("Balancing %s", equation)

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", SuspiciousElementWarning)
            reactant_compositions = [parse_compound(c) for c in equation.reactants]
            product_compositions = [parse_compound(c) for c in equation.products]

        advisories = []
        for warning in caught:
            if issubclass(warning.category, SuspiciousElementWarning):
                logger.warning("%s", warning.message)
                advisories.append(str(warning.message))
            else:
                warnings.warn_explicit(
                    warning.message, warning.category, warning.filename, warning.lineno
                )

        matrix = build_stoichiometric_matrix(
            reactant_compositions, product_compositions, settings.max_coefficient
        )
        log("Elements %s, matrix shape %s", ", ".join(matrix.elements), matrix.shape)

        raw = find_coefficients(
            matrix.values,
            settings.max_coefficient,
            multiple_results=settings.multiple_results,
            verbose=settings.verbose_logging,
        )
        solutions = filter_independent(raw, verbose=settings.verbose_logging)
        if not solutions:
            raise FailedToBalance(
                f"Failed to balance {equation} with coefficients up to {settings.max_coefficient}",
                max_coefficient=settings.max_coefficient,
                equation=str(equation),
            )

        result = BalanceResult(
            equation=equation,
            matrix=matrix,
            solutions=tuple(solutions),
            advisories=tuple(advisories),
        )
        self._result = result
        return result


def balance(equation_text: str, **settings) -> BalanceResult:
    """Balance ``equation_text`` with a throwaway :class:`Balancer`."""
    return Balancer(BalancerSettings(**settings)).balance(equation_text)
