"""ChemBalance core package."""

__version__ = "1.0.0"

from chembalance.balancer import Balancer, BalanceResult, BalancerSettings, balance
from chembalance.equation import split_equation
from chembalance.formula import expand_hydrates, parse_compound, tokenize_compound
from chembalance.models import Equation, StoichiometricMatrix
from chembalance.solver import filter_independent, find_coefficients

__all__ = [
    "Balancer",
    "BalanceResult",
    "BalancerSettings",
    "balance",
    "split_equation",
    "expand_hydrates",
    "parse_compound",
    "tokenize_compound",
    "Equation",
    "StoichiometricMatrix",
    "filter_independent",
    "find_coefficients",
]
