import itertools
import unittest
from unittest import mock

import numpy as np

from chembalance.solver import (
    _tail_width,
    are_linearly_dependent,
    are_linearly_dependent_exact,
    filter_independent,
    find_coefficients,
    is_balanced,
    search_space_size,
)

# H2 + O2 -> H2O
WATER = np.array([[2, 0, -2], [0, 2, -1]])
# Ca(OH)2 + HCl -> CaCl2 + H2O, rows Ca, Cl, H, O
LIME = np.array([[1, 0, -1, 0], [0, 1, -2, 0], [2, 1, 0, -2], [2, 0, 0, -1]])
# C + O2 -> CO + CO2, rows C, O
CARBON = np.array([[1, 0, -1, -1], [0, 2, -1, -2]])


def reference_search(matrix, max_coefficient):
    return [
        vector
        for vector in itertools.product(range(1, max_coefficient + 1), repeat=matrix.shape[1])
        if is_balanced(matrix, vector)
    ]


class TestFindCoefficients(unittest.TestCase):
    def test_all_multiples_found_in_order(self):
        solutions = find_coefficients(WATER, 20)
        self.assertEqual(len(solutions), 10)
        self.assertEqual(solutions[0], (2, 1, 2))
        self.assertEqual(solutions[-1], (20, 10, 20))

    def test_single_result(self):
        self.assertEqual(find_coefficients(WATER, 20, multiple_results=False), [(2, 1, 2)])

    def test_bound_too_small(self):
        self.assertEqual(find_coefficients(WATER, 1), [])

    def test_matches_plain_enumeration(self):
        self.assertEqual(find_coefficients(CARBON, 8), reference_search(CARBON, 8))

    def test_block_size_does_not_change_order(self):
        expected = find_coefficients(CARBON, 12)
        with mock.patch("chembalance.solver.TAIL_BLOCK_SIZE", 1):
            self.assertEqual(find_coefficients(CARBON, 12), expected)
        self.assertEqual(expected[0], (3, 2, 2, 1))

    def test_every_solution_balances(self):
        for vector in find_coefficients(LIME, 10):
            self.assertTrue(is_balanced(LIME, vector))
            self.assertTrue(all(c >= 1 for c in vector))

    def test_bound_larger_than_block(self):
        with mock.patch("chembalance.solver.TAIL_BLOCK_SIZE", 4):
            self.assertEqual(_tail_width(3, 8), 0)
            self.assertEqual(find_coefficients(WATER, 8), reference_search(WATER, 8))
            self.assertEqual(find_coefficients(WATER, 8, multiple_results=False), [(2, 1, 2)])

    def test_rejects_empty_matrix(self):
        with self.assertRaises(ValueError):
            find_coefficients(np.zeros((2, 0), dtype=int), 5)

    def test_search_space_size(self):
        self.assertEqual(search_space_size(4, 20), 160000)


class TestLinearDependence(unittest.TestCase):
    def test_multiples(self):
        for dependent in (are_linearly_dependent, are_linearly_dependent_exact):
            self.assertTrue(dependent((2, 1, 2), (4, 2, 4)))
            self.assertTrue(dependent((0, 2), (0, 4)))
            self.assertFalse(dependent((2, 1, 2), (4, 2, 5)))
            self.assertFalse(dependent((1, 2), (1, 2, 3)))
            self.assertFalse(dependent((0, 1), (1, 1)))
            self.assertFalse(dependent((), ()))

    def test_filter_keeps_discovery_order(self):
        raw = [(2, 1, 2), (4, 2, 4), (1, 1, 1), (3, 3, 3), (6, 3, 6)]
        self.assertEqual(filter_independent(raw), [(2, 1, 2), (1, 1, 1)])
        self.assertEqual(filter_independent(raw, exact=True), [(2, 1, 2), (1, 1, 1)])

    def test_filtered_solutions_are_pairwise_independent(self):
        accepted = filter_independent(find_coefficients(CARBON, 10))
        self.assertGreater(len(accepted), 1)
        for a, b in itertools.combinations(accepted, 2):
            self.assertFalse(are_linearly_dependent(a, b))


if __name__ == '__main__':
    unittest.main()
