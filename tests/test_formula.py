import unittest

from chembalance.errors import (
    EmptyToken,
    InvalidCharacter,
    InvalidNumber,
    MalformedEntity,
    SuspiciousElementWarning,
    UnmatchedParentheses,
)
from chembalance.formula import expand_hydrates, parse_compound, resolve_entity, tokenize_compound


class TestTokenizer(unittest.TestCase):
    def test_splits_elements(self):
        self.assertEqual(tokenize_compound("CaSO4"), ["Ca", "S", "O4"])

    def test_keeps_groups_whole(self):
        self.assertEqual(tokenize_compound("Ca(OH)2"), ["Ca", "(OH)2"])
        # nested groups stay inside the outer token
        self.assertEqual(tokenize_compound("K4(Fe(CN)6)"), ["K4", "(Fe(CN)6)"])

    def test_invalid_character(self):
        with self.assertRaises(InvalidCharacter) as ctx:
            tokenize_compound("H2O.")
        self.assertEqual(ctx.exception.diagnostic["position"], 3)
        with self.assertRaises(InvalidCharacter):
            tokenize_compound("H2 O")

    def test_unmatched_parentheses(self):
        with self.assertRaises(UnmatchedParentheses):
            tokenize_compound("Ca(OH")
        with self.assertRaises(UnmatchedParentheses):
            tokenize_compound("CaOH)2")

    def test_entity_must_start_with_uppercase(self):
        with self.assertRaises(MalformedEntity):
            tokenize_compound("c26")
        with self.assertRaises(MalformedEntity):
            tokenize_compound("2H")


class TestResolver(unittest.TestCase):
    def test_bare_entities(self):
        self.assertEqual(resolve_entity("H2"), ("H", 2))
        self.assertEqual(resolve_entity("Ca"), ("Ca", 1))

    def test_group_entities(self):
        self.assertEqual(resolve_entity("(OH)2"), ("OH", 2))
        self.assertEqual(resolve_entity("(SO4)"), ("SO4", 1))

    def test_errors(self):
        with self.assertRaises(EmptyToken):
            resolve_entity("")
        with self.assertRaises(MalformedEntity):
            resolve_entity("H2a")
        with self.assertRaises(MalformedEntity):
            resolve_entity("(OH)2a")
        with self.assertRaises(InvalidNumber):
            resolve_entity("H99999999999")

    def test_long_symbol_warns(self):
        with self.assertWarns(SuspiciousElementWarning):
            self.assertEqual(resolve_entity("Xyz2"), ("Xyz", 2))


class TestParseCompound(unittest.TestCase):
    def test_group_multiplied(self):
        composition = parse_compound("Ca(OH)2")
        self.assertEqual(composition, {"Ca": 1, "O": 2, "H": 2})
        self.assertEqual(sum(composition.values()), 5)

    def test_repeated_elements_are_summed(self):
        self.assertEqual(parse_compound("CH3COOH"), {"C": 2, "H": 4, "O": 2})

    def test_nested_groups(self):
        self.assertEqual(parse_compound("K4(Fe(CN)6)"), {"K": 4, "Fe": 1, "C": 6, "N": 6})
        self.assertEqual(parse_compound("Al2(SO4)3"), {"Al": 2, "S": 3, "O": 12})

    def test_nested_counts_beyond_int64(self):
        with self.assertRaises(InvalidNumber):
            parse_compound("((H2147483647)2147483647)2147483647")
        self.assertEqual(parse_compound("((H65536)65536)1073741824"), {"H": 2 ** 62})

    def test_empty(self):
        with self.assertRaises(EmptyToken):
            parse_compound("")
        with self.assertRaises(EmptyToken):
            parse_compound("()")


class TestHydrates(unittest.TestCase):
    def test_expand(self):
        self.assertEqual(expand_hydrates("CuSO4.5H2O"), "CuSO4(H2O)5")
        self.assertEqual(expand_hydrates("CuSO4·5H2O"), "CuSO4(H2O)5")
        self.assertEqual(
            parse_compound(expand_hydrates("CuSO4.5H2O")),
            {"Cu": 1, "S": 1, "O": 9, "H": 10},
        )

    def test_unchanged(self):
        self.assertEqual(expand_hydrates("NaCl"), "NaCl")
        self.assertEqual(expand_hydrates("CuSO4."), "CuSO4.")


if __name__ == '__main__':
    unittest.main()
