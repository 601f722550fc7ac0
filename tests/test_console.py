import unittest

from chembalance.console import Console


class TestConsole(unittest.TestCase):
    def setUp(self):
        self.output = []
        self.console = Console(write=self.output.append)

    def test_balances_until_quit(self):
        self.console.run(["H2 + O2 -> H2O", "", "quit()", "Fe + O2 -> Fe2O3"])
        self.assertIn("2H2 + O2 == 2H2O", self.output)
        self.assertNotIn("4Fe + 3O2 == 2Fe2O3", self.output)
        self.assertIsNone(self.console.balancer.result)

    def test_toggle_multiple_results(self):
        self.console.handle("C + O2 -> CO + CO2")
        self.assertTrue(any("multiple possible solutions" in line for line in self.output))

        self.output.clear()
        self.console.handle("multiple_results(off)")
        self.assertFalse(self.console.balancer.settings.multiple_results)
        self.console.handle("C + O2 -> CO + CO2")
        self.assertEqual(self.output[-1], "3C + 2O2 == 2CO + CO2")

        self.console.handle("multiple_results(on)")
        self.assertTrue(self.console.balancer.settings.multiple_results)

    def test_errors_do_not_stop_the_loop(self):
        self.assertTrue(self.console.handle("Na -> K"))
        self.assertTrue(self.output[-1].startswith("ElementMismatch:"))
        self.assertTrue(self.console.handle("((H2147483647)2147483647)2147483647 -> H"))
        self.assertTrue(self.output[-1].startswith("InvalidNumber:"))
        self.assertFalse(self.console.handle("quit()"))


if __name__ == '__main__':
    unittest.main()
