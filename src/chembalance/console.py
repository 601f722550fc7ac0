"""Line-oriented balancing console."""

from __future__ import annotations

from typing import Callable, Iterable

from chembalance import __version__
from chembalance.balancer import Balancer, BalancerSettings
from chembalance.errors import BalanceError

QUIT = "quit()"
MULTIPLE_RESULTS_ON = "multiple_results(on)"
MULTIPLE_RESULTS_OFF = "multiple_results(off)"

GUIDE = (
    f"Use {QUIT} to quit the console.\n"
    f"Use {MULTIPLE_RESULTS_OFF} to disable multiple results and "
    f"{MULTIPLE_RESULTS_ON} to allow them. Multiple results are enabled by default.\n"
    "Type a chemical equation such as 'H2 + O2 -> H2O' to balance it."
)


class Console:
    def __init__(
        self,
        balancer: Balancer | None = None,
        write: Callable[[str], None] = print,
    ) -> None:
        self.balancer = balancer or Balancer(BalancerSettings(verbose_logging=False))
        self.write = write

    def greeting(self) -> str:
        return f"ChemBalance console v{__version__}\n{GUIDE}"

    def handle(self, line: str) -> bool:
        """Process one line; return False when the console should stop."""
        command = line.strip()
        if not command:
            return True
        if command == QUIT:
            return False
        if command == MULTIPLE_RESULTS_ON:
            self.balancer.set_multiple_results(True)
            self.write("Multiple results are allowed.")
        elif command == MULTIPLE_RESULTS_OFF:
            self.balancer.set_multiple_results(False)
            self.write("Multiple results are disabled. The balancing result may not be correct!")
        else:
            self._balance(command)
        return True

    def run(self, lines: Iterable[str]) -> None:
        self.write(self.greeting())
        for line in lines:
            if not self.handle(line):
                break

    def _balance(self, equation_text: str) -> None:
        try:
            result = self.balancer.balance(equation_text)
        except BalanceError as exc:
            self.write(f"{exc.kind}: {exc}")
            return

        output = self.balancer.get_result()
        self.balancer.clear()
        if result.ambiguous:
            self.write("There are multiple possible solutions. Please select the most correct one.")
        for advisory in result.advisories:
            self.write(f"WARNING: {advisory}")
        self.write(output)
