import sys
from typing import Optional

import colored
from colored import stylize


class TerminalPrinter:
    """
    Writes tailed log lines to stdout untouched. Diagnostics are highlighted
    when stdout is a terminal and printed as plain text otherwise.
    """

    def __init__(self, color: Optional[bool] = None) -> None:
        if color is None:
            color = sys.stdout.isatty()

        self.color = color

    def loudln(self, msg: str) -> None:
        if self.color:
            msg = stylize(msg, colored.bg("magenta") + colored.fg("white"))

        self.write_line(msg)

    def write_line(self, line: str) -> None:
        sys.stdout.write(f"{line}\n")
        sys.stdout.flush()
