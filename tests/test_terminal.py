import re

from rds.tools.terminal import TerminalPrinter

rx_ansi = re.compile(r"\x1b\[[0-9;]*m")


def test_write_line_is_verbatim(capsys):
    TerminalPrinter(color=True).write_line("  2024-01-01 00:00:01 UTC::@:[1]:LOG: x")

    assert capsys.readouterr().out == "  2024-01-01 00:00:01 UTC::@:[1]:LOG: x\n"


def test_loudln_plain_when_colour_off(capsys):
    TerminalPrinter(color=False).loudln("DB instance not found")

    assert capsys.readouterr().out == "DB instance not found\n"


def test_loudln_highlighted_when_colour_on(capsys):
    TerminalPrinter(color=True).loudln("DB instance not found")

    out = capsys.readouterr().out
    assert rx_ansi.sub("", out) == "DB instance not found\n"


def test_colour_defaults_to_off_when_not_a_terminal(capsys):
    assert TerminalPrinter().color is False
