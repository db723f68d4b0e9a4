"""Tests for the console front end."""

import io

from infixcalc import Console
from infixcalc import error as E


def test_run_once_prints_result(settings):
    out = io.StringIO()
    assert Console.run_once("2+3*4", settings, out) is True
    assert out.getvalue() == "= 14\n"


def test_run_once_points_at_the_error(settings):
    out = io.StringIO()
    assert Console.run_once("2 + 3)", settings, out) is False

    lines = out.getvalue().splitlines()
    assert lines[0] == "Error 3010: Parentheses don't match."
    assert lines[1] == "  2+3)"
    assert lines[2] == "     ^"
    assert lines[3].startswith("Details: ")


def test_render_error_without_position():
    text = Console.render_error(E.NestingTooDeep("Too deep", equation="((1))"))
    assert "^" not in text
    assert text.startswith("Error 3032")


def test_repl_until_exit(settings):
    stdin = io.StringIO("1+1\n\n2^10\nexit\n3+3\n")
    out = io.StringIO()
    Console.repl(settings, stdin, out)

    text = out.getvalue()
    assert "= 2\n" in text
    assert "= 1024\n" in text
    assert "= 6" not in text


def test_repl_stops_at_end_of_input(settings):
    out = io.StringIO()
    Console.repl(settings, io.StringIO("5/0\n"), out)
    assert "Error 3003" in out.getvalue()


def test_main_with_arguments(capsys):
    assert Console.main(["1+1", "2*3"]) == 0
    assert capsys.readouterr().out == "= 2\n= 6\n"

    assert Console.main(["1+"]) == 1
    assert "Error 3011" in capsys.readouterr().out
