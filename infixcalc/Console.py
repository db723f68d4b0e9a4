# Console.py
"""""
Console front end: one expression per line, result or error per line.

    > 2^3^2
    = 512
    > ROOT(2
    Error 3009: Missing ')'.
      ROOT(2
          ^
"""""

import sys

from . import MathEngine
from . import config_manager
from . import error as E

PROMPT = "> "
EXIT_WORDS = ("exit", "quit")


def caret_line(error):
    """Line pointing at the offending character of error.equation."""
    if error.position is None or error.equation is None:
        return None
    return f"  {error.equation}\n  {' ' * error.position}^"


def render_error(error):
    headline, details = E.describe(error)
    lines = [headline]
    marker = caret_line(error)
    if marker:
        lines.append(marker)
    lines.append(details.split("\n")[0])  # "Details: ..."
    return "\n".join(lines)


def run_once(problem, settings, out=None):
    """Evaluate one expression and print the outcome. Returns True on success."""
    out = out or sys.stdout
    try:
        ausgabe, _ = MathEngine.calculate(problem, settings)
    except E.MathError as e:
        print(render_error(e), file=out)
        return False
    print(ausgabe, file=out)
    return True


def repl(settings, stdin=None, out=None):
    """Read-evaluate-print loop until EOF or an exit word."""
    stdin = stdin or sys.stdin
    out = out or sys.stdout
    print("Infix calculator. Type an expression, 'exit' to leave.", file=out)
    while True:
        print(PROMPT, end="", file=out, flush=True)
        line = stdin.readline()
        if not line:
            print(file=out)
            break
        problem = line.strip()
        if problem.lower() in EXIT_WORDS:
            break
        if problem == "":
            continue
        run_once(problem, settings, out)


def main(argv=None):
    """Evaluate the expressions given as arguments, or start the REPL without any."""
    argv = sys.argv[1:] if argv is None else argv
    settings = config_manager.load_settings()

    if argv:
        results = [run_once(problem, settings) for problem in argv]
        return 0 if all(results) else 1

    repl(settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
