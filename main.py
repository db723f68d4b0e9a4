# Main.py
""""" Entry point of the calculator.

   Responsibilities:
   - Verify required files exist in development mode
   - Start the console front end (--console) or the Qt GUI

   Examples:
       python main.py                      GUI
       python main.py --console            REPL
       python main.py --console "2^3^2"    evaluate and exit
"""""
import argparse
import sys
from pathlib import Path


# Resolve project root depending on run mode (Script or .exe)

if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent



def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed,
      instead of a vague crash when the engine imports fail.
      The bundled .exe embeds them, so the check is skipped there.
    """

    package_dir = PROJECT_ROOT / "infixcalc"

    REQUIRED = [
        package_dir / "MathEngine.py",
        package_dir / "Tokenizer.py",
        package_dir / "Reducer.py",
        package_dir / "Operands.py",
        package_dir / "Operators.py",
        package_dir / "ScientificEngine.py",
        package_dir / "config_manager.py",
        package_dir / "config.json",
        package_dir / "ui_strings.json",
    ]

    missing_files = [file_path.name for file_path in REQUIRED if not file_path.exists()]

    if missing_files:
        print("Error: The following files are missing or in the wrong location:")
        for file_name in missing_files:
            print(f"- {file_name}")
        sys.exit(1)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Arbitrary precision infix calculator")
    parser.add_argument("--console", action="store_true", help="use the console instead of the GUI")
    parser.add_argument("expressions", nargs="*", help="expressions to evaluate (console only)")
    return parser.parse_args(argv)


def main(argv=None):

    """
    Pick the front end and hand over control; no business logic here.
    """

    args = parse_args(argv)

    if args.console or args.expressions:
        from infixcalc import Console
        return Console.main(args.expressions)

    # The GUI owns the event loop from here on
    from infixcalc import UI
    UI.main()
    return 0


if __name__ == "__main__":
    is_running_as_exe = getattr(sys, 'frozen', False)

    if not is_running_as_exe:
        check_files_exist()
    sys.exit(main())
