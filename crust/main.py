from __future__ import annotations

import argparse
import sys
from pathlib import Path

from crust.config import configure_logging, load_settings
from crust.errors import CrustError, ExecutionError
from crust.interpreter import Interpreter
from crust.program import Program

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_EXECUTION = 2


class _ArgumentParser(argparse.ArgumentParser):
    # argparse exits with 2 on bad usage, which is reserved for execution errors.
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"error: {message}\n")


def _fail(code: int, err: BaseException) -> int:
    print(f"error: {err}", file=sys.stderr)
    return code


def main(argv: list[str] | None = None) -> int:
    parser = _ArgumentParser(prog="crust", description="run a crust bytecode program")
    parser.add_argument("program", type=Path, help="path to the program source")
    parser.add_argument("--debug", action="store_true", help="trace every executed step to stderr")
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ValueError as e:
        return _fail(EXIT_USAGE, e)

    debug = bool(args.debug or settings.debug)
    configure_logging("DEBUG" if debug else settings.log_level)

    try:
        program = Program.from_file(args.program)
    except CrustError as e:
        return _fail(EXIT_USAGE, e.wrap("unable to run program"))

    interpreter = Interpreter(program, debug=debug, stdout=sys.stdout)
    try:
        interpreter.run()
    except ExecutionError as e:
        return _fail(EXIT_EXECUTION, e)
    finally:
        sys.stdout.flush()
    return EXIT_OK
