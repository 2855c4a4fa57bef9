from __future__ import annotations

import sys
import traceback
from pathlib import Path
from typing import Optional

from .evaluator import eval_expr
from .parser_rd import parse
from .runtime import EggError, EggRuntimeError, EggValue, Environment, make_top_env
from .tree import pretty
from .utils import debug_py_trace_enabled

# Every Egg call nests a handful of Python frames.
RECURSION_LIMIT = 10_000

def _raise_recursion_limit() -> None:
    if sys.getrecursionlimit() < RECURSION_LIMIT:
        sys.setrecursionlimit(RECURSION_LIMIT)

def run(*sources: str, env: Optional[Environment]=None) -> EggValue:
    """Parse the sources as one program (joined by newlines) and evaluate it.

    Without `env`, every call gets its own scope below a fresh top environment,
    so definitions never leak between runs. Recursion too deep for the host
    stack is reported as an `EggRuntimeError`.
    """
    _raise_recursion_limit()

    program = "\n".join(sources)
    ast = parse(program)

    if env is None:
        env = make_top_env().child()

    try:
        return eval_expr(ast, env)
    except RecursionError:
        raise EggRuntimeError("maximum recursion depth exceeded") from None

def _load_source(arg: Optional[str]) -> str:
    """
    Resolve CLI input into source text.
    - None or "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as literal source.
    """

    if arg is None or arg == "-":
        data = sys.stdin.read()
        if not data:
            raise SystemExit("No input provided on stdin")
        return data

    candidate = Path(arg)
    if candidate.is_file():
        return candidate.read_text(encoding="utf-8")

    return arg

def report_error(exc: EggError) -> None:
    print(f"Error: {exc}", file=sys.stderr)

    if debug_py_trace_enabled() and exc.__traceback__ is not None:
        print("\nPython traceback:", file=sys.stderr)
        print("".join(traceback.format_tb(exc.__traceback__)), file=sys.stderr, end="")

def main(argv: Optional[list[str]] = None) -> int:
    dump_ast = False
    arg = None
    args = sys.argv[1:] if argv is None else argv

    for token in args:
        if token == "--ast":
            dump_ast = True
            continue

        if token == "--repl":
            from .repl import repl
            repl()
            return 0

        if token.startswith("--"):
            raise SystemExit(f"Unknown flag: {token}")

        if arg is None:
            arg = token
        else:
            raise SystemExit(f"Unexpected argument: {token}")

    source = _load_source(arg)

    try:
        if dump_ast:
            print(pretty(parse(source)), end="")
        else:
            run(source)
    except EggError as exc:
        report_error(exc)
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
