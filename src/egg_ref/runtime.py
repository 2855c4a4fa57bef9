from __future__ import annotations

import importlib
from typing import Callable, Dict, List, Optional

from .types import (
    Builtin, BuiltinFn, EggFn, EggValue, Environment,
    EggError, EggRuntimeError, EggSyntaxError, EggReferenceError, EggTypeError, EggIndexError,
    is_callable,
)

__all__ = [
    "Builtin", "EggFn", "EggValue", "Environment",
    "EggError", "EggRuntimeError", "EggSyntaxError", "EggReferenceError", "EggTypeError", "EggIndexError",
    "register_stdlib", "register_constant", "init_stdlib", "make_top_env", "call_value",
]

class Builtins:
    """Host-provided names the top environment is seeded from."""
    stdlib_functions: Dict[str, Builtin] = {}
    constants: Dict[str, EggValue] = {}

_STDLIB_INITIALIZED = False

def init_stdlib() -> None:
    """Load stdlib modules (idempotent) so register_stdlib hooks run."""
    global _STDLIB_INITIALIZED

    if _STDLIB_INITIALIZED:
        return

    importlib.import_module("egg_ref.stdlib")
    _STDLIB_INITIALIZED = True

def register_stdlib(name: str, *, arity: Optional[int] = None):
    def dec(fn: BuiltinFn):
        Builtins.stdlib_functions[name] = Builtin(name=name, fn=fn, arity=arity)
        return fn

    return dec

def register_constant(name: str, value: EggValue) -> None:
    Builtins.constants[name] = value

def make_top_env() -> Environment:
    """Fresh root scope holding every registered host value."""
    init_stdlib()
    env = Environment()

    for name, value in Builtins.constants.items():
        env.define(name, value)

    for name, std in Builtins.stdlib_functions.items():
        env.define(name, std)

    return env

def check_arity(fn: Builtin | EggFn, args: List[EggValue]) -> None:
    if fn.arity is not None and len(args) != fn.arity:
        raise EggTypeError(
            f"wrong number of arguments: {fn!r} expects {fn.arity}; got {len(args)}"
        )

def call_value(fn: EggValue, args: List[EggValue], eval_func: Optional[Callable] = None) -> EggValue:
    if not is_callable(fn):
        raise EggTypeError("applying a non-function")

    if isinstance(fn, Builtin):
        check_arity(fn, args)
        return fn.fn(args)

    return call_eggfn(fn, args, eval_func)

def call_eggfn(fn: EggFn, args: List[EggValue], eval_func: Optional[Callable] = None) -> EggValue:
    check_arity(fn, args)

    if eval_func is None:
        from .evaluator import eval_node  # local import to avoid cycle
        eval_func = eval_node

    local = fn.env.child()

    for name, value in zip(fn.params, args):
        local.define(name, value)

    return eval_func(fn.body, local)
