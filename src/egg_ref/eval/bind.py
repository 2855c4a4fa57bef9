from __future__ import annotations

from typing import Any, Callable, Sequence

from ..runtime import EggValue, Environment
from ..tree import Node
from .helpers import expect_arity, expect_identifier

EvalFunc = Callable[[Any, Environment], Any]

def eval_define(args: Sequence[Node], env: Environment, eval_func: EvalFunc) -> EggValue:
    """Bind in the current scope only, shadowing any outer binding."""
    expect_arity("define", args, 2)
    name = expect_identifier("define", args[0])

    value = eval_func(args[1], env)
    env.define(name, value)

    return value

def eval_set(args: Sequence[Node], env: Environment, eval_func: EvalFunc) -> EggValue:
    """Overwrite the nearest existing binding; never creates one."""
    expect_arity("set", args, 2)
    name = expect_identifier("set", args[0])

    value = eval_func(args[1], env)
    env.assign(name, value)

    return value
