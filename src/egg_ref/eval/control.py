from __future__ import annotations

from typing import Any, Callable, Sequence

from ..runtime import EggValue, Environment
from ..tree import Node
from ..types import EggBool
from .helpers import expect_arity, is_truthy

EvalFunc = Callable[[Any, Environment], Any]

def eval_if(args: Sequence[Node], env: Environment, eval_func: EvalFunc) -> EggValue:
    expect_arity("if", args, 3)
    cond, then_branch, else_branch = args

    if is_truthy(eval_func(cond, env)):
        return eval_func(then_branch, env)

    return eval_func(else_branch, env)

def eval_while(args: Sequence[Node], env: Environment, eval_func: EvalFunc) -> EggValue:
    expect_arity("while", args, 2)
    cond, body = args

    while is_truthy(eval_func(cond, env)):
        eval_func(body, env)

    # There is no "nothing" value; a finished loop yields false.
    return EggBool(False)

def eval_do(args: Sequence[Node], env: Environment, eval_func: EvalFunc) -> EggValue:
    value: EggValue = EggBool(False)

    for arg in args:
        value = eval_func(arg, env)

    return value
