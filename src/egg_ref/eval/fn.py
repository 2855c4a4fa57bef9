from __future__ import annotations

from typing import Any, List, Sequence

from ..runtime import EggFn, EggSyntaxError, Environment
from ..tree import Node
from .helpers import expect_identifier

def extract_param_names(params: Sequence[Node]) -> List[str]:
    names: List[str] = []

    for p in params:
        names.append(expect_identifier("fun", p, what="parameter name"))

    return names

def eval_fun(args: Sequence[Node], env: Environment, eval_func: Any = None) -> EggFn:
    del eval_func  # the body is evaluated per call, not here

    if not args:
        raise EggSyntaxError("functions need a body")

    *params, body = args

    return EggFn(params=extract_param_names(params), body=body, env=env)
