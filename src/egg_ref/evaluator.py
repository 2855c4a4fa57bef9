from __future__ import annotations

from types import MappingProxyType
from typing import Callable, List, Mapping, Optional, Sequence

from .runtime import (
    EggError,
    EggValue,
    Environment,
    EggTypeError,
    call_value,
    make_top_env,
)
from .types import is_callable
from .tree import Application, Identifier, Literal, Node, node_meta

from .eval.bind import eval_define, eval_set
from .eval.control import eval_do, eval_if, eval_while
from .eval.fn import eval_fun

EvalFunc = Callable[[Node, Environment], EggValue]
SpecialForm = Callable[[Sequence[Node], Environment, EvalFunc], EggValue]

# Handlers get the raw argument nodes and decide themselves what to evaluate.
SPECIAL_FORMS: Mapping[str, SpecialForm] = MappingProxyType({
    "if": eval_if,
    "while": eval_while,
    "do": eval_do,
    "define": eval_define,
    "set": eval_set,
    "fun": eval_fun,
})


def _maybe_attach_location(exc: EggError, node: Node) -> None:
    if exc.meta is not None:
        return

    meta = node_meta(node)
    if meta is not None:
        exc.meta = meta

# ---------------- Public API ----------------

def eval_expr(ast: Node, env: Optional[Environment]=None) -> EggValue:
    if env is None:
        env = make_top_env().child()

    return eval_node(ast, env)

# ---------------- Core evaluator ----------------

def eval_node(n: Node, env: Environment) -> EggValue:
    try:
        match n:
            case Literal(value=value):
                return value
            case Identifier(name=name):
                return env.lookup(name)
            case Application(operator=Identifier(name=name), args=args) if name in SPECIAL_FORMS:
                return SPECIAL_FORMS[name](args, env, eval_node)
            case Application(operator=op, args=args):
                fn = eval_node(op, env)
                if not is_callable(fn):
                    raise EggTypeError("applying a non-function")
                values: List[EggValue] = [eval_node(arg, env) for arg in args]
                return call_value(fn, values, eval_node)
    except EggError as e:
        _maybe_attach_location(e, n)
        raise

    raise TypeError(f"not an Egg AST node: {n!r}")


def is_special_form(name: str) -> bool:
    return name in SPECIAL_FORMS


__all__ = [
    "SPECIAL_FORMS",
    "eval_expr",
    "eval_node",
    "is_special_form",
]
