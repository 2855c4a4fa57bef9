from __future__ import annotations

from typing import Sequence

from ..runtime import EggSyntaxError, EggValue
from ..tree import Identifier, Node, node_meta
from ..types import EggBool

def is_truthy(val: EggValue) -> bool:
    """Only the boolean false is falsy; 0, "" and empty arrays all count as true."""
    match val:
        case EggBool(value=False):
            return False
        case _:
            return True

def expect_arity(form: str, args: Sequence[Node], count: int) -> None:
    if len(args) != count:
        raise EggSyntaxError(f"bad number of arguments to {form}: expected {count}, got {len(args)}")

def expect_identifier(form: str, node: Node, what: str = "name") -> str:
    if not isinstance(node, Identifier):
        raise EggSyntaxError(f"bad use of {form}: {what} must be a word", meta=node_meta(node))

    return node.name
