"""AST node classes for Egg.

The tree is a closed sum of three frozen shapes. Source positions ride along in
`meta` but never take part in equality, so two parses of the same text compare
equal.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Tuple, Union

from lark import Token, Tree
from typing_extensions import TypeAlias

if TYPE_CHECKING:
    from .types import EggNumber, EggString


@dataclass(frozen=True)
class Meta:
    line: int
    column: int
    start_pos: int = 0


@dataclass(frozen=True)
class Literal:
    value: Union['EggNumber', 'EggString']
    meta: Optional[Meta] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Identifier:
    name: str
    meta: Optional[Meta] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Application:
    operator: 'Node'
    args: Tuple['Node', ...] = ()
    meta: Optional[Meta] = field(default=None, compare=False, repr=False)


Node: TypeAlias = Union[Literal, Identifier, Application]


def node_meta(node: Node) -> Optional[Meta]:
    return getattr(node, "meta", None)


def to_tree(node: Node) -> Tree:
    """Render an AST as a lark Tree (for `.pretty()` dumps)."""
    match node:
        case Literal(value=value):
            kind = "STRING" if isinstance(value.value, str) else "NUMBER"
            return Tree("literal", [Token(kind, repr(value))])
        case Identifier(name=name):
            return Tree("identifier", [Token("WORD", name)])
        case Application(operator=op, args=args):
            return Tree("application", [
                Tree("operator", [to_tree(op)]),
                Tree("args", [to_tree(arg) for arg in args]),
            ])
    raise TypeError(f"not an Egg AST node: {node!r}")


def pretty(node: Node, indent: str = '  ') -> str:
    return to_tree(node).pretty(indent)
