"""
Recursive Descent Parser for Egg

A program is exactly one expression. Expressions are:
1. quoted strings      "..."        -> Literal
2. decimal integers    123          -> Literal
3. bare words          foo, +, ==   -> Identifier
each optionally followed by any number of applied-form suffixes:
    expr(arg, arg, ...)(arg, ...)   -> Application (left-nested)

The parser works directly on the source string; there is no token stream.
"""

from __future__ import annotations

from typing import List, Tuple

from lark import Token

from .lexer_rd import NUMBER_RE, STRING_RE, WORD_RE, line_col, skip_index
from .token_types import TT
from .tree import Application, Identifier, Literal, Meta, Node
from .types import EggNumber, EggString, EggSyntaxError


class Parser:
    """
    Recursive descent parser over a position in `source`.

    Every parse_* method starts by skipping whitespace and comments and leaves
    `pos` just past what it consumed.
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0

    # ========================================================================
    # Cursor Navigation
    # ========================================================================

    def skip(self) -> None:
        self.pos = skip_index(self.source, self.pos)

    def peek(self) -> str:
        """Next significant character, or '' at end of input"""
        self.skip()
        return self.source[self.pos:self.pos + 1]

    def rest(self) -> str:
        return self.source[self.pos:]

    def meta(self) -> Meta:
        line, col = line_col(self.source, self.pos)
        return Meta(line=line, column=col, start_pos=self.pos)

    def error(self, message: str) -> EggSyntaxError:
        return EggSyntaxError(message, meta=self.meta(), rest=self.rest())

    # ========================================================================
    # Parsing
    # ========================================================================

    def parse(self) -> Node:
        """Parse entire program: one expression and nothing after it"""
        expr = self.parse_expression()

        if self.peek():
            raise self.error("unexpected trailing text")

        return expr

    def parse_expression(self) -> Node:
        self.skip()
        src = self.source
        meta = self.meta()
        expr: Node

        m = STRING_RE.match(src, self.pos)
        if m:
            expr = Literal(EggString(m.group(1)), meta=meta)
        else:
            m = NUMBER_RE.match(src, self.pos)
            if m:
                expr = Literal(EggNumber(float(m.group(0))), meta=meta)
            else:
                m = WORD_RE.match(src, self.pos)
                if m is None:
                    raise self.error("unexpected syntax")
                name = Token(TT.WORD.name, m.group(0), start_pos=self.pos, line=meta.line, column=meta.column)
                expr = Identifier(name, meta=meta)

        self.pos = m.end()
        return self.parse_apply(expr)

    def parse_apply(self, expr: Node) -> Node:
        """Wrap `expr` in as many applied-form suffixes as follow it"""
        while self.peek() == "(":
            meta = expr.meta
            self.pos += 1
            args: List[Node] = []

            while self.peek() != ")":
                args.append(self.parse_expression())

                nxt = self.peek()
                if nxt == ",":
                    self.pos += 1
                elif nxt != ")":
                    raise self.error("expected ',' or ')'")

            self.pos += 1
            expr = Application(expr, tuple(args), meta=meta)

        return expr


def parse_expression(text: str) -> Tuple[Node, str]:
    """Parse one expression from the front of `text`; return it and the unconsumed remainder."""
    parser = Parser(text)
    expr = parser.parse_expression()
    return expr, parser.rest()


def parse(source: str) -> Node:
    """Parse a whole program"""
    return Parser(source).parse()
