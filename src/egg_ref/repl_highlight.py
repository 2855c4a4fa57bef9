"""prompt_toolkit lexer for live Egg syntax highlighting in the REPL."""

from __future__ import annotations

from typing import Callable

from lark import Token
from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from .evaluator import is_special_form
from .lexer_rd import tokenize
from .token_types import TT

# Map highlight groups → prompt_toolkit style strings.
GROUP_STYLE = {
    "keyword": "bold ansicyan",
    "boolean": "ansicyan",
    "number": "ansimagenta",
    "string": "ansigreen",
    "identifier": "",
    "punctuation": "",
    "comment": "italic ansigray",
    "error": "bold ansired",
}

_TT_GROUP = {
    TT.STRING.name: "string",
    TT.NUMBER.name: "number",
    TT.WORD.name: "identifier",
    TT.LPAR.name: "punctuation",
    TT.RPAR.name: "punctuation",
    TT.COMMA.name: "punctuation",
    TT.COMMENT.name: "comment",
    TT.WHITESPACE.name: "",
    TT.ERROR.name: "error",
}

_BOOLEANS = {"true", "false"}


def token_group(tok: Token) -> str:
    if tok.type == TT.WORD.name:
        if is_special_form(tok.value):
            return "keyword"
        if tok.value in _BOOLEANS:
            return "boolean"

    return _TT_GROUP.get(tok.type, "")


def highlight_line(text: str) -> StyleAndTextTuples:
    """Tokenize a single line and return styled fragments."""
    if not text:
        return [("", "")]

    result: StyleAndTextTuples = []

    for tok in tokenize(text, emit_layout=True):
        style = GROUP_STYLE.get(token_group(tok), "")
        result.append((style, str(tok)))

    return result


class EggLexer(Lexer):
    """prompt_toolkit Lexer that highlights Egg source line by line."""

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines

        cache: dict[int, StyleAndTextTuples] = {}

        def get_line(lineno: int) -> StyleAndTextTuples:
            if lineno not in cache:
                if lineno < len(lines):
                    cache[lineno] = highlight_line(lines[lineno])
                else:
                    cache[lineno] = [("", "")]

            return cache[lineno]

        return get_line
