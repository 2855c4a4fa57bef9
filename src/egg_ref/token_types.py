"""
Token Types for the Egg lexer

Shared between the lexer, the parser and the REPL highlighter.
"""

from enum import Enum, auto


class TT(Enum):
    """Token Types"""

    # Literals
    STRING = auto()
    NUMBER = auto()
    WORD = auto()

    # Punctuation
    LPAR = auto()
    RPAR = auto()
    COMMA = auto()

    # Layout
    WHITESPACE = auto()
    COMMENT = auto()

    # Anything the parser would reject at this position (stray or unterminated quote)
    ERROR = auto()


PUNCTUATION = {
    '(': TT.LPAR,
    ')': TT.RPAR,
    ',': TT.COMMA,
}
