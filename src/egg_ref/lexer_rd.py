"""
Lexer for Egg

The parser is scannerless: it matches the patterns below directly against the
remaining input. `tokenize` runs the same patterns over a whole source for
tooling that wants a flat token stream (REPL highlighting, input completeness).

Features:
- Total: skipping and tokenizing never fail
- Position tracking (line, column, start_pos) on lark Tokens
"""

from __future__ import annotations

import re
from typing import List, Tuple

from lark import Token

from .token_types import PUNCTUATION, TT

# ============================================================================
# Lexical patterns
# ============================================================================

STRING_RE = re.compile(r'"([^"]*)"')
NUMBER_RE = re.compile(r'[0-9]+\b', re.ASCII)
WORD_RE = re.compile(r'[^\s(),"]+')

# Any run of whitespace and `#`-to-end-of-line comments, repeated until
# neither matches.
SKIP_RE = re.compile(r'(?:\s|#.*)*')

_WHITESPACE_RE = re.compile(r'\s+')
_COMMENT_RE = re.compile(r'#.*')


def skip_index(source: str, pos: int) -> int:
    """Return the first position at or after *pos* that is not whitespace or comment."""
    m = SKIP_RE.match(source, pos)
    return m.end() if m else pos


def skip_space(text: str) -> str:
    """Drop leading whitespace and comments from *text*."""
    return text[skip_index(text, 0):]


def line_col(source: str, pos: int) -> Tuple[int, int]:
    """1-based (line, column) of offset *pos* in *source*."""
    line = source.count("\n", 0, pos) + 1
    last_nl = source.rfind("\n", 0, pos)
    col = pos + 1 if last_nl == -1 else pos - last_nl
    return line, col

# ============================================================================
# Tokenizer
# ============================================================================

class Lexer:
    """Flat scanner over Egg source, producing lark Tokens."""

    def __init__(self, source: str, emit_layout: bool = False):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.emit_layout = emit_layout
        self.tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """Tokenize entire source, return token list"""
        while self.pos < len(self.source):
            self.scan_token()
        return self.tokens

    def scan_token(self) -> None:
        src = self.source
        pos = self.pos

        m = _WHITESPACE_RE.match(src, pos)
        if m:
            self.consume(TT.WHITESPACE, m.group(0), layout=True)
            return

        m = _COMMENT_RE.match(src, pos)
        if m:
            self.consume(TT.COMMENT, m.group(0), layout=True)
            return

        ch = src[pos]
        if ch in PUNCTUATION:
            self.consume(PUNCTUATION[ch], ch)
            return

        # Same order the parser tries them in
        for tt, pattern in ((TT.STRING, STRING_RE), (TT.NUMBER, NUMBER_RE), (TT.WORD, WORD_RE)):
            m = pattern.match(src, pos)
            if m:
                self.consume(tt, m.group(0))
                return

        # Only an unterminated string gets here; it swallows the rest of the input
        self.consume(TT.ERROR, src[pos:])

    def consume(self, tt: TT, text: str, layout: bool = False) -> None:
        if not layout or self.emit_layout:
            self.tokens.append(Token(
                tt.name,
                text,
                start_pos=self.pos,
                line=self.line,
                column=self.column,
                end_pos=self.pos + len(text),
            ))

        newlines = text.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(text) - text.rfind("\n")
        else:
            self.column += len(text)
        self.pos += len(text)


def tokenize(source: str, emit_layout: bool = False) -> List[Token]:
    """Convenience function to tokenize source"""
    return Lexer(source, emit_layout=emit_layout).tokenize()


def paren_depth(source: str) -> int:
    """Net number of unclosed '(' in *source*, ignoring strings and comments."""
    depth = 0

    for tok in tokenize(source):
        if tok.type == TT.LPAR.name:
            depth += 1
        elif tok.type == TT.RPAR.name:
            depth -= 1

    return depth


def has_open_string(source: str) -> bool:
    return any(tok.type == TT.ERROR.name for tok in tokenize(source))
