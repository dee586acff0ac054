#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, List, Protocol


# ==========================
# Tokens and lexer
# ==========================

class TokenKind(Enum):
    # Special
    ILLEGAL = auto()  # any character the lexer does not recognize
    EOF = auto()

    IDENT = auto()  # identifier, e.g. x, total, etc.
    INT = auto()  # integer literal, e.g. 42, 0x1F, etc.

    # Keywords
    LET = auto()
    TRUE = auto()
    FALSE = auto()
    IF = auto()
    ELSE = auto()
    RETURN = auto()

    # Punctuation / operators
    ASSIGN = auto()  # =
    PLUS = auto()  # +
    MINUS = auto()  # -
    BANG = auto()  # !
    ASTERISK = auto()  # *
    SLASH = auto()  # /
    LT = auto()  # <
    GT = auto()  # >
    LE = auto()  # <=
    GE = auto()  # >=
    EQ = auto()  # ==
    NOT_EQ = auto()  # !=
    COMMA = auto()  # ,
    SEMICOLON = auto()  # ;
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    LBRACE = auto()  # {
    RBRACE = auto()  # }


KEYWORDS = {
    "let": TokenKind.LET,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
}

SINGLE_CHAR_TOKENS = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    line: int = 1
    column: int = 1

    def __repr__(self) -> str:
        return f"{self.text!r}" if self.kind != TokenKind.EOF else "end-of-input"


class TokenSource(Protocol):
    """Anything the parser can pull tokens from, one at a time."""

    def next_token(self) -> Token:
        ...


class TokenListSource:
    """Serves a prepared token list; keeps answering EOF once it runs out."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self.tokens = list(tokens)
        self.index = 0

    def next_token(self) -> Token:
        if self.index >= len(self.tokens):
            last = self.tokens[-1] if self.tokens else None
            if last is not None and last.kind is TokenKind.EOF:
                return last
            return Token(TokenKind.EOF, "")
        tok = self.tokens[self.index]
        self.index += 1
        return tok


class Lexer:
    def __init__(self, source: str, filename: str = "<input>") -> None:
        self.source = source
        self.filename = filename
        self.length = len(source)
        self.index = 0
        self.line = 1
        self.column = 1

    @classmethod
    def from_source(cls, source: str) -> "Lexer":
        return cls(source)

    # --- low-level char utilities ---

    def _at_end(self) -> bool:
        return self.index >= self.length

    def _peek(self) -> str:
        if self._at_end():
            return "\0"
        return self.source[self.index]

    def _peek_next(self) -> str:
        if self.index + 1 >= self.length:
            return "\0"
        return self.source[self.index + 1]

    def _advance(self) -> str:
        c = self._peek()
        if not self._at_end():
            self.index += 1
            if c == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        return c

    # --- main API ---

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.kind is TokenKind.EOF:
                break
        return tokens

    def next_token(self) -> Token:
        self._skip_ws_and_comments()
        start_line, start_col = self.line, self.column

        if self._at_end():
            return Token(TokenKind.EOF, "", start_line, start_col)

        c = self._advance()

        # identifiers / keywords
        if c.isalpha() or c == "_":
            ident = [c]
            while self._peek().isalnum() or self._peek() == "_":
                ident.append(self._advance())
            text = "".join(ident)
            return Token(KEYWORDS.get(text, TokenKind.IDENT), text, start_line, start_col)

        # integer literals; the parser decides whether the text is a valid integer
        if c.isdigit():
            digits = [c]
            while self._peek().isalnum() or self._peek() == "_":
                digits.append(self._advance())
            return Token(TokenKind.INT, "".join(digits), start_line, start_col)

        # operators with lookahead

        if c == "=":
            if self._peek() == "=":
                self._advance()
                return Token(TokenKind.EQ, "==", start_line, start_col)
            return Token(TokenKind.ASSIGN, c, start_line, start_col)

        if c == "!":
            if self._peek() == "=":
                self._advance()
                return Token(TokenKind.NOT_EQ, "!=", start_line, start_col)
            return Token(TokenKind.BANG, c, start_line, start_col)

        if c == "<":
            if self._peek() == "=":
                self._advance()
                return Token(TokenKind.LE, "<=", start_line, start_col)
            return Token(TokenKind.LT, c, start_line, start_col)

        if c == ">":
            if self._peek() == "=":
                self._advance()
                return Token(TokenKind.GE, ">=", start_line, start_col)
            return Token(TokenKind.GT, c, start_line, start_col)

        kind = SINGLE_CHAR_TOKENS.get(c)
        if kind is not None:
            return Token(kind, c, start_line, start_col)

        return Token(TokenKind.ILLEGAL, c, start_line, start_col)

    def _skip_ws_and_comments(self) -> None:
        while True:
            c = self._peek()
            if c in (" ", "\t", "\r", "\n"):
                self._advance()
                continue
            if c == "/" and self._peek_next() == "/":
                # line comment
                self._advance()  # '/'
                self._advance()  # second '/'
                while self._peek() not in ("\n", "\0"):
                    self._advance()
                continue
            break
