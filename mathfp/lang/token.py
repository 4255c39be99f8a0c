"""Lexical scanning for mathfp. Turns source text into a flat list of Tokens, each stamped with the line and column its
lexeme starts at. Scanning never stops at the first bad character: every lexical error in the source is collected and
raised together as ScannerErrors.

Tokens can be loosely defined as follows:

```
<operator>   ::= "+" | "-" | "*" | "/" | "<" | ">" | "(" | ")"
<maps_to>    ::= "|->"
<bind>       ::= ":="
<end_stmt>   ::= "\n" | ";"
<number>     ::= (<digit> | ".")+                 ; must parse as a float: "1.", ".5" are fine, "1.2.3" is not
<string>     ::= '"' <char>* '"'                  ; captured verbatim, no escapes
<identifier> ::= <alpha> (<alnum> | "_")*         ; "if", "then", "else" are keywords
```
"""

import enum
from dataclasses import dataclass
from typing import Any, List

from mathfp.lang.error import ScanError, ScannerErrors


class TokenType(enum.Enum):
    # single-character tokens
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    LESS_THAN = "<"
    GREATER_THAN = ">"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"

    # data tokens
    IDENTIFIER = "identifier"
    NUMBER = "number"
    STRING = "string"

    # keywords
    IF = "if"
    THEN = "then"
    ELSE = "else"

    # special symbols
    MAPS_TO = "|->"
    BIND = ":="
    END_STMT = "end of statement"

    EOF = "end of input"


SINGLE_CHARS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "<": TokenType.LESS_THAN,
    ">": TokenType.GREATER_THAN,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
}

KEYWORDS = {
    "if": TokenType.IF,
    "then": TokenType.THEN,
    "else": TokenType.ELSE,
}

WHITESPACE = " \r\t"
END_STMT = "\n;"


@dataclass(frozen=True)
class Token:
    """Smallest classified unit of source text. literal holds the float of a NUMBER or the text of a STRING."""
    kind: TokenType
    lexeme: str
    line: int
    column: int
    literal: Any = None

    def describe(self):
        """Human-readable form used in error messages."""
        if self.kind is TokenType.EOF:
            return "end of input"
        elif self.kind is TokenType.END_STMT:
            return "newline" if self.lexeme == "\n" else "';'"
        return f"'{self.lexeme}'"

    def __str__(self):
        return self.lexeme


class Scanner:
    """Greedy left-to-right scanner over a single source string."""

    def __init__(self, source):
        self.source = source

        self.start = 0    # index of the first character of the lexeme being scanned
        self.current = 0  # index of the next character to consume

        self.line = 1
        self.column = 1
        self._start_pos = (1, 1)  # (line, column) of self.start

    def scan(self) -> List[Token]:
        """Scans the whole source. Returns the token list, which always ends with a single EOF token, or raises
        ScannerErrors holding every lexical error found.
        """
        tokens = []
        errors = []

        while True:
            try:
                token = self.scan_token()
            except ScanError as error:
                errors.append(error)
                continue

            tokens.append(token)
            if token.kind is TokenType.EOF:
                break

        if errors:
            raise ScannerErrors(errors)
        return tokens

    def scan_token(self) -> Token:
        """Scans and returns the next token, skipping whitespace. Raises ScanError for a bad lexeme, after moving past
        it so that scanning can go on.
        """
        while self.peek() is not None and self.peek() in WHITESPACE:
            self.advance()

        self.start = self.current
        self._start_pos = (self.line, self.column)

        char = self.peek()
        if char is None:
            return self.make_token(TokenType.EOF)

        if char in SINGLE_CHARS:
            self.advance()
            return self.make_token(SINGLE_CHARS[char])
        elif char == "|":
            return self.symbol("|->", TokenType.MAPS_TO)
        elif char == ":":
            return self.symbol(":=", TokenType.BIND)
        elif char == "\"":
            return self.string()
        elif is_digit(char) or char == ".":
            return self.number()
        elif char.isalpha():
            return self.identifier()
        elif char in END_STMT:
            self.advance()
            return self.make_token(TokenType.END_STMT)

        self.advance()
        raise self.error("Unexpected character '{}'", char)

    def peek(self, offset=0):
        """Character offset places ahead of the cursor, or None past the end of the source."""
        idx = self.current + offset
        return self.source[idx] if idx < len(self.source) else None

    def advance(self):
        """Consumes one character, keeping line and column up to date."""
        char = self.source[self.current]
        self.current += 1

        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    @property
    def lexeme(self):
        return self.source[self.start:self.current]

    def make_token(self, kind, literal=None):
        line, column = self._start_pos
        return Token(kind, self.lexeme, line, column, literal)

    def error(self, msg, exprs=None):
        line, column = self._start_pos
        return ScanError(msg, exprs, line=line, column=column)

    def symbol(self, expected, kind):
        """Multi-character symbol whose first character cannot stand on its own."""
        if self.source.startswith(expected, self.current):
            for __ in expected:
                self.advance()
            return self.make_token(kind)

        self.advance()
        raise self.error("Expected a {} symbol", expected)

    def string(self):
        self.advance()  # opening quote
        while self.peek() is not None and self.peek() != "\"":
            self.advance()

        if self.peek() is None:
            raise self.error("Unterminated string", self.lexeme)

        self.advance()  # closing quote
        return self.make_token(TokenType.STRING, self.lexeme[1:-1])

    def number(self):
        while self.peek() is not None and (is_digit(self.peek()) or self.peek() == "."):
            self.advance()

        try:
            value = float(self.lexeme)
        except ValueError:
            raise self.error("Failed to parse '{}' as number", self.lexeme)
        return self.make_token(TokenType.NUMBER, value)

    def identifier(self):
        while self.peek() is not None and (self.peek().isalnum() or self.peek() == "_"):
            self.advance()
        return self.make_token(KEYWORDS.get(self.lexeme, TokenType.IDENTIFIER))


def is_digit(char):
    """ASCII digits only; str.isdigit also accepts superscripts and other scripts' numerals."""
    return "0" <= char <= "9"
