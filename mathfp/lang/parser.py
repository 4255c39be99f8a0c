"""Recursive descent parser for mathfp. Consumes the Scanner's token list and builds a single Program tree.

Grammar, from lowest to highest precedence:

```
<program>    ::= <statement>* EOF
<statement>  ::= END_STMT                             ; empty statement, dropped from the program
               | <expression> (END_STMT | EOF)
<expression> ::= <binding> | <additive>
<binding>    ::= IDENTIFIER ":=" <expression>         ; recognized with one token of lookahead
<additive>   ::= <term> (("+" | "-") <term>)*         ; left associative: a - b - c = ((a - b) - c)
<term>       ::= <primary> (("*" | "/") <primary>)*   ; left associative
<primary>    ::= NUMBER | STRING | IDENTIFIER | "(" <expression> ")"
```

An error inside a statement is recorded and the parser skips ahead to the next statement, so one pass reports at most
one error per malformed statement. All errors are raised together as ParserErrors at the end.
"""

from typing import List

from mathfp.lang.ast import (Binary, Binding, Empty, Expr, Grouping, Literal, NumberLiteral, Program, StringLiteral,
                             Variable)
from mathfp.lang.error import ParseError, ParserErrors
from mathfp.lang.token import Token, TokenType


ADDITIVE = (TokenType.PLUS, TokenType.MINUS)
MULTIPLICATIVE = (TokenType.STAR, TokenType.SLASH)


class Parser:
    """Parses one token list. statements and errors are kept after parse, even when it fails."""

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.current = 0

        self.statements: List[Expr] = []
        self.errors: List[ParseError] = []

    def parse(self) -> Program:
        """Returns the Program node, or raises ParserErrors holding every syntax error in the token list."""
        assert self.tokens and self.tokens[-1].kind is TokenType.EOF, "no EOF token was found"

        while not self.check(TokenType.EOF):
            try:
                stmt = self.statement()
            except ParseError as error:
                self.errors.append(error)
                self.synchronize()
                continue

            if not isinstance(stmt, Empty):
                self.statements.append(stmt)

        if self.errors:
            raise ParserErrors(self.errors)
        return Program(list(self.statements))

    def peek(self, offset=0) -> Token:
        """Token offset places ahead. Never moves past the EOF token."""
        return self.tokens[min(self.current + offset, len(self.tokens) - 1)]

    def check(self, *kinds) -> bool:
        return self.peek().kind in kinds

    def advance(self) -> Token:
        token = self.peek()
        if token.kind is not TokenType.EOF:
            self.current += 1
        return token

    def error(self, msg, token=None):
        """ParseError located at token (the current token by default)."""
        if token is None:
            token = self.peek()
        error = ParseError(msg, token.describe(), line=token.line, column=token.column)
        error.expr = token.lexeme  # underlined by diagnosis
        return error

    def synchronize(self):
        """Skips past the rest of a malformed statement: up to and including its terminator, or up to EOF."""
        while not self.check(TokenType.EOF):
            if self.advance().kind is TokenType.END_STMT:
                return

    def statement(self) -> Expr:
        if self.check(TokenType.END_STMT):
            self.advance()
            return Empty()

        expr = self.expression()

        if self.check(TokenType.END_STMT):
            self.advance()
        elif self.check(TokenType.BIND):
            raise self.error("Binding target before {} must be a name")
        elif not self.check(TokenType.EOF):
            raise self.error("Expected ; or newline after expression, found {}")
        return expr

    def expression(self) -> Expr:
        if self.check(TokenType.IDENTIFIER) and self.peek(1).kind is TokenType.BIND:
            return self.binding()
        return self.additive()

    def binding(self) -> Expr:
        name = self.advance().lexeme
        self.advance()  # :=

        if self.check(TokenType.END_STMT, TokenType.EOF):
            raise self.error("Expected an expression after ':=', found {}")
        return Binding(name, self.expression())

    def additive(self) -> Expr:
        left = self.term()
        while self.check(*ADDITIVE):
            op = self.advance()
            left = Binary(left, op, self.term())
        return left

    def term(self) -> Expr:
        left = self.primary()
        while self.check(*MULTIPLICATIVE):
            op = self.advance()
            left = Binary(left, op, self.primary())
        return left

    def primary(self) -> Expr:
        token = self.peek()

        if token.kind is TokenType.NUMBER:
            self.advance()
            return Literal(NumberLiteral(token.literal))
        elif token.kind is TokenType.STRING:
            self.advance()
            return Literal(StringLiteral(token.literal))
        elif token.kind is TokenType.IDENTIFIER:
            self.advance()
            return Variable(token.lexeme)
        elif token.kind is TokenType.LEFT_PAREN:
            return self.grouping()
        elif token.kind in (TokenType.END_STMT, TokenType.EOF):
            raise self.error("Expected an expression, found {}")

        raise self.error("Unexpected token {}")

    def grouping(self) -> Expr:
        self.advance()  # (
        expr = self.expression()

        if not self.check(TokenType.RIGHT_PAREN):
            raise self.error("Expected ')' after expression, found {}")
        self.advance()
        return Grouping(expr)
