import unittest

from mathfp.lang.ast import Binary, Binding, Grouping, Literal, NumberLiteral, Program, StringLiteral, Variable
from mathfp.lang.error import ErrorHandler, ParseError, ParserErrors
from mathfp.lang.parser import Parser
from mathfp.lang.token import Scanner, Token, TokenType


def number(value):
    return Literal(NumberLiteral(value))


class ParserTestCase(unittest.TestCase):

    def parse(self, source):
        return Parser(Scanner(source).scan()).parse()

    def test_empty(self):
        self.assertEqual(Program([]), Parser([Token(TokenType.EOF, "", 1, 1)]).parse())

        should_pass = ["", "   ", "\n\n", ";;;", " \t\r\n ; \n"]
        for case in should_pass:
            self.assertEqual(Program([]), self.parse(case), repr(case))

    def test_precedence(self):
        five = Token(TokenType.NUMBER, "5", 1, 1, 5.0)
        plus = Token(TokenType.PLUS, "+", 1, 3)
        three = Token(TokenType.NUMBER, "3", 1, 5, 3.0)
        star = Token(TokenType.STAR, "*", 1, 7)
        one = Token(TokenType.NUMBER, "1", 1, 9, 1.0)
        eof = Token(TokenType.EOF, "", 1, 10)

        expected = Program([Binary(number(5.0), plus, Binary(number(3.0), star, number(1.0)))])
        self.assertEqual(expected, Parser([five, plus, three, star, one, eof]).parse())

    def test_stmt(self):
        tokens = Scanner("5 * 3;").scan()

        expected = Program([Binary(number(5.0), tokens[1], number(3.0))])
        self.assertEqual(expected, Parser(tokens).parse())

    def test_left_associative(self):
        tokens = Scanner("a - b - c").scan()
        expected = Binary(Binary(Variable("a"), tokens[1], Variable("b")), tokens[3], Variable("c"))
        self.assertEqual(Program([expected]), Parser(tokens).parse())

        tokens = Scanner("8 / 2 * 4").scan()
        expected = Binary(Binary(number(8.0), tokens[1], number(2.0)), tokens[3], number(4.0))
        self.assertEqual(Program([expected]), Parser(tokens).parse())

    def test_grouping(self):
        tokens = Scanner("(9) * (9)").scan()
        expected = Binary(Grouping(number(9.0)), tokens[3], Grouping(number(9.0)))
        self.assertEqual(Program([expected]), Parser(tokens).parse())

        tokens = Scanner("2 * (1 + 3)").scan()
        expected = Binary(number(2.0), tokens[1], Grouping(Binary(number(1.0), tokens[4], number(3.0))))
        self.assertEqual(Program([expected]), Parser(tokens).parse())

    def test_bindings(self):
        tokens = Scanner("x := 2 * 5 / 1; y := 7").scan()

        expected = Program([
            Binding("x", Binary(Binary(number(2.0), tokens[3], number(5.0)), tokens[5], number(1.0))),
            Binding("y", number(7.0)),
        ])
        self.assertEqual(expected, Parser(tokens).parse())

    def test_nested_binding(self):
        self.assertEqual(Program([Binding("a", Binding("b", number(1.0)))]), self.parse("a := b := 1"))

    def test_string_and_variable(self):
        cases = {
            "msg := \"hello\"": Program([Binding("msg", Literal(StringLiteral("hello")))]),
            "msg": Program([Variable("msg")]),
            "true\nnil": Program([Variable("true"), Variable("nil")]),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, self.parse(case), case)

    def test_blank_lines_dropped(self):
        self.assertEqual(Program([number(1.0), number(2.0)]), self.parse("\n\n1\n\n;2;\n"))

    def test_no_eof(self):
        self.assertRaises(AssertionError, Parser([Token(TokenType.NUMBER, "1", 1, 1, 1.0)]).parse)
        self.assertRaises(AssertionError, Parser([]).parse)


class ParserErrorsTestCase(unittest.TestCase):

    def parse_errors(self, source):
        parser = Parser(Scanner(source).scan())
        with self.assertRaises(ParserErrors) as context:
            parser.parse()
        return parser, context.exception

    def test_synchronize(self):
        parser, errors = self.parse_errors("5 + ; 3 * 2;")

        self.assertEqual(1, len(errors))
        self.assertEqual("line 1, column 5: Expected an expression, found ';'", str(errors.errors[0]))

        tokens = parser.tokens
        self.assertEqual([Binary(number(3.0), tokens[4], number(2.0))], parser.statements)

    def test_one_error_per_statement(self):
        parser, errors = self.parse_errors("1 2\n) \n3 +\n4")

        expected = [
            "line 1, column 3: Expected ; or newline after expression, found '2'",
            "line 2, column 1: Unexpected token ')'",
            "line 3, column 4: Expected an expression, found newline",
        ]
        self.assertEqual(expected, [str(error) for error in errors])
        self.assertTrue(all(isinstance(error, ParseError) for error in errors))
        self.assertEqual([number(4.0)], parser.statements)

    def test_error_expr_is_lexeme(self):
        source = "x := 1 + foo bar"
        __, errors = self.parse_errors(source)

        error = errors.errors[0]
        self.assertEqual("Expected ; or newline after expression, found 'bar'", error.msg)
        self.assertEqual("bar", error.expr)

        diagnosis = ErrorHandler.diagnose(error, source)
        self.assertEqual(1, diagnosis.count("^"))
        self.assertEqual(2, diagnosis.count("~"))

        __, errors = self.parse_errors("1 +")
        self.assertEqual("", errors.errors[0].expr)

    def test_report(self):
        __, errors = self.parse_errors("1 +")

        self.assertEqual("Parser errors:\nline 1, column 4: Expected an expression, found end of input", str(errors))

    def test_invalid_stmts(self):
        should_raise = {
            "5 + * 3": "Unexpected token '*'",
            "(1 + 2": "Expected ')' after expression, found end of input",
            "(1 + 2;": "Expected ')' after expression, found ';'",
            "()": "Unexpected token ')'",
            "x :=": "Expected an expression after ':=', found end of input",
            "x := ;": "Expected an expression after ':=', found ';'",
            "5 := 3": "Binding target before ':=' must be a name",
            "(x) := 3": "Binding target before ':=' must be a name",
            "1 < 2": "Expected ; or newline after expression, found '<'",
            "if x then 1 else 2": "Unexpected token 'if'",
            "f := n |-> n": "Expected ; or newline after expression, found '|->'",
        }
        for case, msg in should_raise.items():
            __, errors = self.parse_errors(case)
            self.assertEqual([msg], [error.msg for error in errors], case)


if __name__ == '__main__':
    unittest.main()
