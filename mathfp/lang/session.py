"""Session control for mathfp. Runs source text through the whole pipeline (Scanner -> Parser -> evaluate) against one
Environment, either for a single file or for every line typed into the command-line interpreter.
"""

from mathfp.lang.error import GenericException
from mathfp.lang.eval import evaluate
from mathfp.lang.parser import Parser
from mathfp.lang.runtime import Environment
from mathfp.lang.token import Scanner


class Session:
    """Governs a mathfp session, with control over the environment bindings accumulate in."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.env = Environment()
        self.results = []  # values of every successful run, most recent last
        self.line_num = 0

        if self.cmd_line:
            self.error_handler.fatal = False

        elif path == Session.SH_FILE:
            raise GenericException("'{}' is a reserved filename", Session.SH_FILE)

    @staticmethod
    def tokenize(source):
        return Scanner(source).scan()

    @staticmethod
    def parse(source):
        return Parser(Session.tokenize(source)).parse()

    def run(self, source):
        """Scans, parses and evaluates source against this session's environment. Returns the resulting value and keeps
        it in self.results. Raises ScannerErrors, ParserErrors or EvalError; bindings made before an EvalError stay.
        """
        self.line_num += 1
        self.error_handler.register_line(self.path, source, self.line_num if self.cmd_line else None)

        value = evaluate(Session.parse(source), self.env)
        self.results.append(value)

        self.error_handler.remove_line(self.path)  # error was not raised
        return value

    def run_file(self):
        """Reads and runs this session's file."""
        try:
            with open(self.path, "r") as file:
                source = file.read()
        except OSError:
            raise GenericException("'{}' could not be opened", self.path, diagnosis=False)

        return self.run(source)

    def pop(self):
        """Removes and returns the most recent result."""
        return self.results.pop()
