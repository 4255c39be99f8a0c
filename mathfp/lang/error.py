"""Error handling for the mathfp language. Every stage raises a GenericException subclass: scanning and parsing collect
their errors and raise them together as an ErrorList, evaluation raises the first EvalError it meets. If another type of
error makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw a mathfp error. msg is a format string that is filled
    in with exprs; exprs[0] should be the offending expr that caused the error.
    """

    def __init__(self, msg, exprs=None, line=None, column=None, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*exprs)
        self.expr = exprs[0]

        self.line = line  # position of the offending lexeme, if known
        self.column = column
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(str(self))

    @property
    def located(self):
        return self.line is not None and self.column is not None

    def __str__(self):
        if self.located:
            return f"line {self.line}, column {self.column}: {self.msg}"
        return self.msg


class ScanError(GenericException):
    """Lexical error: unexpected character, malformed symbol, unterminated string or unparsable number."""


class ParseError(GenericException):
    """Syntactic error found while parsing a single statement."""


class EvalError(GenericException):
    """Runtime error. Evaluation stops at the first one."""


class ConstantError(EvalError):
    """Attempt to rebind a name that was bound as a constant."""

    def __init__(self, name):
        super().__init__("Cannot modify constant '{}'", name)


class ErrorList(GenericException):
    """All errors collected by one stage, reported together."""
    stage = "Generic"

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("{}", self.report(self.errors), diagnosis=False)

    @classmethod
    def report(cls, errors):
        return f"{cls.stage} errors:\n" + "\n".join(str(error) for error in errors)

    def __len__(self):
        return len(self.errors)

    def __iter__(self):
        return iter(self.errors)


class ScannerErrors(ErrorList):
    stage = "Scanner"


class ParserErrors(ErrorList):
    stage = "Parser"


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report mathfp errors instead."""
    ERROR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after a successful Session run."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error, source):
        """Returns the source line error points at, with a caret under the offending column."""
        lines = source.splitlines()
        if not error.located or not 0 < error.line <= len(lines):
            return None

        line = lines[error.line - 1]
        start = error.column - 1
        end = start + max(len(error.expr), 1)

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (source, line_num) representing origination of error.
        """
        error_msg = ""
        sources = []
        for file, (source, line_num) in self.traceback.items():  # assumes dict is insertion-ordered
            if source:
                error_msg += f"  File '{file}'" + (f", line {line_num}" if line_num else "") + ":\n"
                sources.append(source)

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + str(error)
        print(error_msg)

        if sources and not error.internal:
            for sub_error in error.errors if isinstance(error, ErrorList) else [error]:
                diagnosis = ErrorHandler.diagnose(sub_error, sources[-1]) if sub_error.diagnosis else None
                if diagnosis:
                    print(diagnosis)

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}  # error is done, reset traceback

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("expression is nested too deeply, maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.fatal = True
            self.throw(GenericException("unknown error: '{}: {}'", (exc_type.__name__, str(exc_val)), internal=True))

        return not do_exit
