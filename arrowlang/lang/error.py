"""Error handling for arrowlang. Only GenericExceptions should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

There are two disjoint families of language errors:
- ParseError: raised while turning source text into Exprs. Carries the char offset of the failure and a description
  of what was expected there.
- EvaluationError: raised while reducing an Expr against an Env. Carries the offending Expr, if known.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw an arrowlang error/warning. Every slot in msg
    is filled with a bolded snippet from exprs.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException or warning."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(str(expr), attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = str(exprs[0])  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class ParseError(GenericException):
    """Source text could not be parsed. position is the char offset of the failure in source."""

    def __init__(self, source, position, expected):
        self.source = source
        self.position = position
        self.expected = expected

        found = source[position:position + 10]
        found = repr(found) if found else "end of input"
        super().__init__(f"expected {expected} at offset {position}, found " + "{1}", (source, found),
                         start=position, end=position + 1)


class EvaluationError(GenericException):
    """Superclass of every error raised while evaluating an Expr. expr_node is the Expr that failed, if known."""

    def __init__(self, msg, exprs=None, expr_node=None):
        self.expr_node = expr_node
        if exprs is None and expr_node is not None:
            exprs = str(expr_node)
        super().__init__(msg, exprs, diagnosis=False)

    def attach(self, expr_node):
        """Attaches expr_node to this error unless a more specific node is already attached. Returns self."""
        if self.expr_node is None:
            self.expr_node = expr_node
            self.expr = str(expr_node)
        return self


class UndeclaredVariable(EvaluationError):

    def __init__(self, name, expr_node=None):
        self.name = name
        super().__init__("variable '{}' has not been declared", name, expr_node)


class ReservedWord(EvaluationError):

    def __init__(self, name, expr_node=None):
        self.name = name
        super().__init__("'{}' is a reserved word and cannot be declared", name, expr_node)


class InvalidBinaryOperation(EvaluationError):

    def __init__(self, left, right, operator, expr_node=None):
        self.left = left
        self.right = right
        self.operator = operator
        msg = "'{}' is not defined for " + f"{left.kind} and {right.kind}"
        super().__init__(msg, operator.symbol, expr_node)


class InvalidUnaryOperation(EvaluationError):

    def __init__(self, value, operator, expr_node=None):
        self.value = value
        self.operator = operator
        super().__init__("'{}' is not defined for " + value.kind, operator.symbol, expr_node)


class NoValueOperation(EvaluationError):

    def __init__(self, expr_node=None):
        super().__init__("operation attempted on no value '()'", "()", expr_node)


class NotCallable(EvaluationError):

    def __init__(self, value, expr_node=None):
        self.value = value
        super().__init__("{} value '{}' is not callable", (value.kind, str(value)), expr_node)


class NestingTooDeep(EvaluationError):

    def __init__(self):
        super().__init__("expression nested too deeply to evaluate, maximum recursion depth exceeded")


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom arrowlang errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        # only the line containing error.start is shown
        line_start = error.expr.rfind("\n", 0, error.start) + 1
        line_end = error.expr.find("\n", error.start)
        if line_end == -1:
            line_end = len(error.expr)

        line = error.expr[line_start:line_end]
        start = error.start - line_start
        end = min(max(error.end - line_start, start + 1), len(line) + 1)

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], color, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)

        location = ""
        for file, (line, line_num) in self.traceback.items():
            location = f"{file}:{line_num}: " if line_num else f"{file}: "

        error_msg = colored(location, attrs=["bold"])
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg

        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # assumes dict is insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        if isinstance(error, EvaluationError) and error.expr_node is not None:
            error_msg += "\n  in: " + colored(str(error.expr_node), attrs=["bold"])
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}  # reset (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("expression nested too deeply, maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
