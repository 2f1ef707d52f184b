"""Session control for arrowlang. Runs source text, either from a file, a command-line string or the interactive shell,
against a single root Env, so that whatever an earlier statement assigns is visible to every later one.
"""

from arrowlang.core.combinators import parse_all
from arrowlang.core.env import Env
from arrowlang.core.evaluator import evaluate_each, interpret
from arrowlang.core.grammar import name, parse_literal, parse_statements
from arrowlang.core.lexical import RESERVED_WORDS
from arrowlang.lang.error import GenericException, ParseError


class Session:
    """Governs an arrowlang session: one Env, statements waiting to run and the Values of those that already ran."""
    SH_FILE = "<in>"        # command-line interpreter filename
    CMD_FILE = "<command>"  # filename used for source given as a string

    def __init__(self, error_handler, path, cmd_line, source=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.env = Env.new_root()
        self.to_exec = []  # list of (line num, Expr) to evaluate, in order
        self.results = []  # list of Values of evaluated Exprs

        if self.cmd_line:
            self.error_handler.fatal = False

        if path == Session.SH_FILE and not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

        if source is None and path not in (Session.SH_FILE, Session.CMD_FILE):
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

        if source is not None:
            self.add(source)

    @staticmethod
    def preprocess_line(line):
        """Preprocesses a line from a file or command-line. Returns updated value of line and whether the next line
        continues it, which is the case while a parenthesis or string literal is left open.
        """
        line = line.rstrip()

        depth = 0
        in_string = False
        escaped = False
        for char in line:
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
            elif char == '"':
                in_string = True
            elif char == "(":
                depth += 1
            elif char == ")":
                depth -= 1

        return line, in_string or depth > 0

    def declare(self, declaration):
        """Declares a variable in the root scope from a 'NAME=LITERAL' string, as given with --declare."""
        if "=" not in declaration:
            raise GenericException("'{}' should be NAME=LITERAL", declaration)

        var, literal = declaration.split("=", 1)
        var = var.strip()
        if var in RESERVED_WORDS:
            raise GenericException("'{}' is a reserved word and cannot be declared", var, end=len(var))

        try:
            parse_all(name, var)
            expr = parse_literal(literal)
        except ParseError:
            raise GenericException("'{}' should be NAME=LITERAL", declaration)

        if var in self.env:
            self.error_handler.warn("'{}' is declared more than once, last declaration wins", var, diagnosis=False)
        self.env.declare(var, interpret(expr, self.env))

    def add(self, source, line_num=1):
        """Parses source and queues its statements. Evaluation is delayed until run is called."""
        first_line = source.lstrip().split("\n", 1)[0]
        self.error_handler.register_line(self.path, first_line, line_num)  # in case error is raised

        try:
            statements = parse_statements(source)
        except ParseError as error:
            error_line = line_num + source.count("\n", 0, error.position)
            self.error_handler.register_line(self.path, self._line_at(source, error.position), error_line)
            raise

        for offset, expr in statements:
            self.to_exec.append((line_num + source.count("\n", 0, offset), expr))

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates queued statements in order. The first error is raised and every statement after it is dropped,
        but the assignments made before it stay in self.env.
        """
        try:
            for value in evaluate_each(self._registered(), self.env):
                self.results.append(value)
                self.error_handler.remove_line(self.path)
        finally:
            self.to_exec = []

    def _registered(self):
        """Yields queued Exprs in order, registering the line of each one just before it is evaluated."""
        for line_num, expr in self.to_exec:
            self.error_handler.register_line(self.path, str(expr), line_num)
            yield expr

    def pop(self):
        """Display text of the last result. Clears all results."""
        result = str(self.results[-1])
        self.results = []
        return result

    @staticmethod
    def _line_at(source, position):
        start = source.rfind("\n", 0, position) + 1
        end = source.find("\n", position)
        return source[start:end if end != -1 else len(source)]
