"""Session control for the fnlc language. Runs programs, either in command line mode (one statement at a time) or
file interpretation mode.
"""

import logging

from fnlc.grammar.pure import parse_file, parse_statement
from fnlc.lang.error import GenericException, StepLimitExceeded
from fnlc.lang.lexical import Definition, File
from fnlc.pure.reduction import NormalOrderReducer

logger = logging.getLogger(__name__)


class Session:
    """Governs a fnlc session: the definitions in scope, the term to evaluate next and the results so far."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path=SH_FILE, max_steps=None, strict=False):
        self.error_handler = error_handler

        self.path = path            # used for error messages
        self.max_steps = max_steps  # bound on beta-contractions per run (None: unbounded)
        self.strict = strict        # whether or not unbound variables are an error

        self.definitions = []  # Definitions in scope, in order
        self.main = None       # λ-term to evaluate on the next run
        self.results = []      # normal forms, in order of evaluation

        if path != Session.SH_FILE:
            try:
                with open(path, "r", encoding="utf-8") as file:
                    text = file.read()
            except (OSError, UnicodeDecodeError):
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            program = parse_file(text, path)
            self.definitions = program.definitions
            self.main = program.main
            logger.debug("loaded %d definition(s) from %s", len(self.definitions), path)

    @staticmethod
    def preprocess_line(line, add_to_prev=""):
        """Preprocesses a line from the command-line: strips comments and trailing whitespace and appends it to
        add_to_prev, the unfinished previous line(s). Returns the line so far and whether or not it continues on the
        next line (it does while parentheses are unbalanced).
        """
        if "#" in line:
            line = line[:line.index("#")]  # get rid of comments

        line = (add_to_prev + " " + line if add_to_prev else line).strip()
        return line, line.count("(") > line.count(")")

    def add(self, line):
        """Adds a statement to the current session: a definition is put in scope, anything else becomes the term of
        the next run.
        """
        stmt = parse_statement(line, self.path)
        if isinstance(stmt, Definition):
            self.definitions.append(stmt)
        else:
            self.main = stmt

    @property
    def program(self):
        """The current session as a File."""
        if self.main is None:
            raise GenericException("nothing to evaluate: no main term", diagnosis=False)
        return File(self.definitions, self.main, self.path)

    def run(self):
        """Unrolls and beta-reduces the current program and adds the normal form to self.results. In verbose mode,
        every reduction step is reported to the error handler. Warns instead if the step bound is hit.
        """
        program = self.program
        self.main = None

        reducer = NormalOrderReducer(program.unroll(self.strict), self.max_steps)
        try:
            if self.error_handler.verbose:
                self.error_handler.register_step("=", reducer.term.expr)
                for term in reducer.steps():
                    self.error_handler.register_step("β", term.expr)
            else:
                reducer.beta_reduce()
        except StepLimitExceeded as error:
            self.error_handler.warn("'{}' has no beta-normal form within {} steps", [self.path, str(error.max_steps)],
                                    diagnosis=False)
            return None

        logger.debug("%s: reduced in %d step(s)", self.path, reducer.steps_taken)
        self.results.append(reducer.term)
        return reducer.term

    def pop(self):
        """Removes and returns the latest result."""
        return self.results.pop()
