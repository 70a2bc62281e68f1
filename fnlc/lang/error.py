"""Error handling for the fnlc language. Only GenericExceptions should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import logging
import sys

from termcolor import colored

logger = logging.getLogger(__name__)


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a fnlc error/warning. exprs are the snippets
    substituted into msg; exprs[0] should be the offending expr, and start/end index the offending span within it.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        self.path = None
        self.line_num = None
        super().__init__(self.msg)

    @property
    def location(self):
        """'path:line:col: ' prefix for error messages, or '' if the origin of the error is unknown."""
        if self.line_num is None:
            return f"{self.path}: " if self.path else ""
        return f"{self.path or '<string>'}:{self.line_num}:{self.start + 1}: "


class LambdaSyntaxError(GenericException, SyntaxError):
    """Malformed source text. line is the offending source line, line_num and column are 1-based."""

    def __init__(self, msg, line, line_num, column, path=None, length=1):
        msg = msg.replace("{", "{{").replace("}", "}}")
        super().__init__(msg, line, start=column - 1, end=column - 1 + max(length, 1))
        self.path = path
        self.line_num = line_num

        # SyntaxError attributes, for callers that treat this like a Python syntax error
        self.filename = path
        self.lineno = line_num
        self.offset = column
        self.text = line


class UnboundReferenceError(GenericException):
    """A variable is bound neither by a definition nor by an enclosing abstraction (strict mode only)."""

    def __init__(self, unbound, path=None):
        self.unbound = list(unbound)
        names = ", ".join(f"'{name}' in {scope}" for scope, name in self.unbound)
        super().__init__("unbound variable(s): {}", names, diagnosis=False)
        self.path = path


class StepLimitExceeded(GenericException):
    """Reduction took more beta-contractions than the caller allowed."""

    def __init__(self, max_steps):
        self.max_steps = max_steps
        super().__init__("no beta-normal form found within {} reduction steps", str(max_steps), diagnosis=False)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom fnlc errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"
    STEP = "cyan"

    def __init__(self, fatal=True, verbose=False):
        self.fatal = fatal
        self.verbose = verbose

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def register_step(self, kind, expr):
        """Reports a single reduction step. Printed only in verbose mode."""
        if self.verbose:
            print(colored(kind, ErrorHandler.STEP, attrs=["bold"]), expr)
        else:
            logger.debug("%s %s", kind, expr)

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)

        error_msg = colored(error.location, attrs=["bold"])
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Prints error, a GenericException, with its location and a diagnosis of the offending expr. Exits if this
        handler is fatal.
        """
        error_msg = colored(error.location, attrs=["bold"]) if error.location else ""

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("beta normal form might exist, but maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            logger.debug("internal error", exc_info=(exc_type, exc_val, exc_tb))
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
