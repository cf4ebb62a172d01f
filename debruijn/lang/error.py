"""Error handling for the de Bruijn interpreter. Library code only ever raises GenericExceptions (or subclasses of it):
if another type of error makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw an interpreter error/warning. Offending
    expressions are passed separately in exprs and are bolded when formatted into msg.
    """

    def __init__(self, msg, exprs=None, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        self.plain_msg = msg.format(*exprs)
        self.msg = msg.format(*(colored(str(expr), attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.exprs = list(exprs)
        self.internal = internal

        super().__init__(self.plain_msg)


class MalformedTermError(GenericException):
    """A Variable was displayed under a context whose length disagrees with the one recorded in the Variable. This is
    a bug in whatever constructed the term, never a runtime condition.
    """

    def __init__(self, variable, actual, reason=None):
        self.variable = variable
        self.expected = variable.context_length
        self.actual = actual

        if reason is None:
            reason = "context length is {} but variable has {}".format(actual, variable.context_length)
        super().__init__("bad index in '{}': " + reason, repr(variable))


class NoRuleApplies(GenericException):
    """Raised by eval1 when no rule applies: the term is a value or is stuck. Signals termination, not failure.

    term is the innermost subterm where no rule applies. For a stuck application that is the stuck head or argument
    the congruence rules descended into, not the application eval1 was called on.
    """

    def __init__(self, term):
        self.term = term
        super().__init__("no rule applies: '{}'", repr(term))


class StepLimitExceeded(GenericException):
    """Raised when a reducer gives up on a term that did not reach normal form within its step limit."""

    def __init__(self, term, steps):
        self.term = term
        self.steps = steps
        super().__init__("'{}' did not reach a normal form within {} steps", (repr(term), str(steps)))


class ErrorHandler:
    """Context manager that turns exceptions into readable error messages, and collects warnings and reduction steps
    along the way.
    """
    ERROR = "red"
    WARNING = "magenta"
    TRACE_LENGTH = 5  # number of trailing reduction steps shown with an error

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.trace = []
        self.warnings = []

    def register_step(self, rule, expr):
        """Registers a single reduction step (rule name, resulting expr) in the trace."""
        self.trace.append((rule, expr))

    def clear(self):
        """Forgets any registered steps and warnings."""
        self.trace = []
        self.warnings = []

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args. Args are the same as GenericException's."""
        warning = GenericException(*args, **kwargs)
        self.warnings.append(warning)

        print(colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + warning.msg)

    def throw(self, error):
        """Prints error, preceded by the tail of the reduction trace (if any). error must be a GenericException. Exits
        if self.fatal.
        """
        error_msg = ""
        if self.trace:
            error_msg += "Trace (most recent step last):\n"
            for rule, expr in self.trace[-ErrorHandler.TRACE_LENGTH:]:
                error_msg += f"  {rule} {expr}\n"

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if self.fatal:
            sys.exit(1)
        self.trace = []  # if error occurred, reset trace (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("normal form might exist, but maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
