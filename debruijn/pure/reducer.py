"""Step-bounded call-by-value reduction. LambdaTerm.eval runs forever on a divergent term; CallByValueReducer drives
the same eval1 relation, but records each step and gives up after a fixed number of them.
"""

from debruijn.lang.error import NoRuleApplies, StepLimitExceeded


class CallByValueReducer:
    """Implements bounded call-by-value reduction of a term, keeping a trace of every β step."""
    STEP_LIMIT = 1000

    def __init__(self, term, context=None, step_limit=None):
        self.original_term = term
        self.term = term
        self.context = context  # only used to display trace entries
        self.step_limit = step_limit if step_limit is not None else CallByValueReducer.STEP_LIMIT

        self.steps = []
        self.reduced = False

    def reduction_chain(self):
        """Yields self.term and then every term reached by a single eval1 step from the previous one, ending at a
        normal form. Infinite for divergent terms.
        """
        term = self.term
        while True:
            yield term
            try:
                term = term.eval1()
            except NoRuleApplies:
                return

    def reduce(self, error_handler=None):
        """Reduces self.term until no rule applies or step_limit steps have been taken, and returns the final term.
        When the limit is hit on a term that is not a value, warns through error_handler if there is one, else raises
        StepLimitExceeded. No step beyond the limit is computed, so a stuck term reached in exactly step_limit steps
        is reported as well.

        Each call starts a fresh self.steps and picks up from wherever the previous call stopped.
        """
        self.steps = []
        self.reduced = False

        while len(self.steps) < self.step_limit:
            try:
                term = self.term.eval1()
            except NoRuleApplies:
                self.reduced = True
                return self.term

            self.term = term
            self.steps.append(("β", term))
            if error_handler is not None:
                error_handler.register_step("β", self._display(term))

        if not self.term.is_value():
            if error_handler is None:
                raise StepLimitExceeded(self.original_term, self.step_limit)
            error_handler.warn("'{}' might not have a normal form, stopped after {} steps",
                               (self._display(self.original_term), str(self.step_limit)))

        self.reduced = True
        return self.term

    @property
    def is_value(self):
        return self.term.is_value()

    @property
    def is_stuck(self):
        """Whether or not the term was reduced to a normal form that is not a value."""
        if not self.reduced or self.term.is_value():
            return False
        try:
            self.term.eval1()
        except NoRuleApplies:
            return True
        return False

    def _display(self, term):
        if self.context is None:
            return repr(term)
        return term.show(self.context)

    def __repr__(self):
        return f"CallByValueReducer({self.term!r}, steps={len(self.steps)})"
