"""Untyped lambda calculus terms in the locally-closed de Bruijn representation, along with the index arithmetic,
call-by-value evaluation and printing that operate on them.

Formally, terms are

```
<term> ::= Variable(index, context_length)  ; index counts binders outward from the innermost (0 = innermost)
                                           ; context_length is the number of binders in scope at this node,
                                           ; only checked when displaying
         | Abstraction(name, <term>)       ; name is cosmetic, used only for display
         | Application(<term>, <term>)
```

Terms are never mutated after construction: every operation below builds a new tree, sharing untouched subtrees
with its input.

Because variables are positions rather than names, substitution never has to rename anything. The price is that
indices have to be renumbered (shifted) every time a term moves under or out from under a binder, which is the
whole job of shift/subst/subst_top.

Source: Pierce, Types and Programming Languages, chapters 6 and 7.
"""

from abc import ABC, abstractmethod
from copy import deepcopy
from dataclasses import dataclass

from debruijn.lang.error import MalformedTermError, NoRuleApplies


class LambdaTerm(ABC):
    """Superclass of all λ-terms. Concrete terms are frozen dataclasses, so == and hash are structural."""

    def __call__(self, argument):
        """Apply this term to argument: t(s) == Application(t, s)."""
        return Application(self, argument)

    # --- index arithmetic ---

    @abstractmethod
    def _shift(self, d, cutoff):
        """Walk for shift. Variables with index >= cutoff are free relative to the shift."""

    @abstractmethod
    def _subst(self, j, cutoff, s):
        """Walk for subst. cutoff is the number of binders crossed so far."""

    def shift(self, d):
        """Returns self with every free variable index shifted by d (d may be negative). Every context_length is
        shifted by d as well, bound or not, since it tracks the total enclosing scope.
        """
        return self._shift(d, 0)

    def subst(self, j, s):
        """Returns self with every free occurrence of variable j replaced by s. Under c binders, j is seen as j + c
        and s is shifted up by c so that its own free variables still point at the same binders.
        """
        return self._subst(j, 0, s)

    def subst_top(self, s):
        """Contracts (λ. self) s. s is shifted up to account for the binder being removed, substituted for 0, and the
        result is shifted back down by one level. The order of these three steps matters.
        """
        return self.subst(0, s.shift(1)).shift(-1)

    # --- evaluation ---

    def is_value(self):
        """Only abstractions are values."""
        return False

    def eval1(self):
        """Performs a single call-by-value reduction step. Raises NoRuleApplies if self is a normal form (a value or a
        stuck term).
        """
        raise NoRuleApplies(self)

    def eval(self):
        """Reduces self until no rule applies and returns the resulting term, which is either a value or stuck. Does
        not terminate if self has no normal form.
        """
        term = self
        while True:
            try:
                term = term.eval1()
            except NoRuleApplies:
                return term

    # --- display ---

    @abstractmethod
    def show(self, context):
        """Returns self as a parenthesized string, using context to name free variables. Raises MalformedTermError if
        a variable's context_length does not match the context it is displayed in.
        """

    @abstractmethod
    def _well_formed(self, size):
        """Walk for is_well_formed. size is len(context) + number of binders crossed."""

    def is_well_formed(self, context):
        """Whether or not self can be shown under context. Unlike show, never raises."""
        return self._well_formed(len(context))

    # --- equality ---

    @abstractmethod
    def alpha_equals(self, other):
        """Whether or not self and other are equal up to binder names."""

    def clone(self):
        """Deep copy of self. Terms are immutable, so this is only needed when identity matters."""
        return deepcopy(self)


@dataclass(frozen=True)
class Variable(LambdaTerm):
    """Variable reference by de Bruijn index.

    Example (under an empty context):
        λx. x      =>  Abstraction("x", Variable(0, 1))
        λx. λy. x  =>  Abstraction("x", Abstraction("y", Variable(1, 2)))
    """
    index: int
    context_length: int

    def __post_init__(self):
        if self.index < 0:
            raise ValueError(f"variable index must be non-negative, got {self.index}")

    def _shift(self, d, cutoff):
        index = self.index + d if self.index >= cutoff else self.index
        return Variable(index, self.context_length + d)

    def _subst(self, j, cutoff, s):
        if self.index == j + cutoff:
            return s.shift(cutoff)
        return self

    def show(self, context):
        if len(context) != self.context_length:
            raise MalformedTermError(self, len(context))

        try:
            return context.index_to_name(self.index)
        except IndexError:
            raise MalformedTermError(self, len(context), f"index {self.index} is not bound in context")

    def _well_formed(self, size):
        return self.context_length == size and self.index < size

    def alpha_equals(self, other):
        return isinstance(other, Variable) and self.index == other.index


@dataclass(frozen=True)
class Abstraction(LambdaTerm):
    """λname. body. The body refers to this binder as Variable(0, ...)."""
    name: str
    body: LambdaTerm

    def _shift(self, d, cutoff):
        return Abstraction(self.name, self.body._shift(d, cutoff + 1))

    def _subst(self, j, cutoff, s):
        return Abstraction(self.name, self.body._subst(j, cutoff + 1, s))

    def is_value(self):
        return True

    def show(self, context):
        context, name = context.pick_fresh_name(self.name)
        return f"(λ{name}. {self.body.show(context)})"

    def _well_formed(self, size):
        return self.body._well_formed(size + 1)

    def alpha_equals(self, other):
        return isinstance(other, Abstraction) and self.body.alpha_equals(other.body)


@dataclass(frozen=True)
class Application(LambdaTerm):
    """function argument."""
    function: LambdaTerm
    argument: LambdaTerm

    def _shift(self, d, cutoff):
        return Application(self.function._shift(d, cutoff), self.argument._shift(d, cutoff))

    def _subst(self, j, cutoff, s):
        return Application(self.function._subst(j, cutoff, s), self.argument._subst(j, cutoff, s))

    def eval1(self):
        """Call-by-value: the argument must be a value before the beta rule fires, and the function is reduced
        before the argument.
        """
        if isinstance(self.function, Abstraction) and self.argument.is_value():
            return self.function.body.subst_top(self.argument)
        elif self.function.is_value():
            return Application(self.function, self.argument.eval1())
        return Application(self.function.eval1(), self.argument)

    def show(self, context):
        return f"({self.function.show(context)} {self.argument.show(context)})"

    def _well_formed(self, size):
        return self.function._well_formed(size) and self.argument._well_formed(size)

    def alpha_equals(self, other):
        if not isinstance(other, Application):
            return False
        return self.function.alpha_equals(other.function) and self.argument.alpha_equals(other.argument)
