"""Naming context: the free-variable environment used to turn de Bruijn indices back into readable names.

A Context is only ever consulted by LambdaTerm.show. Evaluation works purely on indices and never sees one.
"""


class NameBind:
    """Binding marker for a context entry. Untyped terms only ever bind names, so this carries no data."""

    def __eq__(self, other):
        return isinstance(other, NameBind)

    def __hash__(self):
        return hash(NameBind)

    def __repr__(self):
        return "NameBind()"


class Context:
    """Ordered, immutable sequence of (name, binding) pairs, outermost binder first.

    Indices count from the innermost binder outwards, while the sequence grows at its end when pick_fresh_name is
    called. So the newest name lives at the back and index 0 maps to the last entry.
    """

    def __init__(self, names=()):
        self.bindings = tuple((name, NameBind()) for name in names)

    @classmethod
    def _from_bindings(cls, bindings):
        ctx = cls()
        ctx.bindings = bindings
        return ctx

    @property
    def names(self):
        return [name for name, __ in self.bindings]

    def index_to_name(self, n):
        """Returns the name bound at de Bruijn index n. Raises IndexError if n is not in scope."""
        if not 0 <= n < len(self):
            raise IndexError(f"index {n} out of range for context of length {len(self)}")
        return self.bindings[len(self) - 1 - n][0]

    def is_name_bound(self, name):
        return any(name == bound for bound, __ in self.bindings)

    def pick_fresh_name(self, name):
        """Returns (new context, fresh name). The fresh name is name with as many "'" appended as needed to avoid
        every name already in this context. self is left untouched.
        """
        while self.is_name_bound(name):
            name += "'"
        return Context._from_bindings(self.bindings + ((name, NameBind()),)), name

    def __len__(self):
        return len(self.bindings)

    def __eq__(self, other):
        return isinstance(other, Context) and self.bindings == other.bindings

    def __hash__(self):
        return hash(self.bindings)

    def __repr__(self):
        return f"Context({self.names!r})"
