"""Natural numbers encoded as Church numerals, built directly as de Bruijn terms. The numeral n is λf.λx. f (f (... x))
with n applications of f, i.e. λ.λ. 1 (1 (... 0)).

Source: https://en.wikipedia.org/wiki/Church_encoding#Calculation_with_Church_numerals
"""

from debruijn.lang.error import GenericException
from debruijn.pure.term import Abstraction, Application, Variable


def cnumber(num, context_length=0):
    """Returns the Church numeral for num (cnum = Church numeral). context_length is the number of binders the numeral
    will sit under, so that its variables carry the right context lengths.
    """
    try:
        assert not isinstance(num, (float, bool))
        num = int(num)
        assert num >= 0
    except (AssertionError, TypeError, ValueError):
        raise GenericException("expected natural number, got '{}'", str(num))

    size = context_length + 2
    body = Variable(0, size)
    for __ in range(num):
        body = Application(Variable(1, size), body)

    return Abstraction("f", Abstraction("x", body))


def number(cnum):
    """Returns the natural number that cnum encodes. If cnum isn't a Church numeral, returns None. Binder names and
    context lengths are ignored.
    """
    if not isinstance(cnum, Abstraction) or not isinstance(cnum.body, Abstraction):
        return None

    num = 0
    nth_body = cnum.body.body
    while isinstance(nth_body, Application):
        function = nth_body.function
        if not isinstance(function, Variable) or function.index != 1:
            return None
        nth_body = nth_body.argument
        num += 1

    if isinstance(nth_body, Variable) and nth_body.index == 0:
        return num
    return None
