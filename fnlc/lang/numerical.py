"""Natural numbers encoded as Church numerals. Note that arithmetic is not implemented here: numerals are plain
λ-terms, so arithmetic is written in fnlc itself and only recognized here after reduction.

Source: https://en.wikipedia.org/wiki/Church_encoding#Calculation_with_Church_numerals
"""

from fnlc.grammar.pure import parse_term
from fnlc.lang.error import GenericException
from fnlc.pure.lexical import Abstraction, Application, Variable
from fnlc.pure.reduction import normalize

SUCC = parse_term("fn n => fn f => fn x => f (n f x)")


def cnumber(num):
    """Returns Church numeral num (cnum = Church numeral): fn f => fn x => f (f (... (f x)))."""
    if isinstance(num, bool) or not isinstance(num, int) or num < 0:
        raise GenericException("expected natural number, got '{}'", str(num), internal=True)

    body = Variable("x")
    for __ in range(num):
        body = Application(Variable("f"), body)
    return Abstraction("f", Abstraction("x", body))


def number(cnum):
    """Returns num if cnum is alpha-equivalent to Church numeral num, else None."""
    if not isinstance(cnum, Abstraction) or not isinstance(cnum.body, Abstraction):
        return None

    # read the candidate num off the spine f (f (... x)), then let alpha_equals decide
    num = 0
    nth_body = cnum.body.body
    while isinstance(nth_body, Application):
        nth_body = nth_body.argument
        num += 1

    return num if cnum.alpha_equals(cnumber(num)) else None


def succ(cnum):
    """Returns the normal form of SUCC cnum."""
    return normalize(Application(SUCC, cnum))
