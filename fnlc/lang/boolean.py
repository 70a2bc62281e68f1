"""Booleans encoded as Church booleans: a boolean selects one of two arguments."""

from fnlc.grammar.pure import parse_term
from fnlc.pure.lexical import Application
from fnlc.pure.reduction import normalize

TRUE = parse_term("fn t => fn e => t")
FALSE = parse_term("fn t => fn e => e")
AND = parse_term("fn a => fn b => a b (fn t => fn e => e)")


def cboolean(value):
    """Returns the Church boolean for value."""
    return TRUE if value else FALSE


def boolean(term):
    """Returns True/False if term is alpha-equivalent to TRUE/FALSE, else None."""
    if term.alpha_equals(TRUE):
        return True
    if term.alpha_equals(FALSE):
        return False
    return None


def conjoin(left, right):
    """Returns the normal form of AND left right."""
    return normalize(Application(Application(AND, left), right))
