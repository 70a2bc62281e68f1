"""Guesses which familiar value a normal form encodes. Everything here is decided by alpha-equivalence against a
fixed catalog of encodings; nothing is reduced.
"""

from fnlc.lang.boolean import boolean
from fnlc.lang.numerical import number


def catalog(term):
    """Yields (tag, description) for every catalog entry term is alpha-equivalent to, numerals first."""
    num = number(term)
    if num is not None:
        yield f"numeral({num})", f"Church numeral {num}"

    value = boolean(term)
    if value is not None:
        yield str(value).lower(), f"boolean {str(value).lower()}"


def classify(term):
    """Returns the tag of the first catalog entry term matches ('numeral(n)', 'true' or 'false'), or None."""
    return next((tag for tag, __ in catalog(term)), None)


def guesses(term):
    """Returns descriptions of every catalog entry term matches. Church numeral 0 is also the boolean false."""
    return [description for __, description in catalog(term)]
