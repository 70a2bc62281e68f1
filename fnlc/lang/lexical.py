"""fnlc language, a shallow wrapper around pure lambda calculus. Note that this module does not provide parsing (see
grammar/pure.py), only the objects a parsed program is made of.

A program can be loosely defined as follows:

```
<definition> ::= <var> ":=" <λ-term> ";"        ; visible to every later definition and to main
<main>       ::= "main" ":=" <λ-term> [";"]     ; the term that is evaluated
<file>       ::= <definition>* <main>

<comment>    ::= "#" <char>*                    ; up to end of line
```

Definitions may be redefined; the later definition shadows the earlier one from then on. Recursive definitions are
not supported: a definition only sees the definitions before it.
"""

from fnlc.lang.error import UnboundReferenceError
from fnlc.pure.lexical import Abstraction, Application


class Definition:
    """Definitions represent binding statements in fnlc: <NAME> := <λ-term>."""

    def __init__(self, name, term):
        self.name = name
        self.term = term

    def __repr__(self):
        return f"Definition(name='{self.name}', term={repr(self.term)})"

    def __str__(self):
        # no closing ";" here: File adds it, the shell does not need it
        return f"{self.name} := {self.term.expr}"

    def __eq__(self, other):
        return isinstance(other, Definition) and (self.name, self.term) == (other.name, other.term)

    def __hash__(self):
        return hash((self.name, self.term))


class File:
    """A program: named definitions, in source order, and a main term. path is only used for error messages."""

    def __init__(self, definitions, main, path=None):
        self.definitions = list(definitions)
        self.main = main
        self.path = path

    def unbound(self):
        """Returns (scope, name) for every variable that is neither defined before its use nor bound by an enclosing
        abstraction. scope is the name of the definition the variable occurs in, or 'main'.
        """
        defined = set()
        unbound = []
        for definition in self.definitions:
            unbound += [(definition.name, name) for name in sorted(definition.term.free_vars - defined)]
            defined.add(definition.name)

        unbound += [("main", name) for name in sorted(self.main.free_vars - defined)]
        return unbound

    def unroll(self, strict=False):
        """Unrolls the file into a single λ-term, with main abstracted over each definition in reverse, i.e.

        ```
        foo := term1;
        bar := term2;
        main := term3;
        ```

        unrolls into a term equal to `(fn foo => (fn bar => term3) term2) term1`. If strict, raises an
        UnboundReferenceError if the file uses a variable it never binds.
        """
        if strict:
            unbound = self.unbound()
            if unbound:
                raise UnboundReferenceError(unbound, self.path)

        term = self.main
        for definition in reversed(self.definitions):
            term = Application(Abstraction(definition.name, term), definition.term)
        return term

    def __repr__(self):
        return f"File(definitions={self.definitions!r}, main={self.main!r})"

    def __str__(self):
        lines = [f"{definition};" for definition in self.definitions]
        return "\n".join(lines + [f"main := {self.main.expr};"])

    def __eq__(self, other):
        return isinstance(other, File) and (self.definitions, self.main) == (other.definitions, other.main)
