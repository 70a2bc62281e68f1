"""Pure lambda calculus abstract syntax tree: terms, printing, free variables, substitution and alpha-equivalence.

The `pure` directory contains the pure lambda calculus- not sufficient for the fnlc language, which adds named
definitions and a main term (see lang/lexical.py).

Formally, pure lambda calculus can be defined as

```
<λ-term> ::= <variable>                  ; "variable"
                                         ; - any run of characters other than whitespace, "(", ")", "#", ";", ":", "="
           | "fn" <variable> "=>" <λ-term>  ; "abstraction"
                                         ; - abstraction bodies are greedy: fn x => x y = fn x => (x y)
           | <λ-term> <λ-term>           ; "application"
                                         ; - associating by left: a b c d = (((a b) c) d)
```

Terms are immutable once built. Every operation that changes a term returns a new one, sharing any subtree it did not
need to touch, so a subtree may have several parents but a term never contains itself.

Sources: https://plato.stanford.edu/entries/lambda-calculus/#Com,
         http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

from abc import ABC, abstractmethod

from fnlc.pure.fresh import FreshNames


class LambdaTerm(ABC):
    """Represents a valid λ-term: variable, abstraction, or application. Printed syntax (expr) and free variables
    (free_vars) are computed on first use and cached.
    """

    def __init__(self):
        self._cls = type(self).__name__
        self._expr = None
        self._free = None

    @property
    def expr(self):
        """Surface syntax of this term. Parsing expr gives back an equal term."""
        if self._expr is None:
            self._expr = self.update_expr()
        return self._expr

    @property
    def free_vars(self):
        """frozenset of the names that occur free in this term."""
        if self._free is None:
            self._free = self.generate_free()
        return self._free

    @property
    @abstractmethod
    def nodes(self):
        """Children of this node, in printing order."""

    @abstractmethod
    def update_expr(self):
        """Computes the surface syntax of this term from its nodes."""

    @abstractmethod
    def generate_free(self):
        """Computes the free variables of this term from its nodes."""

    @abstractmethod
    def sub(self, var, new_term, names=None):
        """Capture-avoiding substitution of new_term for every free occurrence of the variable named var. names is the
        FreshNames used to rename binders that would capture a free variable of new_term. Returns self, untouched, if
        var is not free in self.
        """

    def alpha_equals(self, other, free=None):
        """Whether or not two LambdaTerms are equal up to consistent renaming of bound variables. free optionally maps
        free variables of self to the free variables of other they should be considered equal to; any other free
        variable must match by name.
        """
        if self is other and not free:
            return True
        return self._alpha_equals(other, {}, {}, free or {}, 0)

    @abstractmethod
    def _alpha_equals(self, other, mapping, other_mapping, free, depth):
        """mapping and other_mapping map each bound name (of self and other respectively) to the stack of depths of
        the binders currently in scope for it.
        """

    def display(self, indents=0):
        """Recursively displays the syntax tree with readable format.

        Format:
        <LambdaTerm>(expr='<expr>', nodes=[
            <LambdaTerm>(expr='<expr>', nodes=[
                ...
                <LambdaTerm>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{self._cls}(expr='{self.expr}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        return f"{self._cls}('{self.expr}')"

    def __str__(self):
        return self.display()

    def __eq__(self, other):
        return isinstance(other, type(self)) and self.expr == other.expr

    def __hash__(self):
        return hash(self.expr)


def _unbind(mapping, name):
    """Pops the innermost binder of name from mapping."""
    mapping[name].pop()
    if not mapping[name]:
        del mapping[name]


class Variable(LambdaTerm):
    """Variable in lambda calculus: a name bound by an enclosing abstraction or, transiently, free."""

    def __init__(self, name):
        super().__init__()
        self.name = name

    @property
    def nodes(self):
        return ()

    def update_expr(self):
        return self.name

    def generate_free(self):
        return frozenset([self.name])

    def sub(self, var, new_term, names=None):
        if self.name == var:
            return new_term
        return self

    def _alpha_equals(self, other, mapping, other_mapping, free, depth):
        if not isinstance(other, Variable):
            return False

        binders = mapping.get(self.name)
        other_binders = other_mapping.get(other.name)
        if binders or other_binders:
            return bool(binders) and bool(other_binders) and binders[-1] == other_binders[-1]
        return free.get(self.name, self.name) == other.name


class Abstraction(LambdaTerm):
    """Abstraction: introduces param as a binder scoping over body."""

    def __init__(self, param, body):
        super().__init__()
        self.param = param
        self.body = body

    @property
    def nodes(self):
        return Variable(self.param), self.body

    def update_expr(self):
        return f"fn {self.param} => {self.body.expr}"

    def generate_free(self):
        return self.body.free_vars - {self.param}

    def sub(self, var, new_term, names=None):
        if self.param == var or var not in self.free_vars:
            return self
        if names is None:
            names = FreshNames()

        param, body = self.param, self.body
        if param in new_term.free_vars:
            # param would capture a free variable of new_term, so rename it first
            param = names.fresh(param, new_term.free_vars, body.free_vars)
            body = body.sub(self.param, Variable(param), names)

        return Abstraction(param, body.sub(var, new_term, names))

    def _alpha_equals(self, other, mapping, other_mapping, free, depth):
        if not isinstance(other, Abstraction):
            return False

        mapping.setdefault(self.param, []).append(depth)
        other_mapping.setdefault(other.param, []).append(depth)
        try:
            return self.body._alpha_equals(other.body, mapping, other_mapping, free, depth + 1)
        finally:
            _unbind(mapping, self.param)
            _unbind(other_mapping, other.param)


class Application(LambdaTerm):
    """Application of function to argument."""

    def __init__(self, function, argument):
        super().__init__()
        self.function = function
        self.argument = argument

    @property
    def nodes(self):
        return self.function, self.argument

    @property
    def is_redex(self):
        """An Application is a redex if its function is an Abstraction."""
        return isinstance(self.function, Abstraction)

    def update_expr(self):
        # parenthesize abstractions on the left (bodies are greedy) and non-variables on the right (left association)
        function = self.function.expr
        if isinstance(self.function, Abstraction):
            function = f"({function})"

        argument = self.argument.expr
        if not isinstance(self.argument, Variable):
            argument = f"({argument})"

        return f"{function} {argument}"

    def generate_free(self):
        function, argument = self.function.free_vars, self.argument.free_vars
        if not argument or argument <= function:
            return function
        if not function:
            return argument
        return function | argument

    def sub(self, var, new_term, names=None):
        if var not in self.free_vars:
            return self
        if names is None:
            names = FreshNames()
        return Application(self.function.sub(var, new_term, names), self.argument.sub(var, new_term, names))

    def _alpha_equals(self, other, mapping, other_mapping, free, depth):
        if not isinstance(other, Application):
            return False
        return (self.function._alpha_equals(other.function, mapping, other_mapping, free, depth)
                and self.argument._alpha_equals(other.argument, mapping, other_mapping, free, depth))
