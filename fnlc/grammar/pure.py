"""Grammar of the fnlc language and the parser generated from it.

```
start       ::= definition* main
definition  ::= IDENT ":=" term ";"
main        ::= "main" ":=" term [";"]

term        ::= abstraction | application | application abstraction
application ::= atom+                        ; left-associative: a b c = (a b) c
atom        ::= IDENT | "(" term ")"
abstraction ::= "fn" IDENT "=>" term         ; greedy body: fn x => x y = fn x => (x y)
```

An abstraction may only close an application without parentheses (`f fn x => x y` = `f (fn x => x y)`), since its
body would swallow anything after it anyway. The grammar is LALR(1), so parsing is a single left-to-right pass. `fn`
and `main` are keywords only where the grammar accepts them.

Parsing is done in two passes, as usual with lark: the generated parser builds a parse tree, then TermBuilder turns
it into λ-terms bottom-up.
"""

from functools import reduce

from lark import Lark, Transformer, v_args
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken

from fnlc.lang.error import LambdaSyntaxError
from fnlc.lang.lexical import Definition, File
from fnlc.pure.lexical import Abstraction, Application, Variable

GRAMMAR = r"""
    start: definition* main

    definition: IDENT ":=" term ";"
    main: "main" ":=" term ";"?

    ?statement: IDENT ":=" term ";"?             -> binding
              | main
              | term ";"?                        -> bare_main

    ?term: abstraction
         | application
         | application abstraction               -> trailing_abstraction

    abstraction: "fn" IDENT "=>" term
    application: atom+

    ?atom: IDENT                                 -> variable
         | "(" term ")"

    IDENT: /[^\s()#;:=]+/
    COMMENT: /#[^\n]*/

    %import common.WS
    %ignore WS
    %ignore COMMENT
"""

PARSER = Lark(GRAMMAR, parser="lalr", start=["start", "term", "statement"])

# how terminals are called in error messages
NAMES = {"IDENT": "variable", "$END": "end of input"}
for terminal in PARSER.terminals:
    if terminal.pattern.type == "str":
        NAMES.setdefault(terminal.name, f"'{terminal.pattern.value}'")


@v_args(inline=True)
class TermBuilder(Transformer):
    """Turns a parse tree into λ-terms, Definitions and Files."""

    def __init__(self, path=None):
        super().__init__()
        self.path = path

    def variable(self, name):
        return Variable(str(name))

    def abstraction(self, param, body):
        return Abstraction(str(param), body)

    def application(self, *atoms):
        return reduce(Application, atoms)

    def trailing_abstraction(self, function, abstraction):
        return Application(function, abstraction)

    def definition(self, name, term):
        return Definition(str(name), term)

    binding = definition

    def main(self, term):
        return term

    bare_main = main

    def start(self, *children):
        *definitions, main = children
        return File(definitions, main, self.path)


def expected(names):
    """Readable, sorted list of expected terminals."""
    return ", ".join(sorted(NAMES.get(name, name) for name in names))


def end_of(text):
    """1-based (line, column) just past the end of text."""
    lines = text.split("\n")
    return len(lines), len(lines[-1]) + 1


def syntax_error(error, text, path=None):
    """Converts a lark UnexpectedInput into a LambdaSyntaxError located in text."""
    length = 1
    if isinstance(error, UnexpectedCharacters):
        line_num, column = error.line, error.column
        msg = f"unexpected character '{error.char}'"
        if error.allowed:
            msg += f", expected {expected(error.allowed)}"

    elif isinstance(error, UnexpectedToken) and error.token.type != "$END":
        line_num, column = error.token.line, error.token.column
        length = len(error.token)
        name = NAMES.get(error.token.type, error.token.type)
        msg = f"unexpected {name}" if name.startswith("'") else f"unexpected {name} '{error.token}'"
        msg += f", expected {expected(error.expected)}"

    else:  # ran out of input
        line_num, column = end_of(text)
        msg = "unexpected end of input"
        if getattr(error, "expected", None):
            msg += f", expected {expected(error.expected)}"

    lines = text.split("\n")
    line = lines[line_num - 1] if 0 < line_num <= len(lines) else ""
    return LambdaSyntaxError(msg, line, line_num, column, path, length)


def parse(text, start, path=None):
    """Parses text from the start rule start. Raises a LambdaSyntaxError at the first syntax error."""
    try:
        tree = PARSER.parse(text, start=start)
    except UnexpectedInput as error:
        raise syntax_error(error, text, path) from None
    return TermBuilder(path).transform(tree)


def parse_file(text, path=None):
    """Parses a whole program into a File."""
    return parse(text, "start", path)


def parse_term(text):
    """Parses a single λ-term."""
    return parse(text, "term")


def parse_statement(text, path=None):
    """Parses a single shell statement: a Definition (name := term), or the λ-term to evaluate (main := term, or just
    the term). The closing ";" is optional.
    """
    return parse(text, "statement", path)
