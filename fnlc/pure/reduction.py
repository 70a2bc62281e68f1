"""Normal-order beta reduction.

Normal order always contracts the leftmost outermost redex first, so it finds a beta-normal form whenever one exists.
Untyped terms need not have one (Ω = (fn x => x x) (fn x => x x) reduces to itself forever): on those the reducer
does not terminate unless the caller bounds it, either by pulling a limited number of terms from steps or by passing
max_steps.
"""

import logging

from fnlc.lang.error import StepLimitExceeded
from fnlc.pure.fresh import FreshNames
from fnlc.pure.lexical import Abstraction, Application

logger = logging.getLogger(__name__)


class NormalOrderReducer:
    """Implements normal-order beta reduction of a single term. Holds the state of one reduction run: the current term,
    the fresh name source used by substitution and the number of contractions so far.
    """

    def __init__(self, term, max_steps=None):
        self.term = term
        self.max_steps = max_steps

        self.names = FreshNames()
        self.steps_taken = 0
        self.reduced = False

    def contract(self, redex):
        """Beta-contracts redex, an Application of an Abstraction."""
        self.steps_taken += 1
        if self.max_steps is not None and self.steps_taken > self.max_steps:
            raise StepLimitExceeded(self.max_steps)

        abstraction = redex.function
        return abstraction.body.sub(abstraction.param, redex.argument, self.names)

    def beta_reduce(self):
        """Reduces self.term to beta-normal form and returns it. Does not return if there is no normal form (unless
        max_steps is set, in which case StepLimitExceeded is raised).
        """
        self.term = self.normalize(self.term)
        self.reduced = True

        logger.debug("normal form reached after %d step(s)", self.steps_taken)
        return self.term

    def whnf(self, term):
        """Reduces term to weak head normal form: a variable or abstraction, possibly applied to arguments. Only redexes
        in head position are contracted, never under a binder or inside an argument.
        """
        original = term
        contracted = False

        args = []  # arguments of the current head, innermost last
        while True:
            while isinstance(term, Application):
                args.append(term.argument)
                term = term.function

            if not args or not isinstance(term, Abstraction):
                break
            term = self.contract(Application(term, args.pop()))
            contracted = True

        if not contracted:
            return original

        while args:
            term = Application(term, args.pop())
        return term

    def normalize(self, term):
        """Reduces term to beta-normal form: weak head normal form first, then the body of a head abstraction or the
        arguments of a head variable, left to right.
        """
        term = self.whnf(term)

        if isinstance(term, Abstraction):
            body = self.normalize(term.body)
            return term if body is term.body else Abstraction(term.param, body)

        args = []
        head = term
        while isinstance(head, Application):
            args.append(head.argument)
            head = head.function

        changed = False
        result = head
        while args:
            arg = args.pop()
            normal = self.normalize(arg)
            changed = changed or normal is not arg
            result = Application(result, normal)
        return result if changed else term

    def step(self, term):
        """Contracts the leftmost outermost redex of term. Returns the new term, or None if term is in normal form."""
        if isinstance(term, Application):
            if term.is_redex:
                return self.contract(term)

            function = self.step(term.function)
            if function is not None:
                return Application(function, term.argument)

            argument = self.step(term.argument)
            if argument is not None:
                return Application(term.function, argument)

        elif isinstance(term, Abstraction):
            body = self.step(term.body)
            if body is not None:
                return Abstraction(term.param, body)

        return None

    def steps(self):
        """Lazily yields self.term after each reduction step, ending with the normal form. The sequence is infinite if
        there is no normal form; stop pulling to abandon the reduction. Not restartable: a second call resumes from
        where the first one stopped.
        """
        while True:
            term = self.step(self.term)
            if term is None:
                self.reduced = True
                logger.debug("normal form reached after %d step(s)", self.steps_taken)
                return

            self.term = term
            yield term


def normalize(term, max_steps=None):
    """Returns the beta-normal form of term."""
    return NormalOrderReducer(term, max_steps).beta_reduce()
