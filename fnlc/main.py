"""Runs fnlc programs, or the interactive shell if no program is given. Called from the fnlc console script."""

import argparse
import logging
import sys

from fnlc.lang.error import ErrorHandler
from fnlc.lang.session import Session
from fnlc.lang.shell import Shell, describe

RECURSION_LIMIT = 20000  # printing and reducing recurse once per level of term nesting


def main(argv=None):
    """Runs the fnlc interpreter. Called from the fnlc console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="fnlc", description="Normal-order evaluator for an untyped λ-calculus.")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("-v", "--verbose", action="store_true", help="print each beta-reduction step")
        parser.add_argument("-s", "--max-steps", type=int, default=None, metavar="N",
                            help="give up after N beta-reduction steps")
        parser.add_argument("--strict", action="store_true", help="reject variables that are never bound")
        parser.add_argument("--debug", action="store_true", help="log debugging information to stderr")
        args = parser.parse_args(argv)

        logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING,
                            format="%(levelname)s %(name)s: %(message)s")
        sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

        error_handler.verbose = args.verbose
        if args.file is not None:
            sess = Session(error_handler, args.file, args.max_steps, args.strict)
            sess.run()

            for term in sess.results:
                describe(term)

        else:
            error_handler.fatal = False
            Shell(Session(error_handler, Session.SH_FILE, args.max_steps, args.strict)).cmdloop()


if __name__ == "__main__":
    main()
