"""Handles interactive/command-line mode for the fnlc interpreter. Uses cmd as backend."""

import cmd

from termcolor import colored

from fnlc.lang.values import guesses


def describe(term):
    """Prints term, followed by the familiar values it is alpha-equivalent to (if any)."""
    print(term.expr)

    matches = [colored(match, "green") for match in guesses(term)]
    if len(matches) == 1:
        print(f"\nAlpha-equivalent to: {matches[0]}")
    elif matches:
        print("\nAlpha-equivalent to:" + "".join(f"\n - {match}" for match in matches))


class Shell(cmd.Cmd):
    """Lambda calculus interpreter shell."""
    intro = "fnlc :: lambda calculus interpreter\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    def default(self, line):
        """Executes arbitrary fnlc statement."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if line and add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt
            if not line:
                return

            self.sess.add(line)
            if self.sess.main is not None:
                self.sess.run()

            if self.sess.results:
                describe(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the fnlc interpreter!\n\n"
              "Lambda calculus is a Turing-complete language created by Alonzo Church. This \n"
              "interpreter supports pure lambda calculus, written with 'fn x => body', as well \n"
              "as named definitions.\n\n"
              "Try it out by typing 'id := fn x => x'. This will bind the lambda term \n"
              "'fn x => x' to the name 'id'. Next, try typing 'id y'. This will apply 'id' to \n"
              "'y', giving 'y' as the result.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
