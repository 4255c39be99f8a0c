"""Handles interactive/command-line mode for the mathfp interpreter. Uses cmd as backend."""

import cmd

from mathfp.lang.runtime import display


class Shell(cmd.Cmd):
    """mathfp interpreter shell. Every line runs in the same Session, so bindings carry over between lines."""
    intro = "mathfp interpreter :: Python backend\nType 'help' for more information."
    prompt = ">>> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess

    def default(self, line):
        """Executes arbitrary mathfp statements."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.sess.run(line)
            display(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro. With an arg, the line is a statement using the name help."""
        if arg:
            return self.default(f"help {arg}")

        print("Welcome to the mathfp interpreter!\n\n"
              "Statements are separated by newlines or ';' and the value of the last one is \n"
              "printed. Numbers support + - * / and parentheses; 'true' and 'false' count as \n"
              "1 and 0 in arithmetic.\n\n"
              "Try it out by typing 'x := 2 * 5'. This will bind 10 to the name 'x'. Next, \n"
              "try typing 'x / 4', giving 2.5 as the result. 'nil', 'true' and 'false' are \n"
              "constants and cannot be rebound.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        if arg:
            return self.default(f"EOF {arg}")

        print()
        return True

    def do_exit(self, arg):
        """Exits interpreter. With an arg, the line is a statement that uses the name exit."""
        if arg:
            return self.default(f"exit {arg}")
        return True
