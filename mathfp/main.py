"""Runs the mathfp interpreter on a file, or in command-line mode when no file is given. Uses the error handling context
manager so that mathfp errors are reported instead of raised. Installed as the mathfp console script.
"""

import argparse

from mathfp.lang.error import ErrorHandler
from mathfp.lang.runtime import display
from mathfp.lang.session import Session
from mathfp.lang.shell import Shell


def main(argv=None):
    """Runs mathfp interpreter."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="mathfp")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        args = parser.parse_args(argv)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)
            display(sess.run_file())

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
