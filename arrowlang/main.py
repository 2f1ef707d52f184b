"""Runs arrowlang programs from files or strings, or starts the interactive shell. Also uses error handling context
manager. Called from the arrow executable script.
"""

import argparse
import sys

from arrowlang.lang.error import ErrorHandler, GenericException
from arrowlang.lang.session import Session
from arrowlang.lang.shell import Shell


def make_parser():
    parser = argparse.ArgumentParser(prog="arrow", description="arrowlang interpreter")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("-c", "--command", help="run SOURCE instead of a file", metavar="SOURCE")
    parser.add_argument("-d", "--declare", help="declare a variable before running (repeatable)", action="append",
                        default=[], metavar="NAME=LITERAL")
    parser.add_argument("-q", "--quiet", help="only print the value of the last statement", action="store_true")
    return parser


def main(argv=None):
    """Runs arrowlang interpreter. Called from arrow executable script."""
    assert sys.version_info >= (3, 7), "arrow cannot be run with python < 3.7"

    with ErrorHandler() as error_handler:
        args = make_parser().parse_args(argv)

        if args.command is not None and args.file is not None:
            raise GenericException("cannot run both a file and --command", diagnosis=False)

        if args.command is not None:
            sess = Session(error_handler, Session.CMD_FILE, cmd_line=False, source=args.command)
        elif args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)
        else:
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True)

        for declaration in args.declare:
            sess.declare(declaration)

        if sess.cmd_line:
            Shell(sess).cmdloop()
            return

        try:
            sess.run()
        finally:  # values of statements that ran before an error are still shown
            results = sess.results[-1:] if args.quiet else sess.results
            for value in results:
                print(value)
