"""Runs the treelox interpreter on a .lox file, or in command-line mode if no file is given. Also sets up logging and
the error handling context manager. Called from the treelox console script and `python -m treelox`.
"""

import argparse
import logging

from treelox import __version__
from treelox.lang.error import ErrorHandler
from treelox.lang.session import Session
from treelox.lang.shell import Shell

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def create_arg_parser():
    """Creates command line argument parser."""
    parser = argparse.ArgumentParser(prog="treelox", description="Tree-walking interpreter for a small Lox dialect.")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="log more of what the interpreter does (-v for info, -vv for debug)")
    parser.add_argument("--log-file", metavar="PATH", help="also write a full debug log to PATH")
    parser.add_argument("--parse", action="store_true", help="print syntax trees instead of running")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def log_handlers(verbosity, log_file=None):
    """Returns the stderr handler, at a level picked by the number of -v flags, plus a DEBUG handler writing to
    log_file if one is given.
    """
    console = logging.StreamHandler()
    console.setLevel(LOG_LEVELS[min(verbosity, len(LOG_LEVELS) - 1)])
    handlers = [console]

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    return handlers


def configure_logging(verbosity, log_file=None):
    handlers = log_handlers(verbosity, log_file)
    logging.basicConfig(level=min(handler.level for handler in handlers), format=LOG_FORMAT,
                        datefmt="%Y-%m-%d %H:%M:%S", handlers=handlers)


def main(argv=None):
    """Runs treelox interpreter."""
    with ErrorHandler() as error_handler:
        args = create_arg_parser().parse_args(argv)
        configure_logging(args.verbose, args.log_file)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, parse_only=args.parse)
            sess.run_file()

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, parse_only=args.parse)).cmdloop()
