"""Command-line interface for ci-group.

Usage:
    ci-group detect [--json]
    ci-group run <title> -- <command> [args...]
"""

import argparse
import logging
import sys

from ci_group.cli.detect import cmd_detect
from ci_group.cli.run import cmd_run


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ci-group",
        description="Wrap output in collapsible CI log groups",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log diagnostics to stderr",
    )
    sub = parser.add_subparsers(dest="command")

    # detect
    det = sub.add_parser("detect", help="Print the detected CI provider")
    det.add_argument(
        "--json", action="store_true",
        help="Output machine-readable JSON",
    )

    # run
    run = sub.add_parser(
        "run", help="Run a command inside a log group",
    )
    run.add_argument("title", help="Group title shown in the log viewer")
    run.add_argument(
        "cmd", nargs=argparse.REMAINDER,
        help="Command to run (after --)",
    )

    return parser


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(name)s: %(message)s",
        )

    if not args.command:
        parser.print_help()
        return 0

    dispatch = {
        "detect": cmd_detect,
        "run": cmd_run,
    }
    return dispatch[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
