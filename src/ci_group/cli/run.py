"""Run a child command inside a log group."""

import argparse
import logging
import subprocess
import sys

logger = logging.getLogger(__name__)


def _strip_separator(cmd: list[str]) -> list[str]:
    if cmd and cmd[0] == "--":
        return cmd[1:]
    return cmd


def cmd_run(args: argparse.Namespace) -> int:
    from ci_group.guard import open as open_group

    cmd = _strip_separator(args.cmd)
    if not cmd:
        print("ci-group run: no command given (usage: ci-group run <title> -- <command>)",
              file=sys.stderr)
        return 2

    with open_group(args.title) as g:
        logger.debug("Running %s in group %r (%s)", cmd, args.title, g.provider.value)
        try:
            result = subprocess.run(cmd)
        except FileNotFoundError:
            print(f"ci-group run: command not found: {cmd[0]}", file=sys.stderr)
            return 127
        except PermissionError:
            print(f"ci-group run: permission denied: {cmd[0]}", file=sys.stderr)
            return 126
        except OSError as exc:
            print(f"ci-group run: cannot execute {cmd[0]}: {exc.strerror or exc}", file=sys.stderr)
            return 126

    # Killed by a signal: follow the shell's 128+N convention
    if result.returncode < 0:
        return 128 - result.returncode
    return result.returncode
