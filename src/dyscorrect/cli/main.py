"""
dyscorrect CLI.
"""

import argparse

from dyscorrect.cli.commands import analysis, essay, local, session
from dyscorrect.logging_utils import setup_logger


def main():
    parser = argparse.ArgumentParser(prog="dyscorrect", description="dyscorrect CLI")
    subparsers = parser.add_subparsers(dest="command")

    essay.add_subparser(subparsers)
    session.add_subparser(subparsers)
    local.add_subparser(subparsers)
    analysis.add_subparser(subparsers)

    args = parser.parse_args()
    setup_logger()

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
