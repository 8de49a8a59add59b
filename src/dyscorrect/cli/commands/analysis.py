"""
Analysis service commands.
"""

import sys
from rich import print_json

from dyscorrect.cli import client


def add_subparser(subparsers):
    parser = subparsers.add_parser("analysis", help="Analysis service")
    an_sub = parser.add_subparsers(dest="analysis_command", required=True)

    health_p = an_sub.add_parser("health", help="Check the analysis service")
    health_p.set_defaults(func=analysis_health)

    pat_p = an_sub.add_parser("patterns", help="List known dyslexia patterns")
    pat_p.set_defaults(func=analysis_patterns)


def analysis_health(args):
    try:
        print_json(data=client.analysis_health())
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def analysis_patterns(args):
    try:
        patterns = client.analysis_patterns()
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)

    if not patterns:
        print("No patterns.")
        return
    print_json(data=patterns)
