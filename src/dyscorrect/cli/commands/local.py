"""
Offline commands - run the correction engine without the API.
"""

import json
import sys
from rich import print_json

from dyscorrect.cli.commands.essay import read_text_arg
from dyscorrect.cli.commands.session import format_stats, format_tokens
from dyscorrect.core.analysis import BackendError
from dyscorrect.core.clean import clean_ocr_text
from dyscorrect.core.errors import DyscorrectError
from dyscorrect.core.matcher import reconcile
from dyscorrect.core.patch import apply_position_corrections
from dyscorrect.core.store import TokenStore
from dyscorrect.core.tokenize import tokenize


def add_subparser(subparsers):
    # tokens
    tok_p = subparsers.add_parser("tokens", help="Show how text is tokenized")
    tok_p.add_argument("text", help="Text (or @path)")
    tok_p.set_defaults(func=cmd_tokens)

    # clean
    clean_p = subparsers.add_parser("clean", help="Clean OCR text")
    clean_p.add_argument("text", help="Text (or @path)")
    clean_p.set_defaults(func=cmd_clean)

    # patch
    patch_p = subparsers.add_parser("patch", help="Apply offset corrections to text")
    patch_p.add_argument("text", help="Text (or @path)")
    patch_p.add_argument("corrections", help="JSON file with offset corrections")
    patch_p.set_defaults(func=cmd_patch)

    # review
    review_p = subparsers.add_parser("review", help="Match errors and apply a bulk decision")
    review_p.add_argument("text", help="Text (or @path)")
    review_p.add_argument("errors", help="JSON file with backend errors")
    review_p.add_argument("--accept-all", action="store_true", help="Accept every flagged word")
    review_p.add_argument("--json", action="store_true", help="Print tokens and result as JSON")
    review_p.set_defaults(func=cmd_review)


def load_json(path: str):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def cmd_tokens(args):
    for i, piece in enumerate(tokenize(read_text_arg(args.text))):
        print(f"{i}: {piece!r}")


def cmd_clean(args):
    print(clean_ocr_text(read_text_arg(args.text)))


def cmd_patch(args):
    try:
        corrections = load_json(args.corrections)
        if isinstance(corrections, dict):
            corrections = corrections.get("corrections", [])
        if not isinstance(corrections, list) or not all(isinstance(c, dict) for c in corrections):
            raise ValueError("corrections must be a list of objects")
        print(apply_position_corrections(read_text_arg(args.text), corrections))
    except (DyscorrectError, OSError, ValueError) as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def cmd_review(args):
    try:
        text = read_text_arg(args.text)
        data = load_json(args.errors)
        if isinstance(data, dict):
            data = data.get("data", [])
        errors = [BackendError.from_dict(item) for item in data]
    except (OSError, ValueError, KeyError) as e:
        print(f"✗ Error: {e}")
        sys.exit(1)

    tokens, unmatched = reconcile(tokenize(text), errors)
    store = TokenStore(tokens)
    if args.accept_all:
        store.dispatch_all("accept")

    if args.json:
        print_json(data={
            **store.to_dict(),
            "text": store.reconstruct(),
            "corrections": store.corrections(),
            "stats": store.stats(),
            "unmatched": [e.to_dict() for e in unmatched],
        })
        return

    for line in format_tokens([t.to_dict() for t in store.tokens()]):
        print(line)
    print(format_stats(store.stats()))
    if unmatched:
        print(f"{len(unmatched)} unmatched: {', '.join(e.word for e in unmatched)}")
    print()
    print(store.reconstruct())
