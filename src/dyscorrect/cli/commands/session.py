"""
Review session commands.
"""

import json
import sys
from dyscorrect.cli import client


STATE_ICONS = {"flagged": "!", "corrected": "✓", "ignored": "·"}


def add_subparser(subparsers):
    parser = subparsers.add_parser("session", help="Review sessions")
    sess_sub = parser.add_subparsers(dest="session_command", required=True)

    # start
    start_p = sess_sub.add_parser("start", help="Analyze an essay and start reviewing")
    start_p.add_argument("essay_id", help="Essay ID")
    start_p.add_argument("--errors", help="JSON file with backend errors (skips analysis)")
    start_p.set_defaults(func=session_start)

    # show
    show_p = sess_sub.add_parser("show", help="Show tokens and current text")
    show_p.add_argument("session_id", help="Session ID")
    show_p.add_argument("--all", action="store_true", help="Include ignored words")
    show_p.set_defaults(func=session_show)

    # accept / reject
    for action in ("accept", "reject"):
        p = sess_sub.add_parser(action, help=f"{action.capitalize()} a suggestion")
        p.add_argument("session_id", help="Session ID")
        p.add_argument("token_id", help="Token ID")
        p.set_defaults(func=session_action, action=action)

    # edit
    edit_p = sess_sub.add_parser("edit", help="Replace a word")
    edit_p.add_argument("session_id", help="Session ID")
    edit_p.add_argument("token_id", help="Token ID")
    edit_p.add_argument("new_word", help="Replacement text")
    edit_p.set_defaults(func=session_action, action="edit")

    # accept-all / reject-all
    for action in ("accept", "reject"):
        p = sess_sub.add_parser(f"{action}-all", help=f"{action.capitalize()} every flagged word")
        p.add_argument("session_id", help="Session ID")
        p.set_defaults(func=session_action_all, action=action)

    # finalize
    fin_p = sess_sub.add_parser("finalize", help="Save the reviewed text to the essay")
    fin_p.add_argument("session_id", help="Session ID")
    fin_p.set_defaults(func=session_finalize)

    # delete
    del_p = sess_sub.add_parser("delete", help="Discard a session")
    del_p.add_argument("session_id", help="Session ID")
    del_p.set_defaults(func=session_delete)


def format_stats(stats: dict) -> str:
    return (
        f"{stats['total_errors']} errors, {stats['corrected']} corrected, "
        f"{stats['pending']} pending, {stats['ignored']} ignored"
    )


def format_tokens(tokens: list[dict], show_all: bool = False) -> list[str]:
    lines = []
    for t in tokens:
        if t["kind"] != "word":
            continue
        if not show_all and t["state"] == "ignored" and not t.get("is_error"):
            continue
        icon = STATE_ICONS.get(t["state"], "?")
        line = f"{icon} {t['id']}  {t['original_word']}"
        if t["display_word"] != t["original_word"]:
            line += f" → {t['display_word']}"
        elif t["state"] == "flagged" and t.get("corrected_word"):
            line += f" (suggest: {t['corrected_word']})"
        if t.get("pattern"):
            line += f"  [{t['pattern']}]"
        lines.append(line)
    return lines


def session_start(args):
    try:
        errors = None
        if args.errors:
            with open(args.errors, encoding="utf-8") as f:
                errors = json.load(f)
        result = client.create_session(args.essay_id, errors)
        print(f"✓ Session: {result['id']}")
        print(f"  {format_stats(result['stats'])}")
        if result.get("unmatched_errors"):
            print(f"  {result['unmatched_errors']} backend errors did not match any word")
        for line in format_tokens(result["tokens"]):
            print(f"  {line}")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def session_show(args):
    try:
        result = client.get_session(args.session_id)
        print(f"Session: {result['id']}")
        print(f"Essay: {result['essay_id']}")
        if result.get("model_used"):
            print(f"Model: {result['model_used']}")
        if result.get("finalized_at"):
            print(f"Finalized: {result['finalized_at']}")
        print(f"Stats: {format_stats(result['stats'])}")
        print()
        for line in format_tokens(result["tokens"], args.all):
            print(line)
        print()
        print(result["text"])
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def session_action(args):
    try:
        new_word = getattr(args, "new_word", None)
        result = client.dispatch_action(args.session_id, args.token_id, args.action, new_word)
        token = result["token"]
        icon = STATE_ICONS.get(token["state"], "?")
        print(f"{icon} {token['original_word']} → {token['display_word']} ({token['state']})")
        print(f"  {format_stats(result['stats'])}")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def session_action_all(args):
    try:
        result = client.dispatch_all(args.session_id, args.action)
        print(f"✓ {args.action}: {len(result['token_ids'])} tokens")
        print(f"  {format_stats(result['stats'])}")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def session_finalize(args):
    try:
        result = client.finalize_session(args.session_id)
        print(f"✓ Saved to essay {result['essay_id']}")
        print(f"  {len(result['corrections'])} corrections")
        print()
        print(result["corrected_text"])
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def session_delete(args):
    try:
        client.delete_session(args.session_id)
        print(f"✓ Deleted: {args.session_id}")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)
