"""
Essay commands.
"""

import sys
from rich import print_json
from dyscorrect.cli import client


def add_subparser(subparsers):
    parser = subparsers.add_parser("essay", help="Essay management")
    essay_sub = parser.add_subparsers(dest="essay_command", required=True)

    # add
    add_p = essay_sub.add_parser("add", help="Add a new essay")
    add_p.add_argument("text", help="Essay text (or @path to read a file)")
    add_p.add_argument("--student", help="Student ID")
    add_p.add_argument("--title", help="Essay title")
    add_p.add_argument("--clean", action="store_true", help="Clean OCR artifacts first")
    add_p.set_defaults(func=essay_add)

    # list
    list_p = essay_sub.add_parser("list", help="List essays")
    list_p.add_argument("--student", help="Only essays for this student")
    list_p.set_defaults(func=essay_list)

    # show
    show_p = essay_sub.add_parser("show", help="Show an essay")
    show_p.add_argument("essay_id", help="Essay ID")
    show_p.set_defaults(func=essay_show)

    # result
    result_p = essay_sub.add_parser("result", help="Show the reviewed result as JSON")
    result_p.add_argument("essay_id", help="Essay ID")
    result_p.set_defaults(func=essay_result)

    # delete
    del_p = essay_sub.add_parser("delete", help="Delete an essay")
    del_p.add_argument("essay_id", help="Essay ID")
    del_p.set_defaults(func=essay_delete)


def read_text_arg(value: str) -> str:
    if value.startswith("@"):
        with open(value[1:], encoding="utf-8") as f:
            return f.read()
    return value


def essay_add(args):
    try:
        result = client.create_essay(
            read_text_arg(args.text), args.student, args.title, args.clean
        )
        print(f"✓ Created: {result['id']} ({result['word_count']} words)")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def essay_list(args):
    try:
        essays = client.list_essays(args.student)
        if not essays:
            print("No essays.")
            return
        for e in essays:
            preview = e["text"][:50] + "..." if len(e["text"]) > 50 else e["text"]
            preview = preview.replace("\n", " ")
            student = f"  [{e['student_id']}]" if e.get("student_id") else ""
            print(f"{e['id'][:12]}{student}  {preview}")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def essay_show(args):
    try:
        essay = client.get_essay(args.essay_id)
        print(f"ID: {essay['id']}")
        if essay.get("title"):
            print(f"Title: {essay['title']}")
        if essay.get("student_id"):
            print(f"Student: {essay['student_id']}")
        print(f"Created: {essay['created_at']}")
        print(f"Words: {essay['word_count']}")
        print(f"Reviewed: {'yes' if essay['reviewed'] else 'no'}")
        print()
        print(essay["text"])
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def essay_result(args):
    try:
        print_json(data=client.get_essay_result(args.essay_id))
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def essay_delete(args):
    try:
        client.delete_essay(args.essay_id)
        print(f"✓ Deleted: {args.essay_id}")
    except Exception as e:
        print(f"✗ Error: {e}")
        sys.exit(1)
