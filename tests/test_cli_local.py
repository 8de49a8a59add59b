"""Tests for the offline CLI commands."""

import argparse
import json

import pytest

from dyscorrect.cli.commands.local import cmd_patch


def write_json(tmp_path, data):
    path = tmp_path / "corrections.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


CORRECTIONS = [
    {"word": "b", "suggestion": "X", "position": {"start": 1, "end": 2}, "accepted": True},
]


def test_patch_list(tmp_path, capsys):
    cmd_patch(argparse.Namespace(text="abc", corrections=write_json(tmp_path, CORRECTIONS)))
    assert capsys.readouterr().out.strip() == "aXc"


def test_patch_wrapped_object(tmp_path, capsys):
    path = write_json(tmp_path, {"corrections": CORRECTIONS})
    cmd_patch(argparse.Namespace(text="abc", corrections=path))
    assert capsys.readouterr().out.strip() == "aXc"


def test_patch_bad_payload_exits(tmp_path, capsys):
    path = write_json(tmp_path, {"corrections": "nope"})
    with pytest.raises(SystemExit) as exc:
        cmd_patch(argparse.Namespace(text="abc", corrections=path))
    assert exc.value.code == 1
    assert "✗ Error" in capsys.readouterr().out


def test_patch_overlap_exits(tmp_path, capsys):
    overlapping = CORRECTIONS + [
        {"word": "bc", "suggestion": "Y", "position": {"start": 1, "end": 3}, "accepted": True},
    ]
    with pytest.raises(SystemExit):
        cmd_patch(argparse.Namespace(text="abc", corrections=write_json(tmp_path, overlapping)))
    assert "✗ Error" in capsys.readouterr().out
