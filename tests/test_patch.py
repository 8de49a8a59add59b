"""Tests for offset-based correction application."""

import pytest

from dyscorrect.core.analysis import BackendError, Correction, Position
from dyscorrect.core.errors import PatchError, ReconstructionMismatchError
from dyscorrect.core.patch import apply_corrections, apply_position_corrections
from dyscorrect.core.reducer import ACCEPT
from dyscorrect.core.store import TokenStore


def fix(start, end, replacement, accepted=True):
    return {"start": start, "end": end, "replacement": replacement, "accepted": accepted}


# === Positional ===

def test_descending_application():
    corrections = [fix(1, 2, "X"), fix(4, 5, "Y")]
    assert apply_position_corrections("abcdef", corrections) == "aXcdYf"


def test_order_of_input_does_not_matter():
    corrections = [fix(4, 5, "Y"), fix(1, 2, "X")]
    assert apply_position_corrections("abcdef", corrections) == "aXcdYf"


def test_length_changing_replacements():
    corrections = [
        Correction(word="has", suggestion="have", position=Position(2, 5), accepted=True),
        Correction(word="bal", suggestion="ball", position=Position(8, 11), accepted=True),
    ]
    assert apply_position_corrections("I has a bal.", corrections) == "I have a ball."


def test_only_accepted_are_applied():
    corrections = [fix(1, 2, "X"), fix(4, 5, "Y", accepted=False)]
    assert apply_position_corrections("abcdef", corrections) == "aXcdef"


def test_replacement_overrides_suggestion():
    c = {"word": "bal", "suggestion": "ball", "replacement": "balls",
         "position": {"start": 0, "end": 3}, "accepted": True}
    assert apply_position_corrections("bal", [c]) == "balls"


def test_touching_ranges_are_allowed():
    assert apply_position_corrections("abcdef", [fix(1, 2, "X"), fix(2, 3, "Y")]) == "aXYdef"


def test_deletion_and_insertion():
    assert apply_position_corrections("abcdef", [fix(0, 2, ""), fix(6, 6, "!")]) == "cdef!"


def test_no_corrections():
    assert apply_position_corrections("abc", []) == "abc"


# === Preconditions ===

def test_overlapping_ranges_raise():
    with pytest.raises(PatchError, match="Overlapping"):
        apply_position_corrections("abcdef", [fix(1, 3, "X"), fix(2, 4, "Y")])


def test_nested_ranges_raise():
    with pytest.raises(PatchError):
        apply_position_corrections("abcdef", [fix(1, 5, "X"), fix(2, 3, "Y")])


def test_empty_range_inside_other_raises():
    with pytest.raises(PatchError):
        apply_position_corrections("abcdef", [fix(2, 6, "X"), fix(4, 4, "Y")])


def test_overlap_with_rejected_correction_is_fine():
    corrections = [fix(1, 3, "X"), fix(2, 4, "Y", accepted=False)]
    assert apply_position_corrections("abcdef", corrections) == "aXdef"


@pytest.mark.parametrize("start,end", [(4, 10), (-1, 2), (3, 2), (7, 7)])
def test_out_of_bounds_raise(start, end):
    with pytest.raises(PatchError, match="out of bounds"):
        apply_position_corrections("abcdef", [fix(start, end, "X")])


def test_patch_error_is_value_error():
    with pytest.raises(ValueError):
        apply_position_corrections("ab", [fix(0, 5, "X")])


# === Unpositioned fallback ===

def test_unpositioned_replaces_first_occurrence():
    c = {"word": "the", "suggestion": "The", "accepted": True}
    assert apply_position_corrections("the cat the", [c]) == "The cat the"


def test_unpositioned_missing_word_is_noop():
    c = {"word": "dog", "suggestion": "cat", "accepted": True}
    assert apply_position_corrections("the cat", [c]) == "the cat"


def test_unpositioned_runs_after_positional():
    corrections = [
        {"word": "b", "suggestion": "B", "accepted": True},
        fix(0, 1, "b"),
    ]
    # positional turns "a" into "b" first, then the first "b" becomes "B"
    assert apply_position_corrections("ab", corrections) == "Bb"


# === Unified entry ===

def test_apply_corrections_with_token_store():
    text = "I has a bal."
    errors = [BackendError(word="has", suggestion="have"), BackendError(word="bal", suggestion="ball")]
    store = TokenStore.from_text(text, errors)
    store.dispatch_all(ACCEPT)

    assert apply_corrections(text, store) == "I have a ball."
    assert apply_corrections(text, store.tokens()) == "I have a ball."


def test_apply_corrections_with_offsets():
    assert apply_corrections("abcdef", [fix(1, 2, "X"), fix(4, 5, "Y")]) == "aXcdYf"


def test_apply_corrections_empty():
    assert apply_corrections("abc", []) == "abc"


def test_apply_corrections_rejects_foreign_tokens():
    store = TokenStore.from_text("other text")
    with pytest.raises(ReconstructionMismatchError):
        apply_corrections("I has a bal.", store)


def test_apply_corrections_rejects_mixed_input():
    store = TokenStore.from_text("ab")
    with pytest.raises(TypeError):
        apply_corrections("ab", store.tokens() + [fix(0, 1, "X")])
