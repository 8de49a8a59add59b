"""Tests for whitespace-preserving tokenization."""

from dyscorrect.core.tokenize import tokenize, is_whitespace, spans, word_count


def test_tokenize_simple():
    assert tokenize("I went to the bank") == ["I", " ", "went", " ", "to", " ", "the", " ", "bank"]


def test_tokenize_keeps_punctuation_on_words():
    assert tokenize("Hello, world!") == ["Hello,", " ", "world!"]


def test_tokenize_multiple_spaces():
    assert tokenize("hello    world") == ["hello", "    ", "world"]


def test_tokenize_mixed_whitespace_is_one_run():
    assert tokenize("a \t\n b") == ["a", " \t\n ", "b"]


def test_tokenize_empty():
    assert tokenize("") == []


def test_tokenize_no_whitespace():
    assert tokenize("word") == ["word"]


def test_tokenize_leading_and_trailing_whitespace():
    pieces = tokenize("  hi there\n")
    assert pieces == ["  ", "hi", " ", "there", "\n"]


def test_tokenize_whitespace_only():
    assert tokenize("   ") == ["   "]


def test_tokenize_round_trip():
    samples = [
        "",
        "one",
        " lead",
        "trail ",
        "I has a bal.",
        "line one\n\nline two\t\tend  ",
        "මම ගෙදර යනව.",
    ]
    for s in samples:
        assert "".join(tokenize(s)) == s


def test_pieces_are_pure_runs():
    for piece in tokenize(" a  bb\tccc \n"):
        assert is_whitespace(piece) or not any(ch.isspace() for ch in piece)


def test_is_whitespace():
    assert is_whitespace(" \n")
    assert not is_whitespace("a ")
    assert not is_whitespace("")


def test_spans_positions():
    assert spans("ab  cd") == [("ab", 0), ("  ", 2), ("cd", 4)]


def test_word_count():
    assert word_count("  I has  a bal. ") == 4
    assert word_count("") == 0
