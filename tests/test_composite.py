"""Tests for indexed and associative array decoding."""

import pytest

from bashvar.composite import (
    decode_composite,
    strip_wrapper,
    to_index,
    tokenize_pairs,
)
from bashvar.model import Absent, VMapping, VSequence, VText


def _texts(*values):
    return [Absent if v is None else VText(v) for v in values]


# ---------------------------------------------------------------------------
# strip_wrapper / to_index
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("text,expected", [
    ("'abc'", "abc"),
    ('"abc"', "abc"),
    ("''", ""),
    ("'abc\"", "'abc\""),
    ("'", "'"),
    ("abc", "abc"),
    ("''x''", "'x'"),
])
def test_strip_wrapper(text, expected):
    assert strip_wrapper(text) == expected

@pytest.mark.parametrize("key,expected", [
    ("0", 0),
    ("12", 12),
    ("+3", 3),
    ("7abc", 7),
    ("abc", 0),
    ("-1", 0),
    ("", 0),
])
def test_to_index(key, expected):
    assert to_index(key) == expected


# ---------------------------------------------------------------------------
# tokenize_pairs
# ---------------------------------------------------------------------------

def test_tokenize_quoted_and_bare():
    assert list(tokenize_pairs("[a]=\"1\" [b]=2 [c]='3 4'")) == [
        ("a", '"1"'),
        ("b", "2"),
        ("c", "'3 4'"),
    ]

def test_tokenize_escaped_quote_in_value():
    assert list(tokenize_pairs(r'[0]="say \"hi\"" [1]=x')) == [
        ("0", r'"say \"hi\""'),
        ("1", "x"),
    ]

def test_tokenize_escaped_backslash_before_closing_quote():
    assert list(tokenize_pairs(r'[0]="a\\" [1]=b')) == [
        ("0", r'"a\\"'),
        ("1", "b"),
    ]

def test_tokenize_bare_word_stops_at_paren():
    assert list(tokenize_pairs("[0]=abc)def")) == [("0", "abc")]

def test_tokenize_skips_pair_without_equals():
    assert list(tokenize_pairs('[0]"a" [1]="b"')) == [("1", '"b"')]

def test_tokenize_skips_pair_without_value():
    assert list(tokenize_pairs('[0]= [1]="b"')) == [("1", '"b"')]

def test_tokenize_stops_at_unterminated_subscript():
    assert list(tokenize_pairs('[0]="a" [1="b"')) == [("0", '"a"')]

def test_tokenize_unterminated_double_quote_reads_bare_word():
    assert list(tokenize_pairs('[0]="abc def')) == [("0", '"abc')]

def test_tokenize_unterminated_single_quote_reads_bare_word():
    assert list(tokenize_pairs("[0]='abc")) == [("0", "'abc")]

def test_tokenize_empty():
    assert list(tokenize_pairs("")) == []

def test_tokenize_many_open_brackets():
    assert list(tokenize_pairs("[" * 20000)) == []


# ---------------------------------------------------------------------------
# decode_composite — indexed
# ---------------------------------------------------------------------------

def test_indexed_sequential():
    result = decode_composite("'([0]=\"a\" [1]=\"b\")'", associative=False)
    assert result == VSequence(_texts("a", "b"))

def test_indexed_without_outer_quotes():
    result = decode_composite('([0]="a" [1]="b")', associative=False)
    assert result == VSequence(_texts("a", "b"))

def test_indexed_sparse():
    result = decode_composite("'([2]=\"x\" [5]=\"y\")'", associative=False)
    assert result == VSequence(_texts(None, None, "x", None, None, "y"))

def test_indexed_out_of_order():
    result = decode_composite('([3]="c" [1]="a")', associative=False)
    assert result == VSequence(_texts(None, "a", None, "c"))

def test_indexed_overwrite():
    result = decode_composite('([0]="a" [0]="b")', associative=False)
    assert result == VSequence(_texts("b"))

def test_indexed_non_numeric_and_negative_keys_go_to_zero():
    assert decode_composite('([x]="a")', associative=False) == VSequence(_texts("a"))
    assert decode_composite('([-4]="b")', associative=False) == VSequence(_texts("b"))

def test_indexed_values_are_decoded():
    result = decode_composite(r"""([0]="a\tb" [1]='c\n' [2]=$'d\ne' [3]=plain)""", associative=False)
    assert result == VSequence(_texts("a\tb", "c\\n", "d\ne", "plain"))

def test_indexed_paren_inside_quoted_value():
    result = decode_composite('([0]="a)b" [1]="(c")', associative=False)
    assert result == VSequence(_texts("a)b", "(c"))

def test_indexed_empty_string_is_not_absent():
    result = decode_composite('([0]="" [2]="z")', associative=False)
    assert result.items == [VText(""), Absent, VText("z")]

def test_indexed_max_index():
    result = decode_composite('([5]="x" [1]="y")', associative=False, max_index=2)
    assert result == VSequence(_texts(None, "y"))

def test_indexed_huge_index_skipped_with_limit():
    result = decode_composite('([99999999999]="x" [0]="y")', associative=False, max_index=2**20)
    assert result == VSequence(_texts("y"))

def test_indexed_large_index_kept_by_default():
    result = decode_composite('([4000000]="x")', associative=False)
    assert len(result.items) == 4000001
    assert result.items[4000000] == VText("x")
    assert result.items[0] is Absent

def test_indexed_unallocatable_index_is_skipped():
    raw = "([" + "9" * 5000 + ']="x" [0]="y")'
    result = decode_composite(raw, associative=False)
    assert result == VSequence(_texts("y"))

def test_indexed_malformed_pair_does_not_abort():
    result = decode_composite('([0]"a" [1]="b")', associative=False)
    assert result == VSequence(_texts(None, "b"))

def test_indexed_truncated_value():
    result = decode_composite('([0]="a" [1]="b)', associative=False)
    assert result == VSequence(_texts("a", '"b'))


# ---------------------------------------------------------------------------
# decode_composite — associative
# ---------------------------------------------------------------------------

def test_assoc_basic():
    result = decode_composite("'([k]=\"v\" [x]=\"y\")'", associative=True)
    assert result == VMapping({"k": VText("v"), "x": VText("y")})

def test_assoc_quoted_key():
    result = decode_composite('(["my key"]="v" [\'other\']="w")', associative=True)
    assert result == VMapping({"my key": VText("v"), "other": VText("w")})

def test_assoc_last_wins():
    result = decode_composite('([k]="1" [k]="2")', associative=True)
    assert result == VMapping({"k": VText("2")})

def test_assoc_numeric_keys_stay_text():
    result = decode_composite('([10]="a")', associative=True)
    assert result == VMapping({"10": VText("a")})


# ---------------------------------------------------------------------------
# Fallbacks
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("raw", ["", "'oops'", "oops", "(", ")", "'([0]=\"a\"'", "\"(\""])
@pytest.mark.parametrize("associative", [False, True])
def test_not_parenthesised_gives_empty_container(raw, associative):
    expected = VMapping() if associative else VSequence()
    assert decode_composite(raw, associative=associative) == expected

def test_empty_parens():
    assert decode_composite("'()'", associative=False) == VSequence()
    assert decode_composite("()", associative=True) == VMapping()

def test_garbage_inside_parens():
    assert decode_composite("(a b c ] [ =)", associative=False) == VSequence()
