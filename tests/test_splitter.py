"""Tests for line splitting and delimiter sets."""

import doctest

import pytest

from text2table.delimiters import Delimiter, DelimiterSet
from text2table.errors import CannotParseLine
from text2table import splitter
from text2table.splitter import Policy, num_fields, split_line, unquote_field


SPLIT = Policy(quoted_fields=False, contiguous_delimiters=False)
COLLAPSE = Policy(quoted_fields=False, contiguous_delimiters=True)
QUOTED_SPLIT = Policy(quoted_fields=True, contiguous_delimiters=False)
QUOTED_COLLAPSE = Policy(quoted_fields=True, contiguous_delimiters=True)
ALL_POLICIES = [SPLIT, COLLAPSE, QUOTED_SPLIT, QUOTED_COLLAPSE]

COMMA = DelimiterSet([Delimiter.COMMA])
SPACE_COMMA = DelimiterSet([Delimiter.SPACE, Delimiter.COMMA])

MESSY = 'asdklsaj,,,alskjd,"kas  jd",,ksjd,sk,d'


# ---------------------------------------------------------------------------
# DelimiterSet
# ---------------------------------------------------------------------------

class TestDelimiterSet:

    def test_accepts_members_names_and_chars(self):
        delimiters = DelimiterSet([Delimiter.TAB, "comma", "|"])
        assert list(delimiters) == [Delimiter.TAB, Delimiter.COMMA, Delimiter.PIPE]
        assert delimiters.chars == frozenset({"\t", ",", "|"})

    def test_duplicates_collapse_keeping_first_position(self):
        delimiters = DelimiterSet(["colon", "space", ":", Delimiter.SPACE])
        assert delimiters.names() == ["colon", "space"]
        assert len(delimiters) == 2

    def test_order_does_not_affect_equality(self):
        assert DelimiterSet(["space", "comma"]) == DelimiterSet(["comma", "space"])

    def test_membership_is_by_character(self):
        delimiters = DelimiterSet(["period"])
        assert "." in delimiters
        assert "," not in delimiters

    def test_unknown_delimiter_rejected(self):
        with pytest.raises(ValueError):
            DelimiterSet([";"])

    def test_char_round_trip(self):
        for delimiter in Delimiter:
            assert Delimiter.from_char(delimiter.char) is delimiter


# ---------------------------------------------------------------------------
# split_line
# ---------------------------------------------------------------------------

class TestSplitLine:

    @pytest.mark.parametrize("policy", ALL_POLICIES)
    def test_line_without_delimiters_is_one_field(self, policy):
        assert split_line("plainvalue", SPACE_COMMA, policy) == ["plainvalue"]

    def test_split_keeps_empty_fields(self):
        assert split_line("a,,b", COMMA, SPLIT) == ["a", "", "b"]

    def test_collapse_drops_empty_fields(self):
        assert split_line("a,,b", COMMA, COLLAPSE) == ["a", "b"]

    def test_quoted_split_keeps_empty_fields_between_delimiters(self):
        assert split_line("a,,b", COMMA, QUOTED_SPLIT) == ["a", "", "b"]

    @pytest.mark.parametrize("policy", [QUOTED_SPLIT, QUOTED_COLLAPSE])
    def test_quoted_span_is_not_split(self, policy):
        assert split_line('a,"b,c",d', COMMA, policy) == ["a", '"b,c"', "d"]

    @pytest.mark.parametrize("policy", [SPLIT, COLLAPSE])
    def test_quotes_are_ordinary_without_quoting(self, policy):
        assert split_line('a,"b,c",d', COMMA, policy) == ["a", '"b', 'c"', "d"]

    @pytest.mark.parametrize("policy", [QUOTED_SPLIT, QUOTED_COLLAPSE])
    def test_unterminated_quote_fails_when_quoting(self, policy):
        with pytest.raises(CannotParseLine) as excinfo:
            split_line('a,"unterminated', COMMA, policy)
        assert excinfo.value.line == 'a,"unterminated'
        assert excinfo.value.line_number is None

    @pytest.mark.parametrize("policy", [SPLIT, COLLAPSE])
    def test_unterminated_quote_is_literal_without_quoting(self, policy):
        assert split_line('a,"unterminated', COMMA, policy) == ["a", '"unterminated']

    def test_doubled_quote_stays_inside_the_field(self):
        assert split_line('x,"say ""hi"", ok",y', COMMA, QUOTED_SPLIT) == [
            "x",
            '"say ""hi"", ok"',
            "y",
        ]

    def test_quote_in_middle_of_field_starts_quoted_span(self):
        assert split_line('ab"c d"e f', DelimiterSet(["space"]), QUOTED_COLLAPSE) == ['ab"c d"e', "f"]

    def test_tab_delimited(self):
        delimiters = DelimiterSet([Delimiter.TAB])
        assert split_line("a\tb\t\tc", delimiters, SPLIT) == ["a", "b", "", "c"]
        assert split_line("a\tb\t\tc", delimiters, COLLAPSE) == ["a", "b", "c"]

    @pytest.mark.parametrize(
        "policy, expected",
        [(SPLIT, 11), (COLLAPSE, 7), (QUOTED_SPLIT, 9), (QUOTED_COLLAPSE, 6)],
    )
    def test_messy_line_space_comma(self, policy, expected):
        assert num_fields(MESSY, SPACE_COMMA, policy) == expected

    @pytest.mark.parametrize(
        "policy, expected",
        [(SPLIT, 9), (COLLAPSE, 6), (QUOTED_SPLIT, 9), (QUOTED_COLLAPSE, 6)],
    )
    def test_messy_line_comma(self, policy, expected):
        assert num_fields(MESSY, COMMA, policy) == expected

    def test_messy_line_quoted_split_fields(self):
        assert split_line(MESSY, SPACE_COMMA, QUOTED_SPLIT) == [
            "asdklsaj", "", "", "alskjd", '"kas  jd"', "", "ksjd", "sk", "d",
        ]

    @pytest.mark.parametrize("policy", ALL_POLICIES)
    @pytest.mark.parametrize("line", ["", "a", "a,b", ",a", "a,", ",,", 'q,"r,s"', " a  b "])
    def test_num_fields_matches_split(self, policy, line):
        assert num_fields(line, SPACE_COMMA, policy) == len(split_line(line, SPACE_COMMA, policy))

    @pytest.mark.parametrize("policy", ALL_POLICIES)
    def test_num_fields_fails_like_split(self, policy):
        line = 'x "y'
        if policy.quoted_fields:
            with pytest.raises(CannotParseLine):
                num_fields(line, SPACE_COMMA, policy)
        else:
            assert num_fields(line, SPACE_COMMA, policy) == 2


class TestBoundaries:
    """Empty lines, leading and trailing delimiters."""

    @pytest.mark.parametrize(
        "policy, expected",
        [(SPLIT, [""]), (COLLAPSE, []), (QUOTED_SPLIT, []), (QUOTED_COLLAPSE, [])],
    )
    def test_empty_line(self, policy, expected):
        assert split_line("", COMMA, policy) == expected

    @pytest.mark.parametrize(
        "policy, expected",
        [(SPLIT, ["", "a"]), (COLLAPSE, ["a"]), (QUOTED_SPLIT, ["", "a"]), (QUOTED_COLLAPSE, ["a"])],
    )
    def test_leading_delimiter(self, policy, expected):
        assert split_line(",a", COMMA, policy) == expected

    @pytest.mark.parametrize(
        "policy, expected",
        [(SPLIT, ["a", ""]), (COLLAPSE, ["a"]), (QUOTED_SPLIT, ["a"]), (QUOTED_COLLAPSE, ["a"])],
    )
    def test_trailing_delimiter(self, policy, expected):
        assert split_line("a,", COMMA, policy) == expected

    @pytest.mark.parametrize(
        "policy, expected",
        [(SPLIT, ["", "", ""]), (COLLAPSE, []), (QUOTED_SPLIT, ["", ""]), (QUOTED_COLLAPSE, [])],
    )
    def test_only_delimiters(self, policy, expected):
        assert split_line(",,", COMMA, policy) == expected

    def test_split_matches_str_split(self):
        for line in ["a,,b", ",", "a,", ",a,", "", "abc"]:
            assert split_line(line, COMMA, SPLIT) == line.split(",")


class TestPolicy:

    def test_names(self):
        assert SPLIT.name == "unquoted-split"
        assert COLLAPSE.name == "unquoted-collapse"
        assert QUOTED_SPLIT.name == "quoted-split"
        assert QUOTED_COLLAPSE.name == "quoted-collapse"

    def test_policy_is_immutable(self):
        with pytest.raises(AttributeError):
            SPLIT.quoted_fields = True


class TestUnquoteField:

    def test_plain_value_unchanged(self):
        assert unquote_field("plain") == "plain"

    def test_surrounding_quotes_removed(self):
        assert unquote_field('"kas  jd"') == "kas  jd"

    def test_doubled_quote_collapses(self):
        assert unquote_field('"say ""hi"""') == 'say "hi"'

    def test_empty_quoted_value(self):
        assert unquote_field('""') == ""

    def test_quoted_span_inside_value(self):
        assert unquote_field('ab"c d"e') == "abc de"

    def test_docstring_examples(self):
        results = doctest.testmod(splitter)
        assert results.attempted >= 2
        assert results.failed == 0
