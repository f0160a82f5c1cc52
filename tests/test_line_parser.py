"""Tests for recap line parsing."""

import types

from wordle_stats.line_parser import parse_line, parse_message, parse_user_token
from wordle_stats.models import ById, ByName, ScoreRecord

SNOWFLAKE = 794733579770920990


# --- parse_user_token ---


def test_token_mention_becomes_id():
    assert parse_user_token(f"<@{SNOWFLAKE}>") == ById(SNOWFLAKE)
    assert parse_user_token(f"<@!{SNOWFLAKE}>") == ById(SNOWFLAKE)


def test_token_plain_name():
    assert parse_user_token("@Bob") == ByName("Bob")
    assert parse_user_token('**"Alice"**') == ByName("Alice")


def test_token_keeps_inner_punctuation():
    assert parse_user_token("@mr.bob_99") == ByName("mr.bob_99")


def test_token_only_strip_chars_is_skipped():
    assert parse_user_token("@") is None
    assert parse_user_token("<>") is None


def test_token_zero_is_not_an_id():
    assert parse_user_token("0") == ByName("0")


def test_token_too_large_for_snowflake():
    assert parse_user_token(str(2**64)) == ByName(str(2**64))


def test_token_non_ascii_digits_are_names():
    assert parse_user_token("١٢٣") == ByName("١٢٣")


# --- parse_line ---


def test_line_without_value_field():
    assert list(parse_line("Your group is on a 5 day streak!")) == []
    assert list(parse_line("3/5: Bob")) == []
    assert list(parse_line("3/6 Bob")) == []
    assert list(parse_line("")) == []


def test_line_is_lazy():
    assert isinstance(parse_line("3/6: Bob"), types.GeneratorType)


def test_line_mention_and_name():
    records = list(parse_line("3/6: <@123>, Bob"))
    assert records == [ScoreRecord(ById(123), 3), ScoreRecord(ByName("Bob"), 3)]


def test_line_failed_game():
    assert list(parse_line("X/6: Alice")) == [ScoreRecord(ByName("Alice"), None)]


def test_line_value_out_of_range():
    assert list(parse_line("0/6: Alice")) == []
    assert list(parse_line("7/6: Alice")) == []
    assert list(parse_line("9/6: Alice")) == []


def test_line_every_valid_guess_count():
    for n in range(1, 7):
        assert list(parse_line(f"{n}/6: Alice")) == [ScoreRecord(ByName("Alice"), n)]


def test_line_lowercase_x_does_not_match():
    assert list(parse_line("x/6: Alice")) == []


def test_line_with_prefix():
    line = f"👑 2/6: <@{SNOWFLAKE}> @Bob"
    assert list(parse_line(line)) == [
        ScoreRecord(ById(SNOWFLAKE), 2),
        ScoreRecord(ByName("Bob"), 2),
    ]


def test_line_mixed_separators():
    records = list(parse_line("4/6: Ann,,  Ben ,\tCat"))
    assert [r.user for r in records] == [ByName("Ann"), ByName("Ben"), ByName("Cat")]
    assert all(r.score == 4 for r in records)


def test_line_empty_users_block():
    assert list(parse_line("5/6: ")) == []
    assert list(parse_line("5/6: , ,")) == []


def test_line_duplicates_are_kept():
    assert len(list(parse_line("1/6: Bob Bob"))) == 2


# --- parse_message ---


def test_message_multiple_lines():
    content = "\n".join(
        [
            "**Your group is on a 12 day streak!** 🔥 Here are yesterday's results:",
            "👑 3/6: <@123>",
            "4/6: Bob <@456>",
            "X/6: Carl",
        ]
    )
    records = list(parse_message(content))
    assert records == [
        ScoreRecord(ById(123), 3),
        ScoreRecord(ByName("Bob"), 4),
        ScoreRecord(ById(456), 4),
        ScoreRecord(ByName("Carl"), None),
    ]


def test_message_same_user_on_two_lines():
    records = list(parse_message("3/6: Bob\n3/6: Bob"))
    assert records == [ScoreRecord(ByName("Bob"), 3)] * 2


def test_message_without_recaps():
    assert list(parse_message("good morning\nanyone up for wordle?")) == []
