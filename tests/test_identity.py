"""Tests for resolving player names to member ids."""

from wordle_stats.identity import determine_user, resolve_records
from wordle_stats.models import ById, ByName, GuildMember, ScoreRecord

MEMBERS = [
    GuildMember(user_id=5, display_name="Bob"),
    GuildMember(user_id=7, display_name="alice99", nickname="Alice"),
    GuildMember(user_id=9, display_name="Bob2", nickname="Bob"),
]


# --- determine_user ---


def test_match_on_display_name():
    assert determine_user(MEMBERS, "Bob") == 5


def test_match_on_nickname():
    assert determine_user(MEMBERS, "Alice") == 7
    assert determine_user(MEMBERS, "alice99") == 7


def test_no_match():
    assert determine_user(MEMBERS, "Zara") is None


def test_match_is_exact():
    assert determine_user(MEMBERS, "bob") is None
    assert determine_user(MEMBERS, "Bob ") is None


def test_first_match_wins():
    members = [
        GuildMember(user_id=1, display_name="x", nickname="Sam"),
        GuildMember(user_id=2, display_name="Sam"),
    ]
    assert determine_user(members, "Sam") == 1


def test_empty_member_list():
    assert determine_user([], "Bob") is None


# --- resolve_records ---


def test_resolve_records_upgrades_known_names():
    records = [
        ScoreRecord(ByName("Bob"), 3),
        ScoreRecord(ByName("Zara"), 4),
        ScoreRecord(ById(42), None),
    ]
    assert resolve_records(records, MEMBERS) == [
        ScoreRecord(ById(5), 3),
        ScoreRecord(ByName("Zara"), 4),
        ScoreRecord(ById(42), None),
    ]


def test_resolve_records_does_not_mutate_input():
    original = ScoreRecord(ByName("Bob"), 3)
    resolve_records([original], MEMBERS)
    assert original.user == ByName("Bob")


def test_resolve_leaves_id_records_alone():
    assert resolve_records([ScoreRecord(ById(42), 2)], MEMBERS) == [ScoreRecord(ById(42), 2)]
