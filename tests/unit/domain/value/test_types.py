"""Unit tests for vote and content value types."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from stackit.domain.error import InvalidArgumentError
from stackit.domain.value import (
    TagName,
    TargetKind,
    Username,
    VoteDirection,
    VoteState,
    VoteTally,
    parse_identifier,
)


class TestVoteDirection:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("upvote", VoteDirection.UP),
            ("up", VoteDirection.UP),
            (" UP ", VoteDirection.UP),
            ("downvote", VoteDirection.DOWN),
            ("down", VoteDirection.DOWN),
            (VoteDirection.DOWN, VoteDirection.DOWN),
        ],
    )
    def test_parse_accepts_values_and_aliases(self, raw, expected):
        assert VoteDirection.parse(raw) is expected

    @pytest.mark.parametrize("raw", [None, "", "sideways", "1", 1, 0, ["upvote"]])
    def test_parse_rejects_unknown(self, raw):
        with pytest.raises(InvalidArgumentError) as exc_info:
            VoteDirection.parse(raw)

        assert exc_info.value.field == "vote_type"

    def test_opposite(self):
        assert VoteDirection.UP.opposite is VoteDirection.DOWN
        assert VoteDirection.DOWN.opposite is VoteDirection.UP


class TestTargetKind:
    def test_parse_is_case_insensitive(self):
        assert TargetKind.parse("Answer") is TargetKind.ANSWER

    @pytest.mark.parametrize("raw", [None, "comment", "post", 3.5, 1, b"question"])
    def test_parse_rejects_non_votable_kinds(self, raw):
        with pytest.raises(InvalidArgumentError) as exc_info:
            TargetKind.parse(raw)

        assert exc_info.value.field == "target_type"


class TestVoteState:
    def test_of_direction(self):
        assert VoteState.of(None) is VoteState.NONE
        assert VoteState.of(VoteDirection.UP) is VoteState.UPVOTE
        assert VoteState.of(VoteDirection.DOWN) is VoteState.DOWNVOTE


class TestVoteTally:
    def test_score_is_up_minus_down(self):
        assert VoteTally(up=5, down=2).score == 3
        assert VoteTally().score == 0


class TestParseIdentifier:
    def test_accepts_uuid_and_string(self):
        value = uuid4()

        assert parse_identifier(value, "target_id") == value
        assert parse_identifier(str(value), "target_id") == value

    @pytest.mark.parametrize("raw", [None, "", "abc", "1234"])
    def test_rejects_malformed(self, raw):
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_identifier(raw, "target_id")

        assert exc_info.value.field == "target_id"


class TestTagName:
    def test_normalized_to_lowercase(self):
        assert TagName("  FastAPI ").root == "fastapi"

    @pytest.mark.parametrize("raw", ["", "-leading", "has space", "x" * 31])
    def test_rejects_invalid(self, raw):
        with pytest.raises(ValidationError):
            TagName(raw)


class TestUsername:
    @pytest.mark.parametrize("raw", ["bob", "jane_doe", "a.b-c", "x" * 50])
    def test_accepts_valid(self, raw):
        assert Username(raw).root == raw

    @pytest.mark.parametrize("raw", ["ab", "x" * 51, "white space", "emoji🙂"])
    def test_rejects_invalid(self, raw):
        with pytest.raises(ValidationError):
            Username(raw)
