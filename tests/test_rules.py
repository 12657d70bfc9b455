import pytest

from whist_keeper.errors import ValidationError
from whist_keeper.rules import (
    NIL_PENALTIES,
    BidTotalRule,
    any_player_met_bid,
    clamp,
    score,
    score_round,
    validate_bid_total,
    validate_trick_total,
)


def test_nil_bid_made():
    # Table underbid: full nil bonus
    assert score(0, 0, total_bids=12, any_player_met_bid=True) == 50
    # Table at or over 13: reduced bonus
    assert score(0, 0, total_bids=13, any_player_met_bid=True) == 25
    assert score(0, 0, total_bids=15, any_player_met_bid=True) == 25


def test_nil_bid_broken_penalties():
    assert score(0, 3, total_bids=10, any_player_met_bid=True) == -30
    for tricks in range(1, 6):
        assert (
            score(0, tricks, total_bids=10, any_player_met_bid=True)
            == NIL_PENALTIES[tricks - 1]
        )
    assert score(0, 1, total_bids=10, any_player_met_bid=True) == -50
    assert score(0, 5, total_bids=10, any_player_met_bid=True) == -10


def test_nil_bid_six_or_more_tricks_is_free():
    for tricks in range(6, 14):
        assert score(0, tricks, total_bids=10, any_player_met_bid=True) == 0


def test_positive_bid_made_and_missed():
    assert score(5, 5, total_bids=10, any_player_met_bid=True) == 35
    assert score(13, 13, total_bids=13, any_player_met_bid=True) == 179
    assert score(5, 3, total_bids=10, any_player_met_bid=True) == -20
    assert score(2, 7, total_bids=10, any_player_met_bid=True) == -50


def test_void_round_when_nobody_met_bid():
    for bid in (0, 1, 5, 13):
        for tricks in (0, 3, 6, 13):
            for total in (5, 13, 20):
                assert score(bid, tricks, total, any_player_met_bid=False) == 0


def test_clamp_bounds():
    assert clamp(-4) == 0
    assert clamp(14) == 13
    assert clamp(7) == 7
    assert clamp(3, 5, 13) == 5


def test_any_player_met_bid():
    bids = {"A": 3, "B": 4, "C": 0, "D": 5}
    assert any_player_met_bid(bids, {"A": 3, "B": 0, "C": 5, "D": 5})
    assert not any_player_met_bid(bids, {"A": 4, "B": 3, "C": 1, "D": 6})


def test_score_round_accumulates_on_previous_totals():
    players = ["A", "B", "C", "D"]
    bids = {"A": 5, "B": 3, "C": 0, "D": 4}
    tricks = {"A": 5, "B": 4, "C": 0, "D": 4}

    deltas, totals = score_round(players, bids, tricks, total_bids=12)
    assert deltas == {"A": 35, "B": -10, "C": 50, "D": 26}
    assert totals == deltas
    assert list(totals) == players

    previous = {"A": 10, "B": -20, "C": 0, "D": 5}
    _, totals = score_round(players, bids, tricks, 12, previous_scores=previous)
    assert totals == {"A": 45, "B": -30, "C": 50, "D": 31}


def test_score_round_void_when_all_miss():
    players = ["A", "B", "C", "D"]
    bids = {"A": 5, "B": 3, "C": 1, "D": 2}
    tricks = {"A": 4, "B": 4, "C": 2, "D": 3}
    deltas, totals = score_round(players, bids, tricks, 11, {"A": 7})
    assert set(deltas.values()) == {0}
    assert totals == {"A": 7, "B": 0, "C": 0, "D": 0}


def test_bid_total_rules():
    validate_bid_total(12, BidTotalRule.FORBID_THIRTEEN)
    with pytest.raises(ValidationError, match="cannot be 13"):
        validate_bid_total(13, BidTotalRule.FORBID_THIRTEEN)

    validate_bid_total(13, BidTotalRule.REQUIRE_THIRTEEN)
    with pytest.raises(ValidationError, match="must be 13"):
        validate_bid_total(12, BidTotalRule.REQUIRE_THIRTEEN)

    for total in (0, 13, 40):
        validate_bid_total(total, BidTotalRule.ANY)


def test_trick_total_must_be_thirteen():
    validate_trick_total(13)
    for total in (0, 12, 14):
        with pytest.raises(ValidationError, match="must be 13"):
            validate_trick_total(total)
