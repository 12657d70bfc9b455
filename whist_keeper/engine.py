from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Dict, Iterator, List, Optional

from .errors import PhaseError, ValidationError
from .journal import RoundJournal
from .rules import (
    TRICK_TOTAL_MESSAGE,
    BidTotalRule,
    clamp,
    score_round,
    validate_bid_total,
    validate_trick_total,
)
from .state import GameState, Phase, Round, WorkingState, ordered
from .suits import MAX_BID, MIN_LEAD_BID, NUM_PLAYERS, TRICKS_PER_ROUND, Suit, parse_suit

logger = logging.getLogger(__name__)


class ScoreKeeper:
    """
    Keeps score for one Whist game: player registry, round ledger and the
    lead bidder -> bid -> trick phase cycle.

    Every operation either succeeds and clears ``error``, or raises
    :class:`ValidationError` and leaves its message in ``error`` with the
    state untouched. Nothing here renders anything; a UI calls these methods
    and reads the accessors.
    """

    def __init__(
        self,
        bid_rule: BidTotalRule = BidTotalRule.FORBID_THIRTEEN,
        journal: Optional[RoundJournal] = None,
        game_label: Optional[str] = None,
    ) -> None:
        self.bid_rule = bid_rule
        self.journal = journal
        self.game_label = game_label

        self.game_state = GameState()
        self.error = ""
        self._phase = Phase.LEAD_BIDDER
        self._working = WorkingState.fresh([])

    # -------------------------------------------------------------------------
    # Read accessors
    # -------------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def players(self) -> List[str]:
        return list(self.game_state.players)

    @property
    def started(self) -> bool:
        return bool(self.game_state.players)

    @property
    def rounds(self) -> List[Round]:
        return list(self.game_state.rounds)

    @property
    def round_number(self) -> int:
        return len(self.game_state.rounds)

    @property
    def current_bids(self) -> Dict[str, int]:
        return dict(self._working.bids)

    @property
    def current_tricks(self) -> Dict[str, int]:
        return dict(self._working.tricks)

    @property
    def lead_bidder(self) -> Optional[str]:
        return self._working.lead_bidder

    @property
    def lead_bid(self) -> int:
        return self._working.lead_bid

    @property
    def trump(self) -> Suit:
        return self._working.trump

    def totals(self) -> Dict[str, int]:
        return self.game_state.totals()

    # -------------------------------------------------------------------------
    # Player registry
    # -------------------------------------------------------------------------

    def set_player_names(self, names: List[str]) -> None:
        with self._operation("start the game"):
            if self.started:
                raise ValidationError("Player names are already set.")
            if len(names) != NUM_PLAYERS:
                raise ValidationError(
                    f"Whist needs exactly {NUM_PLAYERS} players; got {len(names)}."
                )
            cleaned = [(name or "").strip() for name in names]
            if not all(cleaned):
                raise ValidationError("Please enter names for all players.")
            if len(set(cleaned)) != len(cleaned):
                raise ValidationError("Player names must be unique.")

            self.game_state.players = cleaned
            self._reset_working_state()
        logger.info(
            "Started game%s with players %s",
            f" {self.game_label}" if self.game_label else "",
            ", ".join(cleaned),
        )

    # -------------------------------------------------------------------------
    # Lead bidder phase
    # -------------------------------------------------------------------------

    def choose_lead_bidder(self, player: str) -> None:
        with self._operation("choose the lead bidder", Phase.LEAD_BIDDER):
            self._require_player(player)
            self._working = replace(self._working, lead_bidder=player)

    def adjust_lead_bid(self, delta: int) -> int:
        with self._operation("adjust the lead bid", Phase.LEAD_BIDDER):
            value = clamp(self._working.lead_bid + delta, MIN_LEAD_BID, MAX_BID)
            self._working = replace(self._working, lead_bid=value)
        return value

    def set_trump(self, suit: str | Suit) -> Suit:
        with self._operation("set the trump suit", Phase.LEAD_BIDDER):
            try:
                trump = parse_suit(suit)
            except ValueError as exc:
                raise ValidationError(str(exc)) from None
            self._working = replace(self._working, trump=trump)
        return trump

    def confirm_lead_bidder(self) -> None:
        with self._operation("confirm the lead bidder", Phase.LEAD_BIDDER):
            lead = self._working.lead_bidder
            if lead is None:
                raise ValidationError("Please select a lead bidder.")
            bids = {**self._working.bids, lead: self._working.lead_bid}
            self._working = replace(self._working, bids=bids)
            self._phase = Phase.BID
        logger.debug(
            "Lead bidder %s bids %d in %s",
            lead,
            self._working.lead_bid,
            self._working.trump,
        )

    def select_lead_bidder(self, player: str, bid: int, suit: str | Suit) -> None:
        """Pick lead bidder, opening bid and trump in one call, then confirm."""
        with self._operation("select the lead bidder", Phase.LEAD_BIDDER):
            self._require_player(player)
            if not MIN_LEAD_BID <= bid <= MAX_BID:
                raise ValidationError(
                    f"The lead bid must be between {MIN_LEAD_BID} and {MAX_BID}."
                )
            try:
                trump = parse_suit(suit)
            except ValueError as exc:
                raise ValidationError(str(exc)) from None
        self._working = replace(
            self._working, lead_bidder=player, lead_bid=bid, trump=trump
        )
        self.confirm_lead_bidder()

    # -------------------------------------------------------------------------
    # Bid and trick phases
    # -------------------------------------------------------------------------

    def adjust_bid(self, player: str, delta: int) -> int:
        with self._operation("adjust a bid", Phase.BID):
            self._require_player(player)
            value = clamp(self._working.bids.get(player, 0) + delta)
            self._working = replace(
                self._working, bids={**self._working.bids, player: value}
            )
        return value

    def submit_bids(self) -> Round:
        with self._operation("submit bids", Phase.BID):
            bids = ordered(self.game_state.players, self._working.bids)
            total_bids = sum(bids.values())
            validate_bid_total(total_bids, self.bid_rule)

            round_ = Round(
                lead_bidder=self._working.lead_bidder,
                lead_bid=self._working.lead_bid,
                trump=self._working.trump,
                bids=bids,
                total_bids=total_bids,
            )
            self.game_state.rounds.append(round_)
            # Tricks start out equal to the bids; the operator corrects misses.
            self._working = replace(self._working, tricks=dict(bids))
            self._phase = Phase.TRICK
        logger.debug("Round %d bids: %s (total %d)", self.round_number, bids, total_bids)
        return round_

    def adjust_tricks(self, player: str, delta: int) -> int:
        with self._operation("adjust tricks", Phase.TRICK):
            self._require_player(player)
            value = clamp(self._working.tricks.get(player, 0) + delta)
            self._working = replace(
                self._working, tricks={**self._working.tricks, player: value}
            )
        # Live hint while the operator is still entering tricks.
        if sum(self._working.tricks.values()) != TRICKS_PER_ROUND:
            self.error = TRICK_TOTAL_MESSAGE
        return value

    def submit_tricks(self) -> Round:
        with self._operation("submit tricks", Phase.TRICK):
            players = self.game_state.players
            tricks = ordered(players, self._working.tricks)
            validate_trick_total(sum(tricks.values()))

            rounds = self.game_state.rounds
            round_ = rounds[-1]
            previous = rounds[-2].scores if len(rounds) > 1 else None
            deltas, scores = score_round(
                players, round_.bids, tricks, round_.total_bids, previous
            )
            round_.tricks = tricks
            round_.deltas = deltas
            round_.scores = scores

            self._reset_working_state()

        logger.info(
            "Scored round %d%s: %s",
            self.round_number,
            f" of {self.game_label}" if self.game_label else "",
            ", ".join(f"{name}={total}" for name, total in scores.items()),
        )
        if self.journal is not None:
            self.journal.log_round(self.round_number, round_)
        return round_

    def delete_last_round(self) -> Round:
        with self._operation("delete a round", Phase.LEAD_BIDDER):
            if not self.game_state.rounds:
                raise ValidationError("There is no round to delete.")
            round_number = self.round_number
            removed = self.game_state.rounds.pop()
            self._reset_working_state()
        logger.info("Deleted round %d", round_number)
        if self.journal is not None:
            self.journal.log_deletion(round_number)
        return removed

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    @contextmanager
    def _operation(
        self,
        description: str,
        phase: Optional[Phase] = None,
    ) -> Iterator[None]:
        """Check phase, then record the outcome of the wrapped operation."""
        try:
            if phase is not None:
                if not self.started:
                    raise ValidationError("Player names have not been set.")
                if self._phase != phase:
                    raise PhaseError(description, self._phase)
            yield
        except ValidationError as exc:
            self.error = str(exc)
            logger.debug("Rejected %s: %s", description, exc)
            if self.journal is not None:
                self.journal.log_rejection(
                    description,
                    self.error,
                    self.round_number or None,
                    values=self._entered_values(),
                )
            raise
        self.error = ""

    def _entered_values(self) -> Optional[Dict[str, int]]:
        """Working values the operator is currently editing, if any."""
        if self._phase == Phase.BID:
            return dict(self._working.bids)
        if self._phase == Phase.TRICK:
            return dict(self._working.tricks)
        return None

    def _require_player(self, player: str) -> None:
        if player not in self.game_state.players:
            raise ValidationError(f"Unknown player '{player}'.")

    def _reset_working_state(self) -> None:
        self._working = WorkingState.fresh(self.game_state.players)
        self._phase = Phase.LEAD_BIDDER
