"""
5-Card Draw Game Driver.

DrawPokerGame wraps the pure engine for a presentation layer: it owns
the current snapshot, turns engine errors into ActionResults, and lets
the computer opponent respond synchronously after every human command.

Usage:
    game = DrawPokerGame(rng=random.Random(42))
    game.start_new_match()

    while game.state.phase != GamePhase.GAME_OVER:
        if game.state.phase == GamePhase.DRAWING:
            game.draw([0, 1])
        else:
            game.check()

    game.continue_to_next_hand()
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence
import logging
import random

from drawpoker.core import engine
from drawpoker.core.engine import Action
from drawpoker.core.errors import IllegalActionError
from drawpoker.core.rules import (
    GameConfig, GamePhase, ActionType, PLAYER, OPPONENT, HISTORY_LIMIT,
)
from drawpoker.core.state import GameState, MatchRecord


logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Result of a player command."""
    success: bool
    message: str
    action_type: Optional[ActionType] = None
    amount: int = 0


class DrawPokerGame:
    """
    Heads-up draw poker table: the human seat against a computer agent.

    Attributes:
        state: Current immutable snapshot
        opponent_agent: Agent making the computer seat's decisions
        auto_opponent: Run the agent after each human command
        history: Finished matches, newest first (at most 50)
        hand_history: Actions taken in the current hand
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        opponent_agent=None,
        rng: Optional[random.Random] = None,
        auto_opponent: bool = True,
        history: Optional[Sequence[MatchRecord]] = None,
    ):
        """
        Initialize a new table.

        Args:
            config: Table settings (defaults to GameConfig())
            opponent_agent: BaseAgent for the computer seat
                (defaults to a HeuristicAgent sharing ``rng``)
            rng: Random source for shuffling and the default agent
            auto_opponent: If False, the computer seat must be driven
                through take_action/draw with seat="opponent"
            history: Previously persisted match records, newest first
        """
        self.rng = rng or random.Random()
        if opponent_agent is None:
            from drawpoker.agents.heuristic import HeuristicAgent
            opponent_agent = HeuristicAgent(OPPONENT, rng=self.rng)
        self.opponent_agent = opponent_agent
        self.auto_opponent = auto_opponent

        self.state: GameState = engine.new_game(config)
        self.history: List[MatchRecord] = list(history or [])[:HISTORY_LIMIT]
        self.hand_history: List[Dict[str, Any]] = []

    @property
    def config(self) -> GameConfig:
        return self.state.config

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    def snapshot(self) -> GameState:
        """The current state; snapshots are immutable and safe to keep."""
        return self.state

    def get_state(self, hide_cards: bool = True) -> Dict[str, Any]:
        """
        Get the current table state for a client.

        Args:
            hide_cards: Hide the opponent's face-down cards

        Returns:
            Snapshot dictionary plus the human seat's legal actions
        """
        data = self.state.to_dict(hide_cards=hide_cards)
        data["legal_actions"] = engine.legal_actions(self.state, PLAYER)
        data["history"] = [record.to_dict() for record in self.history]
        return data

    def legal_actions(self, seat: str = PLAYER) -> List[Dict[str, Any]]:
        return engine.legal_actions(self.state, seat)

    # ============= Match and hand flow =============

    def start_new_match(self) -> ActionResult:
        """Zero the scores and deal the first hand."""
        result = self._transition(
            lambda state: engine.start_new_match(state, self.rng), "New match"
        )
        if result.success:
            self.hand_history = []
            self._log_action("START_HAND", {"hand_number": self.state.hand_number})
            self._drive_opponent()
        return result

    def start_hand(self) -> ActionResult:
        result = self._transition(
            lambda state: engine.start_hand(state, self.rng), "Hand started"
        )
        if result.success:
            self.hand_history = []
            self._log_action("START_HAND", {"hand_number": self.state.hand_number})
            self._drive_opponent()
        return result

    def continue_to_next_hand(self) -> ActionResult:
        """
        Leave GAME_OVER: deal the next hand, or close a decided match.

        A closed match is added to ``history`` and the table returns to IDLE.
        """
        was_decided = self.state.match.winner is not None
        result = self._transition(
            lambda state: engine.continue_to_next_hand(state, self.rng), "Continue"
        )
        if not result.success:
            return result

        record = self.state.finished_match
        if was_decided and record is not None:
            self.history.insert(0, record)
            del self.history[HISTORY_LIMIT:]
            return ActionResult(True, f"Match over: {record.result}")

        self.hand_history = []
        self._log_action("START_HAND", {"hand_number": self.state.hand_number})
        self._drive_opponent()
        return result

    def reset_match(self) -> ActionResult:
        self.hand_history = []
        return self._transition(engine.reset_match, "Match reset")

    # ============= Seat commands =============

    def bet(self, amount: int) -> ActionResult:
        return self.take_action(ActionType.BET, amount)

    def check(self) -> ActionResult:
        return self.take_action(ActionType.CHECK)

    def call(self) -> ActionResult:
        return self.take_action(ActionType.CALL)

    def raise_bet(self, increment: int) -> ActionResult:
        return self.take_action(ActionType.RAISE, increment)

    def fold(self) -> ActionResult:
        return self.take_action(ActionType.FOLD)

    def take_action(
        self,
        action_type: ActionType,
        amount: int = 0,
        seat: str = PLAYER,
    ) -> ActionResult:
        """
        Apply a betting action for ``seat``.

        Args:
            action_type: BET, CHECK, CALL, RAISE or FOLD
            amount: Bet size for BET, increment for RAISE

        Returns:
            ActionResult indicating success/failure and details
        """
        if action_type == ActionType.DRAW:
            return ActionResult(False, "Use draw() to replace cards")
        if not self.state.is_hand_running():
            return ActionResult(False, "No hand in progress")

        before = self.state
        action = Action(seat, action_type, amount)
        result = self._transition(
            lambda state: engine.apply_action(state, action), action_type.value
        )
        if not result.success:
            return result

        paid = _paid(before, self.state, seat)
        self._log_action(action_type.value, {"player": seat, "amount": paid})
        self._drive_opponent()
        message = self.state.message if self.state.phase == GamePhase.GAME_OVER \
            else action_type.value
        return ActionResult(True, message, action_type, paid)

    def toggle_card_selection(self, index: int) -> ActionResult:
        return self._transition(
            lambda state: engine.toggle_card_selection(state, index), "Selection updated"
        )

    def draw(self, indices: Optional[Sequence[int]] = None, seat: str = PLAYER) -> ActionResult:
        """
        Replace cards for ``seat``.

        Args:
            indices: Positions to replace; None uses the toggled selection
        """
        if indices is None and seat == PLAYER:
            count = len(self.state.selected_cards)
        else:
            count = len(indices or ())
        result = self._transition(
            lambda state: engine.draw(state, seat, indices), "Draw"
        )
        if not result.success:
            return result

        drawn = self.state.seat(seat).last_action or ""
        self._log_action(ActionType.DRAW.value, {"player": seat, "detail": drawn})
        self._drive_opponent()
        return ActionResult(True, self.state.message, ActionType.DRAW, count)

    # ============= Internals =============

    def _transition(self, step: Callable[[GameState], GameState], message: str) -> ActionResult:
        """Run one engine step; the snapshot only changes if it succeeds."""
        try:
            new_state = step(self.state)
        except IllegalActionError as e:
            logger.debug(f"Rejected: {e}")
            return ActionResult(False, str(e))
        self.state = new_state
        return ActionResult(True, message)

    def _drive_opponent(self) -> None:
        """Let the computer seat act until it is the human's turn or the hand ends."""
        if not self.auto_opponent:
            return

        while self.state.active_seat == OPPONENT:
            if self.state.phase == GamePhase.DRAWING:
                indices = self.opponent_agent.choose_discards(self.state)
                self.state = engine.draw(self.state, OPPONENT, indices)
                self._log_action(ActionType.DRAW.value, {
                    "player": OPPONENT, "detail": self.state.opponent.last_action,
                })
                continue

            legal = engine.legal_actions(self.state, OPPONENT)
            decision = self.opponent_agent.act(self.state, legal)
            action = Action(
                OPPONENT, ActionType(decision["action"]), int(decision.get("amount", 0))
            )
            before = self.state
            try:
                self.state = engine.apply_action(self.state, action, lenient=True)
            except IllegalActionError as e:
                logger.warning(f"Opponent chose an illegal action ({e}), falling back")
                fallback = ActionType.CHECK if self.state.amount_to_call(OPPONENT) == 0 \
                    else ActionType.FOLD
                action = Action(OPPONENT, fallback)
                self.state = engine.apply_action(self.state, action, lenient=True)

            paid = _paid(before, self.state, OPPONENT)
            self._log_action(action.action_type.value, {"player": OPPONENT, "amount": paid})

        if self.state.phase == GamePhase.GAME_OVER:
            self.opponent_agent.on_hand_end(self.state)

    def _log_action(self, action: str, details: Dict[str, Any]) -> None:
        """Log an action to hand history."""
        self.hand_history.append({
            "action": action,
            "phase": self.state.phase.name,
            **details
        })


def _paid(before: GameState, after: GameState, seat: str) -> int:
    """Chips ``seat`` put in the pot between two snapshots, ignoring any payout."""
    won = 0
    if after.phase == GamePhase.GAME_OVER and after.last_result is not None:
        won = after.last_result.player_won if seat == PLAYER else after.last_result.opponent_won
    return before.seat(seat).chips - (after.seat(seat).chips - won)
