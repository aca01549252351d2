"""
5-Card Draw Engine - Pure State Machine.

Every operation takes a GameState and returns a new GameState; nothing
is mutated in place. An illegal command raises IllegalActionError and
leaves the caller's snapshot untouched.

Phase flow for one hand:

    IDLE -> DEALING -> BETTING(1) -> DRAWING -> BETTING(2) -> SHOWDOWN -> GAME_OVER

A fold during either betting round goes straight to GAME_OVER.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple
import logging
import random

from drawpoker.core.card import Card, Deck, DECK_SIZE
from drawpoker.core.errors import IllegalActionError, InvariantViolationError
from drawpoker.core.hand import evaluate_hand, describe_evaluation
from drawpoker.core.player import Seat
from drawpoker.core.rules import (
    GameConfig, GamePhase, ActionType,
    PLAYER, OPPONENT, TIE, HAND_SIZE, MAX_DRAW,
    FIRST_ROUND, FINAL_ROUND, other_seat,
)
from drawpoker.core.state import (
    BettingRound, GameState, HandResult, MatchRecord, MatchState,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Action:
    """
    A command from one seat.

    ``amount`` is the bet size for BET and the increment for RAISE.
    ``indices`` are the card positions to replace for DRAW.
    """
    seat: str
    action_type: ActionType
    amount: int = 0
    indices: Optional[Tuple[int, ...]] = None


# ============= Game and hand lifecycle =============

def new_game(config: Optional[GameConfig] = None) -> GameState:
    """A fresh table in the IDLE phase with zeroed match scores."""
    config = config or GameConfig()
    return GameState(
        config=config,
        player=Seat(PLAYER, config.player_name, config.starting_chips),
        opponent=Seat(OPPONENT, config.opponent_name, config.starting_chips),
        match=MatchState(target_score=config.target_score),
    )


def start_hand(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    """
    Shuffle, deal 5 cards to each seat, collect antes and open round 1.

    Stacks are re-issued at the configured starting chips every hand;
    only the match score carries over.
    """
    if state.phase not in (GamePhase.IDLE, GamePhase.GAME_OVER):
        raise IllegalActionError("Cannot start a hand while one is in progress")
    if state.match.winner is not None:
        raise IllegalActionError("The match is decided; continue to start a new match")

    config = state.config
    hand_number = state.hand_number + 1
    logger.info(f"Starting hand #{hand_number}")

    state = replace(
        state,
        phase=GamePhase.DEALING,
        hand_number=hand_number,
        winner=None,
        drawing_seat=None,
        selected_cards=(),
        last_result=None,
        finished_match=None,
    )

    deck = Deck(rng=rng)
    player_cards = deck.deal(HAND_SIZE)
    opponent_cards = deck.deal(HAND_SIZE)

    # Antes go straight into the pot; they are not part of a round bet
    ante = config.ante
    player = state.player.new_hand(config.starting_chips - ante, player_cards, face_up=True)
    opponent = state.opponent.new_hand(config.starting_chips - ante, opponent_cards, face_up=False)
    pot = ante * 2
    logger.debug(f"Antes collected: {ante} each, pot={pot}")

    state = replace(
        state,
        phase=GamePhase.BETTING,
        deck=tuple(deck.cards),
        player=replace(player, is_active=True),
        opponent=opponent,
        pot=pot,
        betting_round=BettingRound(
            round=FIRST_ROUND, current_bet=0, pot=pot, active_player=PLAYER,
        ),
        message="",
    )
    _check_cards(state)
    return state


def start_new_match(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    """Zero the match scores and deal the first hand, abandoning any hand in play."""
    logger.info("Starting new match")
    state = _reset_to_idle(state)
    return start_hand(state, rng)


def reset_match(state: GameState) -> GameState:
    """Zero the match scores and return to the IDLE phase."""
    return _reset_to_idle(state)


def continue_to_next_hand(
    state: GameState,
    rng: Optional[random.Random] = None,
    today: Optional[str] = None,
) -> GameState:
    """
    Leave GAME_OVER.

    While the match is undecided this deals the next hand. Once a seat
    has reached the target score, the finished match is recorded in
    ``finished_match`` and the table returns to IDLE with zeroed scores.
    """
    if state.phase != GamePhase.GAME_OVER:
        raise IllegalActionError("The hand is not over yet")

    match = state.match
    if match.winner is None:
        return start_hand(state, rng)

    record = MatchRecord(
        date=today or date.today().isoformat(),
        result="win" if match.winner == PLAYER else "loss",
        player_score=match.player_score,
        opponent_score=match.opponent_score,
    )
    logger.info(f"Match finished: {record.result} {record.player_score}-{record.opponent_score}")
    return replace(_reset_to_idle(state), finished_match=record)


def _reset_to_idle(state: GameState) -> GameState:
    config = state.config
    return replace(
        state,
        phase=GamePhase.IDLE,
        deck=(),
        player=Seat(PLAYER, config.player_name, config.starting_chips),
        opponent=Seat(OPPONENT, config.opponent_name, config.starting_chips),
        pot=0,
        betting_round=None,
        winner=None,
        drawing_seat=None,
        selected_cards=(),
        match=MatchState(target_score=config.target_score),
        last_result=None,
        finished_match=None,
        message="",
    )


# ============= Seat actions =============

def apply_action(state: GameState, action: Action, lenient: bool = False) -> GameState:
    """
    Apply one seat action and return the resulting snapshot.

    Args:
        state: Current snapshot
        action: The command to apply
        lenient: Clamp out-of-range amounts instead of rejecting them
            (bets and raises to the round cap, calls and raises to the
            actor's stack). Used for the computer seat.

    Raises:
        IllegalActionError: The action is not legal in this state.
    """
    if action.action_type == ActionType.DRAW:
        return draw(state, action.seat, action.indices)

    if state.phase != GamePhase.BETTING or state.betting_round is None:
        raise IllegalActionError("No betting round in progress")
    if action.seat != state.betting_round.active_player:
        raise IllegalActionError(f"Not {action.seat}'s turn")

    handler = _BETTING_HANDLERS.get(action.action_type)
    if handler is None:
        raise IllegalActionError(f"Unknown action: {action.action_type}")

    new_state = handler(state, action.seat, action.amount, lenient)

    if new_state.total_chips != state.total_chips:
        raise InvariantViolationError(
            f"Chip total changed from {state.total_chips} to {new_state.total_chips}"
        )
    logger.debug(
        f"{action.seat} {action.action_type.value} {action.amount}: "
        f"pot={new_state.pot} phase={new_state.phase.name}"
    )
    return new_state


def _bet(state: GameState, seat_id: str, amount: int, lenient: bool) -> GameState:
    betting_round = state.betting_round
    if betting_round.current_bet != 0:
        raise IllegalActionError("Cannot bet when there's already a bet, use RAISE")

    cap = state.round_cap
    actor = state.seat(seat_id)
    if lenient:
        amount = min(amount, cap, actor.chips)
    if amount <= 0:
        raise IllegalActionError("Bet amount must be positive")
    if amount > cap:
        raise IllegalActionError(f"Bet exceeds the round limit of {cap}")
    if amount > actor.chips:
        raise IllegalActionError(f"Cannot bet more than stack ({actor.chips})")

    state = _put_in_pot(state, seat_id, amount, f"BET {amount}")
    state = _update_round(state, current_bet=amount, last_action=ActionType.BET)
    return _pass_turn(state, seat_id)


def _check(state: GameState, seat_id: str, amount: int, lenient: bool) -> GameState:
    betting_round = state.betting_round
    if betting_round.current_bet != 0:
        raise IllegalActionError(
            f"Cannot check, must call {state.amount_to_call(seat_id)}"
        )

    other_checked = betting_round.last_action == ActionType.CHECK
    state = state.with_seat(replace(state.seat(seat_id), last_action="CHECK"))
    state = _update_round(state, last_action=ActionType.CHECK)
    if other_checked:
        return _close_round(state)
    return _pass_turn(state, seat_id)


def _call(state: GameState, seat_id: str, amount: int, lenient: bool) -> GameState:
    to_call = state.amount_to_call(seat_id)
    if to_call <= 0:
        raise IllegalActionError("Nothing to call, use CHECK")

    actor = state.seat(seat_id)
    if to_call > actor.chips:
        if not lenient:
            raise IllegalActionError("Insufficient chips to call")
        # All-in for whatever is left
        to_call = actor.chips

    state = _put_in_pot(state, seat_id, to_call, f"CALL {to_call}")
    state = _update_round(state, last_action=ActionType.CALL)
    return _close_round(state)


def _raise(state: GameState, seat_id: str, increment: int, lenient: bool) -> GameState:
    betting_round = state.betting_round
    if betting_round.current_bet == 0:
        raise IllegalActionError("No bet to raise, use BET")

    cap = state.round_cap
    actor = state.seat(seat_id)
    new_total = betting_round.current_bet + increment

    if lenient:
        new_total = min(new_total, cap, actor.current_bet + actor.chips)
        if new_total <= betting_round.current_bet:
            # No room left under the cap or in the stack: settle as a call
            return _call(state, seat_id, 0, lenient)
    else:
        if increment <= 0:
            raise IllegalActionError("Raise increment must be positive")
        if new_total > cap:
            raise IllegalActionError(f"Raise exceeds the round limit of {cap}")
        if new_total - actor.current_bet > actor.chips:
            raise IllegalActionError("Insufficient chips to raise")

    state = _put_in_pot(state, seat_id, new_total - actor.current_bet, f"RAISE {new_total}")
    state = _update_round(state, current_bet=new_total, last_action=ActionType.RAISE)
    return _pass_turn(state, seat_id)


def _fold(state: GameState, seat_id: str, amount: int, lenient: bool) -> GameState:
    winner_id = other_seat(seat_id)
    pot = state.pot

    folder = replace(state.seat(seat_id), has_folded=True, last_action="FOLD")
    state = state.with_seat(folder)
    state = _update_round(state, last_action=ActionType.FOLD)
    state = _reveal_all(state)

    payouts = {seat_id: 0, winner_id: pot}
    result = HandResult(
        winner=winner_id,
        pot=pot,
        player_won=payouts[PLAYER],
        opponent_won=payouts[OPPONENT],
        by_fold=True,
    )
    logger.info(f"{seat_id} folds, {winner_id} takes {pot}")
    return _finish_hand(state, result)


_BETTING_HANDLERS: Dict[ActionType, Callable[[GameState, str, int, bool], GameState]] = {
    ActionType.BET: _bet,
    ActionType.CHECK: _check,
    ActionType.CALL: _call,
    ActionType.RAISE: _raise,
    ActionType.FOLD: _fold,
}


def _put_in_pot(state: GameState, seat_id: str, amount: int, label: str) -> GameState:
    seat = state.seat(seat_id).pay(amount, label)
    pot = state.pot + amount
    state = state.with_seat(seat)
    return replace(state, pot=pot, betting_round=replace(state.betting_round, pot=pot))


def _update_round(state: GameState, **changes: Any) -> GameState:
    return replace(state, betting_round=replace(state.betting_round, **changes))


def _pass_turn(state: GameState, seat_id: str) -> GameState:
    next_id = other_seat(seat_id)
    state = state.with_seat(replace(state.seat(seat_id), is_active=False))
    state = state.with_seat(replace(state.seat(next_id), is_active=True))
    return _update_round(state, active_player=next_id)


def _close_round(state: GameState) -> GameState:
    """Both seats are level: go to the draw after round 1, else to showdown."""
    if state.betting_round.round < FINAL_ROUND:
        logger.debug("Betting round 1 closed, moving to the draw")
        state = _set_active(state, PLAYER)
        return replace(
            state,
            phase=GamePhase.DRAWING,
            drawing_seat=PLAYER,
            selected_cards=(),
            message="Select cards to discard, then draw",
        )
    return _showdown(state)


def _set_active(state: GameState, seat_id: Optional[str]) -> GameState:
    state = replace(
        state,
        player=replace(state.player, is_active=seat_id == PLAYER),
    )
    return replace(state, opponent=replace(state.opponent, is_active=seat_id == OPPONENT))


def _reveal_all(state: GameState) -> GameState:
    return replace(state, player=state.player.reveal(), opponent=state.opponent.reveal())


# ============= Draw phase =============

def toggle_card_selection(state: GameState, index: int) -> GameState:
    """Mark or unmark one of the human seat's cards for discard."""
    if state.phase != GamePhase.DRAWING or state.drawing_seat != PLAYER:
        raise IllegalActionError("Cards can only be selected during your draw")
    _validate_indices([index], len(state.player.hand))

    if index in state.selected_cards:
        selected = tuple(i for i in state.selected_cards if i != index)
    else:
        selected = state.selected_cards + (index,)
    return replace(state, selected_cards=selected)


def draw(
    state: GameState,
    seat_id: str,
    indices: Optional[Iterable[int]] = None,
) -> GameState:
    """
    Replace the cards at ``indices`` with cards off the top of the deck.

    An empty selection stands pat. For the human seat, ``None`` uses the
    cards marked with toggle_card_selection. After the human draws the
    computer seat draws; after both have drawn the second betting round
    opens with the human seat to act.
    """
    if state.phase != GamePhase.DRAWING:
        raise IllegalActionError("Drawing is only allowed in the draw phase")
    if seat_id != state.drawing_seat:
        raise IllegalActionError(f"Not {seat_id}'s turn to draw")

    if indices is None:
        indices = state.selected_cards if seat_id == PLAYER else ()
    indices = sorted(_validate_indices(indices, len(state.seat(seat_id).hand)))

    deck = Deck(state.deck, shuffle=False)
    replacements = {index: deck.deal_one() for index in indices}
    count = len(replacements)
    seat = replace(state.seat(seat_id).replace_cards(replacements), last_action=f"DRAW {count}")
    state = replace(state.with_seat(seat), deck=tuple(deck.cards))
    _check_cards(state)
    logger.debug(f"{seat_id} draws {count} card(s)")

    plural = "" if count == 1 else "s"
    if seat_id == PLAYER:
        state = _set_active(state, OPPONENT)
        return replace(
            state,
            drawing_seat=OPPONENT,
            selected_cards=(),
            message=f"Drew {count} card{plural}. Waiting for opponent...",
        )

    # Both seats have drawn: open the second betting round
    state = replace(
        state,
        player=replace(state.player, current_bet=0),
        opponent=replace(state.opponent, current_bet=0),
    )
    state = _set_active(state, PLAYER)
    return replace(
        state,
        phase=GamePhase.BETTING,
        drawing_seat=None,
        betting_round=BettingRound(
            round=FINAL_ROUND, current_bet=0, pot=state.pot, active_player=PLAYER,
        ),
        message=f"Opponent drew {count} card{plural}",
    )


def _validate_indices(indices: Iterable[int], hand_size: int) -> List[int]:
    result = []
    for index in indices:
        if isinstance(index, bool) or not isinstance(index, int):
            raise IllegalActionError(f"Card index must be an integer, got {index!r}")
        if not 0 <= index < hand_size:
            raise IllegalActionError(f"Card index {index} is out of range")
        if index in result:
            raise IllegalActionError(f"Card index {index} selected twice")
        result.append(index)
    if len(result) > MAX_DRAW:
        raise IllegalActionError(f"Cannot draw more than {MAX_DRAW} cards")
    return result


# ============= Showdown =============

def _showdown(state: GameState) -> GameState:
    state = replace(state, phase=GamePhase.SHOWDOWN)
    state = _reveal_all(state)

    player_eval = evaluate_hand(state.player.hand)
    opponent_eval = evaluate_hand(state.opponent.hand)
    pot = state.pot

    if player_eval > opponent_eval:
        winner, player_won, opponent_won = PLAYER, pot, 0
    elif opponent_eval > player_eval:
        winner, player_won, opponent_won = OPPONENT, 0, pot
    else:
        # Odd chip to the opponent keeps the total exact
        winner, player_won, opponent_won = TIE, pot // 2, pot - pot // 2

    result = HandResult(
        winner=winner,
        pot=pot,
        player_won=player_won,
        opponent_won=opponent_won,
        by_fold=False,
        player_hand=describe_evaluation(player_eval),
        opponent_hand=describe_evaluation(opponent_eval),
    )
    logger.info(
        f"Showdown: {result.player_hand} vs {result.opponent_hand}, winner={winner}"
    )
    return _finish_hand(state, result)


def _finish_hand(state: GameState, result: HandResult) -> GameState:
    """Pay out the pot, credit match scores and enter GAME_OVER."""
    match = state.match.credit(result.player_won, result.opponent_won)
    state = replace(
        state,
        player=replace(state.player.collect(result.player_won), is_active=False),
        opponent=replace(state.opponent.collect(result.opponent_won), is_active=False),
        pot=0,
        betting_round=replace(state.betting_round, pot=0),
        phase=GamePhase.GAME_OVER,
        winner=result.winner,
        drawing_seat=None,
        match=match,
        last_result=result,
        message=_result_message(result, match),
    )
    if match.winner is not None:
        logger.info(
            f"Match won by {match.winner} "
            f"({match.player_score}-{match.opponent_score})"
        )
    return state


def _result_message(result: HandResult, match: MatchState) -> str:
    if match.winner == PLAYER:
        return "You win the match!"
    if match.winner == OPPONENT:
        return "Opponent wins the match!"
    if result.winner == PLAYER:
        return f"You win {result.pot}!"
    if result.winner == OPPONENT:
        return f"Opponent wins {result.pot}!"
    return f"Tie! Split pot {result.player_won}/{result.opponent_won}"


# ============= Queries =============

def legal_actions(state: GameState, seat_id: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Legal actions for ``seat_id`` (default: the seat to act).

    Returns:
        List of action dicts with type and constraints
    """
    if seat_id is None:
        seat_id = state.active_seat
    if seat_id is None or seat_id != state.active_seat:
        return []

    seat = state.seat(seat_id)

    if state.phase == GamePhase.DRAWING:
        return [{"type": ActionType.DRAW.value, "max": min(MAX_DRAW, len(state.deck))}]

    actions: List[Dict[str, Any]] = [{"type": ActionType.FOLD.value}]
    cap = state.round_cap
    current_bet = state.betting_round.current_bet
    to_call = state.amount_to_call(seat_id)

    if current_bet == 0:
        actions.append({"type": ActionType.CHECK.value})
        max_bet = min(cap, seat.chips)
        if max_bet > 0:
            actions.append({"type": ActionType.BET.value, "min": 1, "max": max_bet})
    else:
        if 0 < to_call <= seat.chips:
            actions.append({"type": ActionType.CALL.value, "amount": to_call})
        max_increment = min(cap - current_bet, seat.chips - to_call)
        if max_increment > 0:
            actions.append({"type": ActionType.RAISE.value, "min": 1, "max": max_increment})

    return actions


def _check_cards(state: GameState) -> None:
    """Every card must be unique and the table can never hold more than 52."""
    cards: List[Card] = list(state.deck) + list(state.player.hand) + list(state.opponent.hand)
    if len(cards) > DECK_SIZE or len(set(cards)) != len(cards):
        raise InvariantViolationError(
            f"Card bookkeeping mismatch: {len(cards)} cards, {len(set(cards))} distinct"
        )
