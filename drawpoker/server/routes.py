"""
HTTP API Routes for DrawPoker.

A single local table: one human seat against the computer opponent.
Every command returns the table state after the opponent has responded.
"""

from typing import Any, Dict, Optional
from fastapi import APIRouter, HTTPException
import logging
import random

from drawpoker.core.game import DrawPokerGame, ActionResult
from drawpoker.core.rules import ActionType, BETTING_ACTIONS, GameConfig
from drawpoker.server.schemas import (
    NewGameRequest, ActionRequest, DrawRequest, ActionResultSchema, HistorySchema,
)

router = APIRouter()
logger = logging.getLogger(__name__)

# Global table for single-player mode
_game: Optional[DrawPokerGame] = None


def get_game() -> DrawPokerGame:
    """Get the current game instance."""
    global _game
    if _game is None:
        raise HTTPException(status_code=400, detail="Game not initialized")
    return _game


def _respond(game: DrawPokerGame, result: ActionResult) -> Dict[str, Any]:
    if not result.success:
        raise HTTPException(status_code=400, detail=result.message)
    return ActionResultSchema(
        success=True,
        message=result.message,
        action_type=result.action_type.value if result.action_type else None,
        amount=result.amount,
        state=game.get_state(),
    ).model_dump()


@router.post("/game")
async def new_game(req: NewGameRequest) -> Dict[str, Any]:
    """
    Create a table with the given settings.

    Replaces any existing table; match history is carried over.
    """
    global _game

    try:
        config = GameConfig(
            small_bet=req.small_bet,
            big_bet=req.big_bet,
            ante=req.ante,
            starting_chips=req.starting_chips,
            target_score=req.target_score,
            player_name=req.player_name,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    history = _game.history if _game is not None else None
    rng = random.Random(req.seed) if req.seed is not None else None
    _game = DrawPokerGame(config=config, rng=rng, history=history)
    logger.info("New table created")
    return {"success": True, "message": "Game created", "state": _game.get_state()}


@router.get("/state")
async def get_state() -> Dict[str, Any]:
    """Current table state with the opponent's face-down cards hidden."""
    return get_game().get_state()


@router.post("/match/start")
async def start_match() -> Dict[str, Any]:
    game = get_game()
    return _respond(game, game.start_new_match())


@router.post("/hand/start")
async def start_hand() -> Dict[str, Any]:
    game = get_game()
    return _respond(game, game.start_hand())


@router.post("/action")
async def take_action(req: ActionRequest) -> Dict[str, Any]:
    """
    Take a betting action for the human seat.

    The opponent's response (if any) is applied before returning.
    """
    game = get_game()

    try:
        action_type = ActionType(req.action_type.upper())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid action type: {req.action_type}")
    if action_type not in BETTING_ACTIONS:
        raise HTTPException(status_code=400, detail="Use /draw to replace cards")

    return _respond(game, game.take_action(action_type, req.amount or 0))


@router.get("/legal_actions")
async def get_legal_actions() -> Dict[str, Any]:
    """Legal actions for the human seat."""
    return {"actions": get_game().legal_actions()}


@router.post("/cards/{index}/toggle")
async def toggle_card(index: int) -> Dict[str, Any]:
    game = get_game()
    return _respond(game, game.toggle_card_selection(index))


@router.post("/draw")
async def draw(req: DrawRequest) -> Dict[str, Any]:
    game = get_game()
    return _respond(game, game.draw(req.indices))


@router.post("/continue")
async def continue_game() -> Dict[str, Any]:
    """Deal the next hand, or close a decided match."""
    game = get_game()
    return _respond(game, game.continue_to_next_hand())


@router.post("/match/reset")
async def reset_match() -> Dict[str, Any]:
    game = get_game()
    return _respond(game, game.reset_match())


@router.get("/history")
async def get_history() -> Dict[str, Any]:
    """Finished matches for the client to persist."""
    game = get_game()
    return HistorySchema(matches=[r.to_dict() for r in game.history]).model_dump()


@router.post("/reset_game")
async def reset_game() -> Dict[str, Any]:
    """
    Drop the table (for development/testing).
    """
    global _game
    _game = None
    return {"success": True, "message": "Game reset"}
