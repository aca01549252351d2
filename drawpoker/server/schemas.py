"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from drawpoker.core.rules import (
    DEFAULT_SMALL_BET, DEFAULT_BIG_BET, DEFAULT_ANTE,
    DEFAULT_STARTING_CHIPS, DEFAULT_TARGET_SCORE,
)


# ============= Request Schemas =============

class NewGameRequest(BaseModel):
    """Request to create a table with custom settings."""
    small_bet: int = Field(gt=0, default=DEFAULT_SMALL_BET)
    big_bet: int = Field(gt=0, default=DEFAULT_BIG_BET)
    ante: int = Field(ge=0, default=DEFAULT_ANTE)
    starting_chips: int = Field(gt=0, default=DEFAULT_STARTING_CHIPS)
    target_score: int = Field(gt=0, default=DEFAULT_TARGET_SCORE)
    player_name: str = "You"
    seed: Optional[int] = Field(default=None, description="Seed for reproducible deals")


class ActionRequest(BaseModel):
    """Request to take a betting action."""
    action_type: str = Field(..., description="Action type: FOLD, CHECK, CALL, BET, RAISE")
    amount: Optional[int] = Field(default=0, ge=0, description="Bet size, or raise increment")


class DrawRequest(BaseModel):
    """Request to replace cards; omit indices to use the toggled selection."""
    indices: Optional[List[int]] = None


# ============= Response Schemas =============

class ActionResultSchema(BaseModel):
    """Result of a command, with the table state after the opponent responded."""
    success: bool
    message: str
    action_type: Optional[str] = None
    amount: int = 0
    state: dict


class MatchRecordSchema(BaseModel):
    """One finished match."""
    date: str
    result: str
    player_score: int
    opponent_score: int


class HistorySchema(BaseModel):
    """Finished matches, newest first."""
    matches: List[MatchRecordSchema]
