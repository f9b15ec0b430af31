"""
schema.py — Pydantic Request/Response Models
=============================================
Wire shapes for the /v1/games endpoints. Decimals go out as strings.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from guessbet.games.models import Game, Player, StakeStatus
from guessbet.games.settlement import GUESS_MAX, GUESS_MIN


# ═══════════════════════════════════════════════════
# REQUEST MODELS
# ═══════════════════════════════════════════════════

class CreateGameRequest(BaseModel):
    game_id: str | None = Field(
        default=None,
        min_length=1,
        description="Custom game id. A uuid is generated when omitted.",
    )


class PlaceBetBody(BaseModel):
    """
    Bet payload posted to /v1/games/{game_id}/bets.

    Example:
        {"nickname": "emmanuel", "number": 5, "stake": "10"}
    """
    nickname: str = Field(..., min_length=1, max_length=64)
    number: int = Field(..., ge=GUESS_MIN, le=GUESS_MAX, description="Guessed number")
    stake: Decimal = Field(..., gt=0, description="Wagered amount")


class PlaceBetRequest(PlaceBetBody):
    """In-process bet request consumed by SessionRegistry.place_bet."""
    game_id: str


# ═══════════════════════════════════════════════════
# RESPONSE MODELS
# ═══════════════════════════════════════════════════

class PlayerResponse(BaseModel):
    bet_id: str
    nickname: str
    guessed_number: int
    stake_amount: Decimal
    stake_status: StakeStatus | None = None
    end_of_game_balance: Decimal | None = None
    placed_at: str | None = None

    @classmethod
    def from_player(cls, player: Player) -> PlayerResponse:
        return cls(
            bet_id=player.bet_id,
            nickname=player.nickname,
            guessed_number=player.guessed_number,
            stake_amount=player.stake_amount,
            stake_status=player.stake_status,
            end_of_game_balance=player.end_of_game_balance,
            placed_at=player.placed_at.isoformat() if player.placed_at else None,
        )


class GameResponse(BaseModel):
    id: str
    active: bool
    correct_number: int | None = None
    created_at: str
    timeout: str
    ended_at: str | None = None
    players: dict[str, PlayerResponse]

    @classmethod
    def from_game(cls, game: Game) -> GameResponse:
        return cls(
            id=game.id,
            active=game.active,
            correct_number=game.correct_number,
            created_at=game.created_at.isoformat(),
            timeout=game.timeout.isoformat(),
            ended_at=game.ended_at.isoformat() if game.ended_at else None,
            players={key: PlayerResponse.from_player(p) for key, p in game.players.items()},
        )


class AvailabilityResponse(BaseModel):
    game_id: str
    available: bool
