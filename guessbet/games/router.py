"""
router.py — Game REST API Endpoints
====================================
POST   /v1/games                  → start a new game
GET    /v1/games                  → list games
GET    /v1/games/{id}             → game state
GET    /v1/games/{id}/available   → is the id registered
POST   /v1/games/{id}/bets        → place a bet
POST   /v1/games/{id}/end         → draw the number and settle
"""

import uuid

from fastapi import APIRouter, Depends, Query

from guessbet.deps import get_registry
from guessbet.errors import GameDoesNotExistError
from guessbet.games.models import Game
from guessbet.games.registry import SessionRegistry
from guessbet.games.schema import (
    AvailabilityResponse,
    CreateGameRequest,
    GameResponse,
    PlaceBetBody,
    PlaceBetRequest,
    PlayerResponse,
)
from guessbet.shared.schemas import ErrorResponse, PaginatedResponse

router = APIRouter(
    prefix="/v1/games",
    tags=["games"],
    responses={
        404: {"model": ErrorResponse, "description": "Game not found"},
        409: {"model": ErrorResponse, "description": "Duplicate game id"},
        410: {"model": ErrorResponse, "description": "Game ended or timed out"},
    },
)


@router.post("", response_model=GameResponse, status_code=201)
async def start_game(body: CreateGameRequest | None = None, registry: SessionRegistry = Depends(get_registry)):
    game_id = (body.game_id if body else None) or str(uuid.uuid4())
    game = registry.start_new_game(Game(game_id))
    return GameResponse.from_game(game)


@router.get("", response_model=PaginatedResponse[GameResponse])
async def list_games(
    registry: SessionRegistry = Depends(get_registry),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    games, total = registry.list_games(limit, offset)
    items = [GameResponse.from_game(g) for g in games]
    return PaginatedResponse[GameResponse](items=items, total=total, limit=limit, offset=offset)


@router.get("/{game_id}", response_model=GameResponse)
async def get_game(game_id: str, registry: SessionRegistry = Depends(get_registry)):
    game = registry.get_game_by_id(game_id)
    if not game:
        raise GameDoesNotExistError(game_id)
    return GameResponse.from_game(game)


@router.get("/{game_id}/available", response_model=AvailabilityResponse)
async def game_available(game_id: str, registry: SessionRegistry = Depends(get_registry)):
    return AvailabilityResponse(game_id=game_id, available=registry.is_game_available(game_id))


@router.post("/{game_id}/bets", response_model=PlayerResponse, status_code=201)
async def place_bet(game_id: str, body: PlaceBetBody, registry: SessionRegistry = Depends(get_registry)):
    player = registry.place_bet(PlaceBetRequest(game_id=game_id, **body.model_dump()))
    return PlayerResponse.from_player(player)


@router.post("/{game_id}/end", response_model=GameResponse)
async def end_game(game_id: str, registry: SessionRegistry = Depends(get_registry)):
    return GameResponse.from_game(registry.end_game(game_id))
