"""
registry.py — In-memory game session registry
==============================================
Single authoritative store of games for the process lifetime.

Locking:
    - `_lock` guards the id -> Game map (duplicate check + insert are atomic).
    - each Game has its own lock; bets and settlement on one game are serialized.
    No cross-game locking. Expiry is checked lazily against the injected clock.
"""

from __future__ import annotations

import logging
import random
import threading
import uuid
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Protocol

from guessbet.config import get_settings
from guessbet.errors import (
    DuplicateGameIdError,
    GameDoesNotExistError,
    GameTimedOutError,
    ValidationError,
)
from guessbet.games.models import Game, Player
from guessbet.games.schema import PlaceBetRequest
from guessbet.games.settlement import GUESS_MAX, GUESS_MIN, is_valid_guess, settle

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class NumberSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionRegistry:
    """Thread-safe registry of guessing games."""

    def __init__(
        self,
        clock: Clock | None = None,
        rng: NumberSource | None = None,
        timeout_seconds: int | None = None,
    ) -> None:
        self._clock = clock or utc_now
        self._rng = rng or random.Random()
        if timeout_seconds is None:
            timeout_seconds = get_settings().GAME_TIMEOUT_SECONDS
        self._ttl = timedelta(seconds=timeout_seconds)
        self._lock = threading.Lock()
        self._games: dict[str, Game] = {}

    # ── Lifecycle ────────────────────────────────────

    def start_new_game(self, game: Game) -> Game:
        """Register `game` under its id. Ids are never reused, ended or not."""
        with self._lock:
            if game.id in self._games:
                logger.warning(f"Duplicate game id rejected: {game.id}")
                raise DuplicateGameIdError(game.id)
            if not game.active or game.correct_number is not None or game.players:
                raise ValidationError(
                    "GAME_NOT_FRESH",
                    f"Game '{game.id}' must start active, without bets or a correct number",
                    {"game_id": game.id},
                )
            if game.created_at is None:
                game.created_at = self._clock()
            if game.timeout is None:
                game.timeout = game.created_at + self._ttl
            self._games[game.id] = game

        logger.info(f"Game started: {game.id} (timeout {game.timeout.isoformat()})")
        return game

    def is_game_available(self, game_id: str) -> bool:
        """Presence in the registry only; ended and expired games count."""
        with self._lock:
            return game_id in self._games

    def get_game_by_id(self, game_id: str) -> Game | None:
        with self._lock:
            return self._games.get(game_id)

    def _require(self, game_id: str) -> Game:
        game = self.get_game_by_id(game_id)
        if game is None:
            raise GameDoesNotExistError(game_id)
        return game

    # ── Bets ─────────────────────────────────────────

    def place_bet(self, bet: PlaceBetRequest) -> Player:
        game = self._require(bet.game_id)

        with game.lock:
            now = self._clock()
            if not game.active:
                logger.warning(f"Bet rejected, game {game.id} has ended")
                raise GameTimedOutError(game.id, "ended")
            if game.is_expired(now):
                logger.warning(f"Bet rejected, game {game.id} timed out at {game.timeout.isoformat()}")
                raise GameTimedOutError(game.id)
            if not is_valid_guess(bet.number):
                raise ValidationError(
                    "INVALID_NUMBER",
                    f"Number must be between {GUESS_MIN} and {GUESS_MAX}",
                    {"number": bet.number},
                )
            if bet.stake <= 0:
                raise ValidationError("INVALID_STAKE", "Stake must be positive", {"stake": str(bet.stake)})

            player = Player(
                bet_id=f"bet_{uuid.uuid4().hex[:12]}",
                nickname=bet.nickname,
                guessed_number=bet.number,
                stake_amount=bet.stake,
                placed_at=now,
            )
            game.players[player.bet_id] = player

        logger.debug(f"Bet {player.bet_id} on game {game.id}: {player.nickname} -> {player.guessed_number}")
        return player

    # ── Settlement ───────────────────────────────────

    def end_game(self, game_id: str) -> Game:
        """Draw the correct number and settle every bet. Runs at most once per game."""
        game = self._require(game_id)

        with game.lock:
            now = self._clock()
            if not game.active:
                logger.warning(f"End rejected, game {game.id} already ended")
                raise GameTimedOutError(game.id, "already ended")
            if game.is_expired(now):
                logger.warning(f"End rejected, game {game.id} timed out at {game.timeout.isoformat()}")
                raise GameTimedOutError(game.id)

            correct_number = self._rng.randint(GUESS_MIN, GUESS_MAX)
            winners, losers = settle(game.players.values(), correct_number)
            game.correct_number = correct_number
            game.active = False
            game.ended_at = now

        logger.info(f"Game ended: {game.id} number={correct_number} winners={winners} losers={losers}")
        return game

    # ── Listing ──────────────────────────────────────

    def list_games(self, limit: int = 50, offset: int = 0) -> tuple[list[Game], int]:
        with self._lock:
            games = list(self._games.values())
        return games[offset : offset + limit], len(games)

    def count(self) -> int:
        with self._lock:
            return len(self._games)
