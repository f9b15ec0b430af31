"""
models.py — Game session value types
=====================================
In-memory state for one guessing game and the bets placed in it.
Nothing here talks to the clock or the rng; the registry passes `now` in.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum


class StakeStatus(str, Enum):
    WIN = "WIN"
    LOSS = "LOSS"


@dataclass
class Player:
    """One placed bet. Outcome fields stay None until the game is settled."""

    bet_id: str
    nickname: str
    guessed_number: int
    stake_amount: Decimal
    stake_status: StakeStatus | None = None
    end_of_game_balance: Decimal | None = None
    placed_at: datetime | None = None


@dataclass
class Game:
    id: str
    players: dict[str, Player] = field(default_factory=dict)
    correct_number: int | None = None
    created_at: datetime | None = None  # filled by the registry when unset
    timeout: datetime | None = None     # absolute expiry, same
    active: bool = True
    ended_at: datetime | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def lock(self) -> threading.Lock:
        return self._lock

    def is_expired(self, now: datetime) -> bool:
        return self.timeout is not None and now >= self.timeout
