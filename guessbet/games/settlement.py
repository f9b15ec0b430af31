"""Settlement rules that are independent from HTTP, locking and the clock.

OK here: payout math, guess range, win/loss classification.
Not OK here: registry state, datetime.now(), random draws.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from guessbet.games.models import Player, StakeStatus

GUESS_MIN = 0
GUESS_MAX = 9

# Fixed ratio paid on a correct guess.
PAYOUT_MULTIPLIER = Decimal("9.9")
LOSS_BALANCE = Decimal("0")


def is_valid_guess(number: int) -> bool:
    return GUESS_MIN <= number <= GUESS_MAX


def payout(stake: Decimal) -> Decimal:
    """End-of-game balance for a winning stake."""
    return stake * PAYOUT_MULTIPLIER


def settle_player(player: Player, correct_number: int) -> None:
    if player.guessed_number == correct_number:
        player.stake_status = StakeStatus.WIN
        player.end_of_game_balance = payout(player.stake_amount)
    else:
        player.stake_status = StakeStatus.LOSS
        player.end_of_game_balance = LOSS_BALANCE


def settle(players: Iterable[Player], correct_number: int) -> tuple[int, int]:
    """Mark every player WIN or LOSS against `correct_number`.

    Winners are paid independently, there is no pool to split.
    Returns (winners, losers).
    """
    if not is_valid_guess(correct_number):
        raise ValueError(f"correct_number {correct_number} outside {GUESS_MIN}..{GUESS_MAX}")

    winners = losers = 0
    for player in players:
        settle_player(player, correct_number)
        if player.stake_status is StakeStatus.WIN:
            winners += 1
        else:
            losers += 1
    return winners, losers
