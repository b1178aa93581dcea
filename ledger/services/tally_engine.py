# ledger/services/tally_engine.py
"""
Cálculo del tally de una battle.

Funciones puras: no leen la base ni el reloj, todo entra por parámetro.
Con los mismos (battle, votes, now) el resultado es siempre el mismo.
"""
from datetime import datetime
from typing import Iterable

from ledger.models.battle import Battle
from ledger.models.vote import Vote, VoteChoice
from ledger.schemas.tally_schema import Tally, Winner, BattleStatus


def percent_half_up(count: int, total: int) -> int:
    """round(100 * count / total) redondeando .5 hacia arriba, 0 si no hay votos."""
    if total <= 0:
        return 0
    # Aritmética entera: floor(100 * count / total + 1/2)
    return (200 * count + total) // (2 * total)


def battle_status(battle: Battle, now: datetime) -> BattleStatus:
    return BattleStatus.OPEN if battle.is_open(now) else BattleStatus.CLOSED


def resolve_winner(count_a: int, count_b: int) -> Winner:
    if count_a > count_b:
        return Winner.A
    if count_b > count_a:
        return Winner.B
    return Winner.TIE


def compute_tally(
    battle: Battle,
    votes: Iterable[Vote],
    now: datetime,
    final: bool = False,
) -> Tally:
    count_a = 0
    count_b = 0
    for vote in votes:
        if vote.choice == VoteChoice.A:
            count_a += 1
        elif vote.choice == VoteChoice.B:
            count_b += 1

    total = count_a + count_b

    # Mientras la battle esté abierta el resultado no se decide
    if final or battle_status(battle, now) == BattleStatus.CLOSED:
        winner = resolve_winner(count_a, count_b)
    else:
        winner = Winner.UNDECIDED

    return Tally(
        count_a=count_a,
        count_b=count_b,
        total=total,
        percent_a=percent_half_up(count_a, total),
        percent_b=percent_half_up(count_b, total),
        winner=winner,
    )
