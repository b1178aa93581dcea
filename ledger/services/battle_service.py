# ledger/services/battle_service.py
"""
Fachada del ledger: es lo único que usan los routers.

Orquesta battle_store, vote_ledger y tally_engine y dispara los eventos
de analytics. No tiene estado propio.
"""
from datetime import timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from ledger.config import settings
from ledger.errors import ValidationError
from ledger.models.battle import Battle, BattleType
from ledger.models.vote import Vote, VoteChoice
from ledger.schemas.battle_schema import BattleCreate, BattleView, TrendingBattleResponse
from ledger.services import battle_store, vote_ledger
from ledger.services.analytics_service import track_event, BATTLE_CREATED, VOTE_CAST
from ledger.services.tally_engine import compute_tally, battle_status
from ledger.utils.build_battle_response import build_battle_response, build_trending_response
from ledger.utils.clock import Clock, system_clock
from ledger.utils.time_window import parse_window, format_time_left

MAX_TRENDING_LIMIT = 100


def create(db: Session, battle_data: BattleCreate, clock: Clock = system_clock) -> Battle:
    battle = battle_store.create_battle(
        db,
        title=battle_data.title,
        description=battle_data.description,
        option_a=battle_data.option_a,
        option_b=battle_data.option_b,
        duration_hours=battle_data.duration_hours,
        battle_type=battle_data.battle_type,
        clock=clock,
    )

    track_event(BATTLE_CREATED, {
        "battle_id": battle.id,
        "battle_type": battle.battle_type.value,
        "duration_hours": battle_data.duration_hours,
    })
    return battle


def vote(
    db: Session,
    battle_id: str,
    voter_id: str,
    choice: VoteChoice | str,
    clock: Clock = system_clock,
) -> Vote:
    new_vote = vote_ledger.cast_vote(db, battle_id, voter_id, choice, clock=clock)

    track_event(VOTE_CAST, {
        "battle_id": battle_id,
        "choice": new_vote.choice.value,
    })
    return new_vote


def view(
    db: Session,
    battle_id: str,
    voter_id: Optional[str] = None,
    final: bool = False,
    clock: Clock = system_clock,
) -> BattleView:
    battle = battle_store.get_battle(db, battle_id)
    votes = vote_ledger.get_votes_for_battle(db, battle_id)
    now = clock.now()

    status = battle_status(battle, now)
    user_vote = None
    if voter_id:
        existing = vote_ledger.get_vote_for_voter(db, battle_id, voter_id)
        user_vote = existing.choice if existing else None

    return BattleView(
        battle=build_battle_response(battle),
        tally=compute_tally(battle, votes, now, final=final),
        status=status,
        time_left=format_time_left(battle.ends_at, now, closed=not battle.is_active),
        user_vote=user_vote,
    )


def list_battles(
    db: Session,
    battle_type: Optional[BattleType] = None,
    active_only: bool = True,
    clock: Clock = system_clock,
) -> List[Battle]:
    if active_only:
        return battle_store.list_active_battles(db, clock.now(), battle_type=battle_type)
    return battle_store.list_battles(db, battle_type=battle_type)


def trending(
    db: Session,
    limit: int = settings.TRENDING_DEFAULT_LIMIT,
    window: str | timedelta = settings.TRENDING_DEFAULT_WINDOW,
    battle_type: Optional[BattleType] = None,
    recency_bonus: Optional[int] = None,
    clock: Clock = system_clock,
) -> List[TrendingBattleResponse]:
    """
    Ranking de battles activas por actividad.

    activity = votos + argumentos + bonus fijo si la battle se creó dentro
    de la ventana. Los argumentos no existen en este servicio: cuentan 0.
    Empates: la más nueva primero.
    """
    if limit < 1 or limit > MAX_TRENDING_LIMIT:
        raise ValidationError(f"limit debe estar entre 1 y {MAX_TRENDING_LIMIT}")

    window_delta = window if isinstance(window, timedelta) else parse_window(window)
    bonus = settings.TRENDING_RECENCY_BONUS if recency_bonus is None else recency_bonus
    now = clock.now()

    battles = battle_store.list_active_battles(db, now, battle_type=battle_type)
    totals = vote_ledger.count_votes_by_battle(db, [b.id for b in battles])

    ranked = []
    for battle in battles:
        total_votes = totals.get(battle.id, 0)
        arguments_count = 0
        recency = bonus if now - battle.created_at < window_delta else 0
        ranked.append((total_votes + arguments_count + recency, battle, total_votes))

    ranked.sort(key=lambda item: (item[0], item[1].created_at), reverse=True)

    return [
        build_trending_response(battle, total_votes, score)
        for score, battle, total_votes in ranked[:limit]
    ]


def deactivate(db: Session, battle_id: str) -> Battle:
    return battle_store.deactivate(db, battle_id)
