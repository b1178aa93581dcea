# ledger/services/vote_ledger.py
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ledger.database import store_guard
from ledger.errors import (
    ValidationError,
    NotFoundError,
    BattleClosedError,
    DuplicateVoteError,
    StoreUnavailableError,
)
from ledger.models.battle import Battle
from ledger.models.vote import Vote, VoteChoice
from ledger.utils.clock import Clock, system_clock
from ledger.utils.logger_config import app_logger as logger


def cast_vote(
    db: Session,
    battle_id: str,
    voter_id: str,
    choice: VoteChoice | str,
    clock: Clock = system_clock,
) -> Vote:
    """
    Registra el voto de un votante en una battle.

    La regla "un voto por votante" la impone el UniqueConstraint de
    battle_votes: se intenta el INSERT y el conflicto se traduce a
    DuplicateVoteError. Nunca se sobreescribe un voto existente.
    """
    if not voter_id or not voter_id.strip():
        raise ValidationError("Falta el identificador del votante")

    try:
        choice = VoteChoice(choice)
    except ValueError:
        raise ValidationError(f"Opción inválida: '{choice}'. Debe ser 'A' o 'B'")

    with store_guard(db, "cast_vote"):
        battle = db.get(Battle, battle_id)

    if battle is None:
        raise NotFoundError(battle_id)

    now = clock.now()
    if not battle.is_open(now):
        raise BattleClosedError(battle_id)

    vote = Vote(
        battle_id=battle_id,
        voter_id=voter_id,
        choice=choice,
        cast_at=now,
    )
    db.add(vote)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        # Caso esperado (doble click, varias pestañas): no es un error del sistema
        logger.info(f"Voto duplicado rechazado: battle={battle_id} voter={voter_id}")
        raise DuplicateVoteError(battle_id, voter_id)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Error guardando voto en battle {battle_id}")
        raise StoreUnavailableError("cast_vote") from e

    db.refresh(vote)
    logger.info(f"Voto registrado: battle={battle_id} choice={choice.value}")
    return vote


def get_votes_for_battle(db: Session, battle_id: str) -> List[Vote]:
    with store_guard(db, "get_votes_for_battle"):
        return (
            db.query(Vote)
            .filter(Vote.battle_id == battle_id)
            .order_by(Vote.cast_at, Vote.id)
            .all()
        )


def get_vote_for_voter(db: Session, battle_id: str, voter_id: str) -> Optional[Vote]:
    """Devuelve el voto de este votante en la battle, si ya votó."""
    with store_guard(db, "get_vote_for_voter"):
        return (
            db.query(Vote)
            .filter(Vote.battle_id == battle_id, Vote.voter_id == voter_id)
            .first()
        )


def count_votes_by_battle(db: Session, battle_ids: Iterable[str]) -> Dict[str, int]:
    ids = list(battle_ids)
    if not ids:
        return {}

    with store_guard(db, "count_votes_by_battle"):
        rows = (
            db.query(Vote.battle_id, func.count(Vote.id))
            .filter(Vote.battle_id.in_(ids))
            .group_by(Vote.battle_id)
            .all()
        )

    return {battle_id: total for battle_id, total in rows}
