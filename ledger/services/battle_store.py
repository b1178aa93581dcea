# ledger/services/battle_store.py
import math
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ledger.database import store_guard
from ledger.errors import ValidationError, NotFoundError
from ledger.models.battle import Battle, BattleType
from ledger.utils.clock import Clock, system_clock
from ledger.utils.option_normalizer import normalize_option
from ledger.utils.logger_config import app_logger as logger

MAX_TITLE_LENGTH = 200


def create_battle(
    db: Session,
    *,
    title: str,
    option_a: Dict[str, Any],
    option_b: Dict[str, Any],
    description: Optional[str] = None,
    duration_hours: Optional[float] = None,
    battle_type: BattleType = BattleType.custom,
    clock: Clock = system_clock,
) -> Battle:
    """
    Crea una battle entre dos opciones distintas.

    Valida antes de tocar la base: si algo falla no se persiste nada.
    ends_at = created_at + duration_hours, o None si la battle no vence.
    """
    clean_title = (title or "").strip()
    if not clean_title:
        raise ValidationError("El título no puede estar vacío")
    if len(clean_title) > MAX_TITLE_LENGTH:
        raise ValidationError(f"El título no puede superar {MAX_TITLE_LENGTH} caracteres")

    if duration_hours is not None and (not math.isfinite(duration_hours) or duration_hours <= 0):
        raise ValidationError("La duración debe ser un número de horas mayor a cero")

    item_a = normalize_option(option_a, battle_type)
    item_b = normalize_option(option_b, battle_type)

    if item_a.identifier == item_b.identifier:
        raise ValidationError("Una battle necesita dos opciones distintas")

    created_at = clock.now()
    ends_at = None
    if duration_hours is not None:
        try:
            ends_at = created_at + timedelta(hours=duration_hours)
        except (OverflowError, ValueError):
            raise ValidationError(f"Duración fuera de rango: {duration_hours} horas")

    battle = Battle(
        title=clean_title,
        description=(description or "").strip() or None,
        battle_type=battle_type,
        option_a=option_a,
        option_b=option_b,
        option_a_identifier=item_a.identifier,
        option_a_name=item_a.display_name,
        option_a_image=item_a.image_url,
        option_b_identifier=item_b.identifier,
        option_b_name=item_b.display_name,
        option_b_image=item_b.image_url,
        created_at=created_at,
        ends_at=ends_at,
        is_active=True,
    )

    with store_guard(db, "create_battle"):
        db.add(battle)
        db.commit()
        db.refresh(battle)

    logger.info(f"Battle creada con ID {battle.id}: '{battle.title}' (vence: {battle.ends_at})")
    return battle


def get_battle(db: Session, battle_id: str) -> Battle:
    with store_guard(db, "get_battle"):
        battle = db.get(Battle, battle_id)

    if battle is None:
        raise NotFoundError(battle_id)
    return battle


def list_active_battles(
    db: Session,
    now: datetime,
    filter_fn: Optional[Callable[[Battle], bool]] = None,
    battle_type: Optional[BattleType] = None,
) -> List[Battle]:
    """
    Battles activas (is_active y sin vencer), las más nuevas primero.
    """
    query = db.query(Battle).filter(
        Battle.is_active.is_(True),
        or_(Battle.ends_at.is_(None), Battle.ends_at > now),
    )
    if battle_type is not None:
        query = query.filter(Battle.battle_type == battle_type)

    with store_guard(db, "list_active_battles"):
        battles = query.order_by(Battle.created_at.desc()).all()

    if filter_fn is not None:
        battles = [b for b in battles if filter_fn(b)]
    return battles


def list_battles(db: Session, battle_type: Optional[BattleType] = None) -> List[Battle]:
    query = db.query(Battle)
    if battle_type is not None:
        query = query.filter(Battle.battle_type == battle_type)

    with store_guard(db, "list_battles"):
        return query.order_by(Battle.created_at.desc()).all()


def deactivate(db: Session, battle_id: str) -> Battle:
    battle = get_battle(db, battle_id)

    # Idempotente: si ya está inactiva no hay nada que hacer
    if not battle.is_active:
        return battle

    with store_guard(db, "deactivate"):
        battle.is_active = False
        db.commit()
        db.refresh(battle)

    logger.info(f"Battle {battle.id} desactivada")
    return battle
