from datetime import timedelta

import pytest
from sqlalchemy.orm import Session

from ledger.errors import ValidationError, NotFoundError
from ledger.models import Battle, BattleType
from ledger.services import battle_store
from ledger.test.utils_common_methods import movie
from ledger.utils.logger_config import test_logger as logger


def new_battle(db, clock, title="Alien vs Predator", a="m1", b="m2", **kwargs) -> Battle:
    return battle_store.create_battle(
        db,
        title=title,
        option_a=movie(a),
        option_b=movie(b),
        battle_type=kwargs.pop("battle_type", BattleType.movie),
        clock=clock,
        **kwargs,
    )


@pytest.mark.nivel("bajo")
def test_create_battle_sets_window_and_projection(db_session: Session, clock):
    battle = new_battle(db_session, clock, description="  el clásico  ", duration_hours=1)

    assert battle.id
    assert battle.created_at == clock.now()
    assert battle.ends_at == clock.now() + timedelta(hours=1)
    assert battle.is_active is True
    assert battle.description == "el clásico"
    assert battle.option_a_identifier == "m1"
    assert battle.option_b_name == "Movie m2"
    logger.info(f"Battle creada en test: {battle}")


@pytest.mark.nivel("bajo")
def test_create_battle_without_duration_is_unbounded(db_session: Session, clock):
    battle = new_battle(db_session, clock)
    assert battle.ends_at is None


@pytest.mark.nivel("bajo")
def test_same_identifier_is_rejected_and_nothing_persisted(db_session: Session, clock):
    with pytest.raises(ValidationError):
        new_battle(db_session, clock, a="m1", b="m1")

    assert db_session.query(Battle).count() == 0


@pytest.mark.nivel("bajo")
@pytest.mark.parametrize("title", ["", "   "])
def test_blank_title_is_rejected(db_session: Session, clock, title):
    with pytest.raises(ValidationError):
        new_battle(db_session, clock, title=title)

    assert db_session.query(Battle).count() == 0


@pytest.mark.nivel("bajo")
def test_non_positive_duration_is_rejected(db_session: Session, clock):
    with pytest.raises(ValidationError):
        new_battle(db_session, clock, duration_hours=0)


@pytest.mark.nivel("bajo")
def test_get_battle_unknown_id(db_session: Session):
    with pytest.raises(NotFoundError):
        battle_store.get_battle(db_session, "no-existe")


@pytest.mark.nivel("medio")
def test_list_active_battles_newest_first_and_filters(db_session: Session, clock):
    old = new_battle(db_session, clock, title="old", duration_hours=1)
    clock.advance(minutes=10)
    unbounded = new_battle(db_session, clock, title="unbounded")
    clock.advance(minutes=10)
    newest = new_battle(db_session, clock, title="newest", duration_hours=5)
    clock.advance(minutes=10)
    book = new_battle(db_session, clock, title="book", battle_type=BattleType.book)
    deactivated = new_battle(db_session, clock, title="off")
    battle_store.deactivate(db_session, deactivated.id)

    active = battle_store.list_active_battles(db_session, clock.now())
    assert [b.id for b in active] == [book.id, newest.id, unbounded.id, old.id]

    # Una hora después "old" venció
    clock.advance(hours=1)
    active_ids = [b.id for b in battle_store.list_active_battles(db_session, clock.now())]
    assert old.id not in active_ids
    assert unbounded.id in active_ids

    movies = battle_store.list_active_battles(db_session, clock.now(), battle_type=BattleType.movie)
    assert book.id not in [b.id for b in movies]

    only_newest = battle_store.list_active_battles(
        db_session, clock.now(), filter_fn=lambda b: b.title == "newest"
    )
    assert [b.id for b in only_newest] == [newest.id]


@pytest.mark.nivel("medio")
def test_list_active_battles_orders_by_created_at_desc(db_session: Session, clock):
    ids = []
    for i in range(3):
        ids.append(new_battle(db_session, clock, title=f"battle {i}").id)
        clock.advance(minutes=1)

    active = battle_store.list_active_battles(db_session, clock.now())
    assert [b.id for b in active] == list(reversed(ids))


@pytest.mark.nivel("medio")
def test_deactivate_is_idempotent(db_session: Session, clock):
    battle = new_battle(db_session, clock, duration_hours=2)

    first = battle_store.deactivate(db_session, battle.id)
    second = battle_store.deactivate(db_session, battle.id)

    assert first.is_active is False
    assert second.is_active is False


@pytest.mark.nivel("medio")
def test_deactivate_unknown_battle(db_session: Session):
    with pytest.raises(NotFoundError):
        battle_store.deactivate(db_session, "no-existe")


@pytest.mark.nivel("bajo")
@pytest.mark.parametrize("duration", [float("nan"), float("inf"), 1e8])
def test_non_finite_or_huge_duration_is_rejected(db_session: Session, clock, duration):
    with pytest.raises(ValidationError):
        new_battle(db_session, clock, duration_hours=duration)

    assert db_session.query(Battle).count() == 0


@pytest.mark.nivel("bajo")
def test_title_too_long_is_rejected(db_session: Session, clock):
    with pytest.raises(ValidationError):
        new_battle(db_session, clock, title="x" * 201)
