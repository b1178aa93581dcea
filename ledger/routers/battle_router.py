# ledger/routers/battle_router.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ledger.database import get_db
from ledger.errors import (
    ValidationError,
    NotFoundError,
    BattleClosedError,
    DuplicateVoteError,
    StoreUnavailableError,
)
from ledger.models.battle import BattleType
from ledger.schemas.battle_schema import BattleCreate, BattleResponse, BattleView, TrendingBattleResponse
from ledger.schemas.vote_schema import VoteCreate, VoteResponse
from ledger.services import battle_service
from ledger.services.identity_service import get_current_account_id, resolve_voter_id
from ledger.utils.build_battle_response import build_battle_response
from ledger.utils.clock import Clock, get_clock
from ledger.config import settings

router = APIRouter(prefix="/battles", tags=["battles"])


def _store_unavailable(e: StoreUnavailableError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.post("", response_model=BattleResponse, status_code=status.HTTP_201_CREATED)
def create_new_battle(
    battle_data: BattleCreate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """
    Crea una battle entre dos opciones con duración opcional en horas.
    """
    try:
        battle = battle_service.create(db, battle_data, clock=clock)
        return build_battle_response(battle)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreUnavailableError as e:
        raise _store_unavailable(e)


@router.get("", response_model=List[BattleResponse])
def list_battles(
    type: Optional[BattleType] = Query(None),
    active: bool = Query(True),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    try:
        battles = battle_service.list_battles(db, battle_type=type, active_only=active, clock=clock)
        return [build_battle_response(b) for b in battles]
    except StoreUnavailableError as e:
        raise _store_unavailable(e)


# Tiene que ir antes de /{battle_id}
@router.get("/trending", response_model=List[TrendingBattleResponse])
def trending_battles(
    window: str = Query(settings.TRENDING_DEFAULT_WINDOW),
    limit: int = Query(settings.TRENDING_DEFAULT_LIMIT),
    type: Optional[BattleType] = Query(None),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    try:
        return battle_service.trending(db, limit=limit, window=window, battle_type=type, clock=clock)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreUnavailableError as e:
        raise _store_unavailable(e)


@router.get("/{battle_id}", response_model=BattleView)
def view_battle(
    battle_id: str,
    voter_id: Optional[str] = Query(None, alias="voterId"),
    final: bool = Query(False),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """
    Devuelve la battle con su tally calculado en este momento.
    Con voterId indica además si ese votante ya votó y por qué opción.
    """
    try:
        return battle_service.view(db, battle_id, voter_id=voter_id, final=final, clock=clock)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreUnavailableError as e:
        raise _store_unavailable(e)


@router.post("/{battle_id}/votes", response_model=VoteResponse, status_code=status.HTTP_201_CREATED)
def cast_vote(
    battle_id: str,
    vote_data: VoteCreate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    account_id: Optional[str] = Depends(get_current_account_id),
):
    try:
        voter_id = resolve_voter_id(vote_data.voter_id, account_id)
        vote = battle_service.vote(db, battle_id, voter_id, vote_data.choice, clock=clock)
        return VoteResponse.model_validate(vote)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DuplicateVoteError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except BattleClosedError as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=str(e))
    except StoreUnavailableError as e:
        raise _store_unavailable(e)


@router.post("/{battle_id}/deactivate", response_model=BattleResponse)
def deactivate_battle(battle_id: str, db: Session = Depends(get_db)):
    try:
        battle = battle_service.deactivate(db, battle_id)
        return build_battle_response(battle)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreUnavailableError as e:
        raise _store_unavailable(e)
