# ledger/schemas/battle_schema.py
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ledger.models.battle import BattleType
from ledger.models.vote import VoteChoice
from ledger.schemas.option_schema import OptionView
from ledger.schemas.tally_schema import Tally, BattleStatus


# Para crear una nueva battle (input del cliente)
class BattleCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., max_length=200)
    description: Optional[str] = None
    battle_type: BattleType = Field(BattleType.custom, alias="battleType")
    option_a: Dict[str, Any] = Field(..., alias="optionA")  # Ejemplo: {"identifier": "m1", "title": "Alien"}
    option_b: Dict[str, Any] = Field(..., alias="optionB")
    duration_hours: Optional[float] = Field(None, alias="durationHours")


class BattleResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: Optional[str] = None
    battle_type: BattleType = Field(..., alias="battleType")
    option_a: Dict[str, Any] = Field(..., alias="optionA")
    option_b: Dict[str, Any] = Field(..., alias="optionB")
    item_a: OptionView = Field(..., alias="itemA")
    item_b: OptionView = Field(..., alias="itemB")
    created_at: datetime = Field(..., alias="createdAt")
    ends_at: Optional[datetime] = Field(None, alias="endsAt")
    is_active: bool = Field(..., alias="isActive")


class BattleView(BaseModel):
    """Battle + tally calculado en el momento de la lectura."""
    model_config = ConfigDict(populate_by_name=True)

    battle: BattleResponse
    tally: Tally
    status: BattleStatus
    time_left: Optional[str] = Field(None, alias="timeLeft")
    user_vote: Optional[VoteChoice] = Field(None, alias="userVote")


class TrendingBattleResponse(BattleResponse):
    total_votes: int = Field(..., alias="totalVotes")
    activity_score: int = Field(..., alias="activityScore")
