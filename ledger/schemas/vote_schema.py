# ledger/schemas/vote_schema.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ledger.models.vote import VoteChoice


class VoteCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Opcional: si viene un bearer token válido, manda la cuenta
    voter_id: Optional[str] = Field(None, alias="voterId", max_length=255)
    choice: VoteChoice


class VoteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    battle_id: str = Field(..., alias="battleId")
    voter_id: str = Field(..., alias="voterId")
    choice: VoteChoice
    cast_at: datetime = Field(..., alias="castAt")
