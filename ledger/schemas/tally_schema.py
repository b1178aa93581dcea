# ledger/schemas/tally_schema.py
import enum

from pydantic import BaseModel, ConfigDict, Field


class Winner(str, enum.Enum):
    A = "A"
    B = "B"
    TIE = "TIE"
    UNDECIDED = "UNDECIDED"


class BattleStatus(str, enum.Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class Tally(BaseModel):
    # Inmutable: se recalcula en cada lectura, nunca se guarda
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    count_a: int = Field(..., alias="countA", ge=0)
    count_b: int = Field(..., alias="countB", ge=0)
    total: int = Field(..., ge=0)
    percent_a: int = Field(..., alias="percentA")
    percent_b: int = Field(..., alias="percentB")
    winner: Winner
