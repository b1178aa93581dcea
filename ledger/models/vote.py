# ledger/models/vote.py
import enum

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Enum,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from ledger.database import Base


class VoteChoice(enum.Enum):
    A = "A"
    B = "B"


class Vote(Base):
    __tablename__ = "battle_votes"

    id = Column(Integer, primary_key=True)
    battle_id = Column(
        String(36),
        ForeignKey("battles.id"),
        nullable=False,
        index=True
    )

    # Token de sesión anónima o "user:<id>" si viene autenticado
    voter_id = Column(String(255), nullable=False)
    choice = Column(Enum(VoteChoice), nullable=False)
    cast_at = Column(DateTime, nullable=False)

    # Un voto por votante y battle: lo garantiza la base, no la aplicación
    __table_args__ = (
        UniqueConstraint("battle_id", "voter_id", name="uq_battle_vote_voter"),
    )

    battle = relationship("Battle", back_populates="votes")
