# ledger/models/battle.py
import enum
import uuid

from sqlalchemy import (
    Column,
    String,
    Text,
    Boolean,
    DateTime,
    Enum,
    JSON,
    CheckConstraint,
)
from sqlalchemy.orm import relationship

from ledger.database import Base


class BattleType(enum.Enum):
    movie = "movie"
    book = "book"
    game = "game"
    music = "music"
    food = "food"
    custom = "custom"


class Battle(Base):
    __tablename__ = "battles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    battle_type = Column(Enum(BattleType), nullable=False, default=BattleType.custom, index=True)

    # Payload original tal cual lo mandó el cliente (película, libro, etc.)
    option_a = Column(JSON, nullable=False)
    option_b = Column(JSON, nullable=False)

    # Proyección normalizada: lo único que usa el core
    option_a_identifier = Column(String(255), nullable=False)
    option_a_name = Column(String(255), nullable=False)
    option_a_image = Column(String(1024), nullable=True)
    option_b_identifier = Column(String(255), nullable=False)
    option_b_name = Column(String(255), nullable=False)
    option_b_image = Column(String(1024), nullable=True)

    created_at = Column(DateTime, nullable=False, index=True)
    ends_at = Column(DateTime, nullable=True)

    # Solo pasa a False con deactivate, nunca vuelve a True
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint(
            "option_a_identifier <> option_b_identifier",
            name="ck_battle_distinct_options"
        ),
        CheckConstraint(
            "ends_at IS NULL OR ends_at > created_at",
            name="ck_battle_ends_after_creation"
        ),
    )

    votes = relationship("Vote", back_populates="battle", lazy="select")

    def is_open(self, now) -> bool:
        return bool(self.is_active) and (self.ends_at is None or self.ends_at > now)

    def __repr__(self) -> str:
        return (
            f"<Battle id={self.id} "
            f"title={self.title!r} "
            f"is_active={self.is_active}>"
        )
