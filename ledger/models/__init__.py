from ledger.models.battle import Battle, BattleType
from ledger.models.vote import Vote, VoteChoice

__all__ = ["Battle", "BattleType", "Vote", "VoteChoice"]
