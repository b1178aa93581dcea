# ledger/utils/build_battle_response.py
from ledger.models.battle import Battle
from ledger.schemas.battle_schema import BattleResponse, TrendingBattleResponse
from ledger.schemas.option_schema import OptionView


def build_option_views(battle: Battle) -> tuple[OptionView, OptionView]:
    item_a = OptionView(
        identifier=battle.option_a_identifier,
        display_name=battle.option_a_name,
        image_url=battle.option_a_image,
    )
    item_b = OptionView(
        identifier=battle.option_b_identifier,
        display_name=battle.option_b_name,
        image_url=battle.option_b_image,
    )
    return item_a, item_b


def _battle_fields(battle: Battle) -> dict:
    item_a, item_b = build_option_views(battle)
    return dict(
        id=battle.id,
        title=battle.title,
        description=battle.description,
        battle_type=battle.battle_type,
        option_a=battle.option_a,
        option_b=battle.option_b,
        item_a=item_a,
        item_b=item_b,
        created_at=battle.created_at,
        ends_at=battle.ends_at,
        is_active=battle.is_active,
    )


def build_battle_response(battle: Battle) -> BattleResponse:
    return BattleResponse(**_battle_fields(battle))


def build_trending_response(battle: Battle, total_votes: int, activity_score: int) -> TrendingBattleResponse:
    return TrendingBattleResponse(
        **_battle_fields(battle),
        total_votes=total_votes,
        activity_score=activity_score,
    )
