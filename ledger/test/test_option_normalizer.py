import pytest

from ledger.errors import ValidationError
from ledger.models.battle import BattleType
from ledger.utils.option_normalizer import normalize_option, TMDB_IMAGE_BASE, UNKNOWN_NAME


@pytest.mark.nivel("bajo")
def test_movie_uses_title_and_tmdb_poster():
    option = normalize_option({"identifier": "550", "title": "Fight Club", "poster_path": "/abc.jpg"}, BattleType.movie)

    assert option.identifier == "550"
    assert option.display_name == "Fight Club"
    assert option.image_url == f"{TMDB_IMAGE_BASE}/abc.jpg"


@pytest.mark.nivel("bajo")
def test_game_cover_without_scheme_gets_https():
    option = normalize_option(
        {"identifier": "g1", "name": "Halo", "cover": {"url": "//images.igdb.com/co1.jpg"}},
        BattleType.game,
    )

    assert option.display_name == "Halo"
    assert option.image_url == "https://images.igdb.com/co1.jpg"


@pytest.mark.nivel("bajo")
def test_music_takes_first_image():
    option = normalize_option(
        {"identifier": "t1", "name": "Song", "album": {"images": [{"url": "https://i/1.png"}, {"url": "https://i/2.png"}]}},
        BattleType.music,
    )

    assert option.image_url == "https://i/1.png"


@pytest.mark.nivel("bajo")
def test_book_reads_volume_info():
    option = normalize_option(
        {"identifier": "b1", "volumeInfo": {"title": "Dune", "imageLinks": {"thumbnail": "https://books/dune"}}},
        BattleType.book,
    )

    assert option.display_name == "Dune"
    assert option.image_url == "https://books/dune"


@pytest.mark.nivel("bajo")
def test_food_uses_plain_image_field():
    option = normalize_option({"identifier": "pizza", "name": "Pizza", "image": "https://img/pizza"}, BattleType.food)

    assert option.display_name == "Pizza"
    assert option.image_url == "https://img/pizza"


@pytest.mark.nivel("bajo")
def test_id_is_used_when_identifier_is_missing():
    option = normalize_option({"id": 603, "title": "The Matrix"}, BattleType.movie)
    assert option.identifier == "603"


@pytest.mark.nivel("bajo")
def test_missing_identifier_is_rejected():
    with pytest.raises(ValidationError):
        normalize_option({"title": "No id"}, BattleType.custom)


@pytest.mark.nivel("bajo")
def test_nameless_option_falls_back_to_unknown():
    assert normalize_option({"identifier": "x"}).display_name == UNKNOWN_NAME


@pytest.mark.nivel("bajo")
def test_identifier_longer_than_column_is_rejected():
    with pytest.raises(ValidationError):
        normalize_option({"identifier": "x" * 256, "title": "Largo"})


@pytest.mark.nivel("bajo")
def test_image_url_longer_than_column_is_rejected():
    with pytest.raises(ValidationError):
        normalize_option({"identifier": "x", "image": "https://img/" + "a" * 1100}, BattleType.food)


@pytest.mark.nivel("bajo")
def test_long_display_name_is_truncated():
    option = normalize_option({"identifier": "x", "title": "t" * 400}, BattleType.movie)
    assert len(option.display_name) == 255
