# ledger/utils/option_normalizer.py
"""
Normaliza las opciones de una battle.

Cada tipo de contenido llega con su propia forma (TMDB usa "title" y
"poster_path", RAWG "name" y "background_image", Spotify una lista de
"images", etc). Acá, y solo acá, se decide cómo leer cada forma; el resto
del sistema trabaja con OptionView {identifier, displayName, imageUrl}.
"""
from typing import Any, Callable, Dict, Optional

from ledger.errors import ValidationError
from ledger.models.battle import BattleType
from ledger.schemas.option_schema import OptionView

TMDB_IMAGE_BASE = "https://image.tmdb.org/t/p/w500"
UNKNOWN_NAME = "Unknown"

# Largos de las columnas de battles
MAX_IDENTIFIER_LENGTH = 255
MAX_NAME_LENGTH = 255
MAX_IMAGE_URL_LENGTH = 1024


def _first_text(payload: Dict[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = payload.get(key)
        if isinstance(value, (str, int, float)) and str(value).strip():
            return str(value).strip()
    return None


def _nested(payload: Dict[str, Any], *path: str) -> Any:
    current: Any = payload
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _first_image(images: Any) -> Optional[str]:
    if isinstance(images, list) and images and isinstance(images[0], dict):
        return images[0].get("url")
    return None


def _absolute_url(url: Optional[str]) -> Optional[str]:
    # IGDB devuelve URLs sin esquema ("//images.igdb.com/...")
    if url and url.startswith("//"):
        return f"https:{url}"
    return url


def extract_identifier(payload: Dict[str, Any]) -> str:
    identifier = _first_text(payload, "identifier", "id")
    if identifier is None:
        raise ValidationError("Cada opción necesita un campo 'identifier'")
    if len(identifier) > MAX_IDENTIFIER_LENGTH:
        raise ValidationError(f"El identifier no puede superar {MAX_IDENTIFIER_LENGTH} caracteres")
    return identifier


def _movie(payload: Dict[str, Any]) -> tuple:
    poster = payload.get("poster_path")
    image = f"{TMDB_IMAGE_BASE}{poster}" if isinstance(poster, str) and poster.startswith("/") else poster
    return _first_text(payload, "title", "name"), image


def _book(payload: Dict[str, Any]) -> tuple:
    name = _first_text(payload, "title") or _nested(payload, "volumeInfo", "title")
    image = (
        _nested(payload, "imageLinks", "thumbnail")
        or _nested(payload, "volumeInfo", "imageLinks", "thumbnail")
    )
    return name, image


def _game(payload: Dict[str, Any]) -> tuple:
    image = payload.get("background_image") or _absolute_url(_nested(payload, "cover", "url"))
    return _first_text(payload, "name", "title"), image


def _music(payload: Dict[str, Any]) -> tuple:
    image = _first_image(payload.get("images")) or _first_image(_nested(payload, "album", "images"))
    return _first_text(payload, "name", "title"), image


def _food(payload: Dict[str, Any]) -> tuple:
    return _first_text(payload, "name", "title"), None


def _custom(payload: Dict[str, Any]) -> tuple:
    return _first_text(payload, "title", "name", "label"), None


_EXTRACTORS: Dict[BattleType, Callable[[Dict[str, Any]], tuple]] = {
    BattleType.movie: _movie,
    BattleType.book: _book,
    BattleType.game: _game,
    BattleType.music: _music,
    BattleType.food: _food,
    BattleType.custom: _custom,
}


def normalize_option(payload: Dict[str, Any], battle_type: BattleType = BattleType.custom) -> OptionView:
    if not isinstance(payload, dict):
        raise ValidationError("Cada opción debe ser un objeto JSON")

    identifier = extract_identifier(payload)
    name, image = _EXTRACTORS[battle_type](payload)

    # Si el cliente ya mandó la proyección, se respeta como fallback
    display_name = name or _first_text(payload, "displayName") or UNKNOWN_NAME
    if not isinstance(image, str) or not image.strip():
        image = None
    image_url = image or _first_text(payload, "imageUrl", "image_url", "image")
    if image_url is not None and len(image_url) > MAX_IMAGE_URL_LENGTH:
        raise ValidationError(f"La URL de imagen no puede superar {MAX_IMAGE_URL_LENGTH} caracteres")

    return OptionView(
        identifier=identifier,
        display_name=display_name[:MAX_NAME_LENGTH],
        image_url=image_url,
    )
