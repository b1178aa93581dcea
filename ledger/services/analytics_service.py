# ledger/services/analytics_service.py
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

from ledger.config import settings
from ledger.utils.logger_config import app_logger as logger

BATTLE_CREATED = "battle_created"
VOTE_CAST = "vote_cast"

# Pool chico y un solo cliente HTTP: una ráfaga de votos no crea un hilo por evento
_executor = ThreadPoolExecutor(max_workers=settings.ANALYTICS_WORKERS, thread_name_prefix="analytics")
_client: Optional[httpx.Client] = None
_client_lock = threading.Lock()


def get_http_client() -> httpx.Client:
    global _client
    with _client_lock:
        if _client is None:
            _client = httpx.Client(timeout=settings.ANALYTICS_TIMEOUT)
        return _client


def _post_event(url: str, event: Dict[str, Any]) -> None:
    try:
        response = get_http_client().post(url, json=event)
        response.raise_for_status()
    except httpx.HTTPError as e:
        # Best effort: un sink caído nunca afecta al voto ni a la battle
        logger.warning(f"No se pudo enviar el evento '{event['event_type']}' a analytics: {e}")


def track_event(event_type: str, payload: Dict[str, Any], url: Optional[str] = None) -> Optional[Future]:
    """
    Notifica un evento al sink de analytics sin bloquear el request.

    Devuelve el Future del envío (o None si no hay sink configurado).
    """
    event = {
        "event_type": event_type,
        "payload": payload,
        "sent_at": datetime.now(timezone.utc).isoformat(),
    }
    logger.info(f"Evento {event_type}: {payload}")

    target = url or settings.ANALYTICS_URL
    if not target:
        return None

    return _executor.submit(_post_event, target, event)
