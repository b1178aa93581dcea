# ledger/utils/time_window.py
import re
from datetime import datetime, timedelta

from ledger.errors import ValidationError

_WINDOW_RE = re.compile(r"^\s*(\d+)\s*([mhd])\s*$")
_UNITS = {"m": "minutes", "h": "hours", "d": "days"}


def parse_window(value: str) -> timedelta:
    """
    Convierte "90m", "24h" o "7d" en un timedelta.
    """
    match = _WINDOW_RE.match(value or "")
    if not match:
        raise ValidationError(f"Ventana inválida: '{value}'. Formato esperado: <n>m, <n>h o <n>d")

    amount, unit = int(match.group(1)), match.group(2)
    if amount <= 0:
        raise ValidationError("La ventana debe ser mayor a cero")

    try:
        return timedelta(**{_UNITS[unit]: amount})
    except OverflowError:
        raise ValidationError(f"Ventana fuera de rango: '{value}'")


def format_time_left(ends_at: datetime | None, now: datetime, closed: bool = False) -> str | None:
    """Etiqueta de cuenta regresiva que muestra el visor de battles."""
    if closed or (ends_at is not None and ends_at <= now):
        return "Battle ended"
    if ends_at is None:
        return None

    remaining = int((ends_at - now).total_seconds())
    days, rest = divmod(remaining, 86400)
    hours, rest = divmod(rest, 3600)
    minutes = rest // 60

    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
