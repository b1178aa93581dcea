# ledger/utils/clock.py
from datetime import datetime, timedelta, timezone


class Clock:
    """Fuente de la hora actual. Siempre UTC naive, igual que lo que guarda la base."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc).replace(tzinfo=None)


class FixedClock(Clock):
    """Reloj manual para tests: no avanza salvo que se lo pida."""

    def __init__(self, start: datetime):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current


system_clock = Clock()


# Dependencia de FastAPI; los tests la reemplazan con un FixedClock
def get_clock() -> Clock:
    return system_clock
