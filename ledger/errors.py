# ledger/errors.py
"""
Jerarquía de errores del ledger.

Los servicios lanzan estas excepciones y los routers las traducen a
códigos HTTP. Solo StoreUnavailableError es reintentable por el cliente.
"""


class LedgerError(Exception):
    """Base de todos los errores de dominio."""


class ValidationError(LedgerError):
    """Request de creación o voto mal formado (400)."""


class NotFoundError(LedgerError):
    """La battle no existe (404)."""

    def __init__(self, battle_id: str):
        self.battle_id = battle_id
        super().__init__(f"Battle {battle_id} no encontrada")


BattleNotFoundError = NotFoundError


class BattleClosedError(LedgerError):
    """Voto sobre una battle vencida o desactivada (410)."""

    def __init__(self, battle_id: str):
        self.battle_id = battle_id
        super().__init__(f"La battle {battle_id} ya está cerrada")


class DuplicateVoteError(LedgerError):
    """El votante ya votó en esta battle (409). Resultado esperado, no fatal."""

    def __init__(self, battle_id: str, voter_id: str):
        self.battle_id = battle_id
        self.voter_id = voter_id
        super().__init__("Ya votaste en esta battle")


class StoreUnavailableError(LedgerError):
    """Falla de persistencia (503)."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__("Servicio no disponible, intente nuevamente")
