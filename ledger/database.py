# ledger/database.py
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base, Session
from ledger.config import settings
from ledger.errors import StoreUnavailableError
from ledger.utils.logger_config import app_logger as logger


def _connect_args() -> dict:
    # SQLite: la sesión puede cambiar de hilo y los writers concurrentes esperan el lock
    if settings.is_sqlite:
        return {"check_same_thread": False, "timeout": 30}
    return {}


engine = create_engine(settings.DATABASE_URL, echo=False, connect_args=_connect_args())  # usamos logger, no echo

Base = declarative_base()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def init_db():
    import ledger.models
    logger.info("Creando tablas en la base de datos (si no existen)...")
    Base.metadata.create_all(bind=engine)
    logger.info("Tablas creadas correctamente.")

# Esta es la función que FastAPI usará para inyectar la sesión en cada endpoint
def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_guard(db: Session, operation: str):
    """
    Traduce cualquier falla de la base a StoreUnavailableError.

    Hace rollback para dejar la sesión usable y loguea la causa original.
    Los errores de dominio (LedgerError) pasan sin tocar.
    """
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Error de base de datos en '{operation}'")
        raise StoreUnavailableError(operation) from e
