import os
import tempfile
from datetime import datetime

# Antes de importar ledger: base y logs temporales, sin sink de analytics
_TMP_DIR = tempfile.mkdtemp(prefix="ledger-test-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'ledger_test.db')}"
os.environ["LEDGER_LOG_DIR"] = _TMP_DIR
os.environ["ANALYTICS_URL"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from ledger.main import app
from ledger.database import Base, SessionLocal, engine, get_db
from ledger.utils.clock import FixedClock, get_clock
import ledger.models  # noqa: F401  registra las tablas en Base.metadata

START = datetime(2026, 1, 1, 12, 0, 0)


@pytest.fixture(scope="session", autouse=True)
def setup_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session():
    session = SessionLocal()
    try:
        yield session
        session.rollback()
    finally:
        session.close()


@pytest.fixture(scope="function")
def clock():
    return FixedClock(START)


@pytest.fixture(scope="function")
def client(db_session, clock):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function", autouse=True)
def reset_database(db_session: Session):
    Base.metadata.drop_all(bind=db_session.get_bind())
    Base.metadata.create_all(bind=db_session.get_bind())
    yield
    db_session.commit()


# Marcas y niveles: primero corren los tests "bajo", después "medio" y "alto"
niveles_ejecucion = ["bajo", "medio", "alto"]
estado_niveles = {nivel: {"passed": 0, "failed": 0, "skipped": 0} for nivel in niveles_ejecucion}
item_niveles_cache = {}


def pytest_configure(config):
    config.addinivalue_line("markers", "nivel(n): marca el test con un nivel: bajo, medio o alto")


def get_nivel(item):
    marca = item.get_closest_marker("nivel")
    return marca.args[0] if marca else "bajo"


def pytest_collection_modifyitems(session, config, items):
    for item in items:
        item_niveles_cache[item.nodeid] = get_nivel(item)

    items.sort(key=lambda item: niveles_ejecucion.index(get_nivel(item)))


def pytest_runtest_logreport(report):
    if report.when != "call":
        return

    estado = estado_niveles[item_niveles_cache.get(report.nodeid, "bajo")]
    if report.passed:
        estado["passed"] += 1
    elif report.failed:
        estado["failed"] += 1
    elif report.skipped:
        estado["skipped"] += 1


def pytest_terminal_summary(terminalreporter, exitstatus):
    terminalreporter.write_line("========= RESUMEN POR NIVEL =========")
    for nivel in niveles_ejecucion:
        stats = estado_niveles[nivel]
        total = stats["passed"] + stats["failed"] + stats["skipped"]
        terminalreporter.write_line(
            f"Nivel: {nivel.upper()} - Total: {total} | "
            f"✔ {stats['passed']}  ✘ {stats['failed']}  ⏭ {stats['skipped']}"
        )
