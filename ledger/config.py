# ledger/config.py
import os
from dotenv import load_dotenv


# Carga el archivo .env
load_dotenv()

class Settings:
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./ledger.db")

    API_HOST: str = os.getenv("API_HOST", "127.0.0.1")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))

    SECRET_KEY: str = os.getenv("SECRET_KEY", "secret_dev")  # cambiá esto en producción
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")

    # Trending: votos + bonus fijo si la battle es reciente
    TRENDING_RECENCY_BONUS: int = int(os.getenv("TRENDING_RECENCY_BONUS", "10"))
    TRENDING_DEFAULT_WINDOW: str = os.getenv("TRENDING_DEFAULT_WINDOW", "24h")
    TRENDING_DEFAULT_LIMIT: int = int(os.getenv("TRENDING_DEFAULT_LIMIT", "12"))

    # Si no hay URL, los eventos solo se loguean
    ANALYTICS_URL: str | None = os.getenv("ANALYTICS_URL") or None
    ANALYTICS_TIMEOUT: float = float(os.getenv("ANALYTICS_TIMEOUT", "2.0"))
    ANALYTICS_WORKERS: int = int(os.getenv("ANALYTICS_WORKERS", "2"))

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def api_root(self) -> str:
        return f"http://{self.API_HOST}:{self.API_PORT}"


settings = Settings()
