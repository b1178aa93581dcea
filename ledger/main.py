# ledger/main.py
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
import uvicorn

from ledger.config import settings
from ledger.database import init_db
from ledger.routers import battle_router
from ledger.utils.logger_config import app_logger as logger

app = FastAPI(title="READ THE ROOM - Battle Voting Ledger")

# Registrar rutas
app.include_router(battle_router.router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Body mal formado es un 400, igual que las validaciones de dominio
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.get("/health")
def home():
    return {"message": "API corriendo correctamente"}


def main():
    logger.info("Inicializando base de datos...")
    init_db()
    logger.info("Base de datos lista.")

    logger.info(f"Levantando servidor FastAPI en {settings.api_root}...")

    uvicorn.run(
        "ledger.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level="info"
    )


if __name__ == "__main__":
    main()
