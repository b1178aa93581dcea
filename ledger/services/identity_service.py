# ledger/services/identity_service.py
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import jwt, JWTError

from ledger.config import settings
from ledger.errors import ValidationError

ACCESS_TOKEN_EXPIRE_MINUTES = 60
ACCOUNT_PREFIX = "user:"

# auto_error=False: votar sin cuenta es el caso normal
bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Emite un token como lo haría el proveedor de identidad (útil en tests y scripts)."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def get_current_account_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """
    Devuelve el id de cuenta del token, o None si el request es anónimo.
    Un token presente pero inválido es un 401, no un voto anónimo.
    """
    if credentials is None:
        return None

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Token inválido o expirado",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(credentials.credentials, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        subject = payload.get("sub")
        if subject is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    return str(subject)


def resolve_voter_id(session_token: Optional[str], account_id: Optional[str] = None) -> str:
    """
    Identidad estable del votante.

    Con cuenta verificada se usa "user:<id>". Sin cuenta se usa el token
    de sesión que genera y guarda el cliente, tal cual: el servidor no lo
    verifica, así que es falsificable (limitación conocida).
    """
    if account_id:
        return f"{ACCOUNT_PREFIX}{account_id}"

    if session_token and session_token.strip():
        # El prefijo de cuenta queda reservado para identidades verificadas
        if session_token.startswith(ACCOUNT_PREFIX):
            raise ValidationError(f"voterId no puede empezar con '{ACCOUNT_PREFIX}'")
        return session_token

    raise ValidationError("Falta voterId (token de sesión) o un token de autenticación")
