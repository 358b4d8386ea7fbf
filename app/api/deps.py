from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.config.database import get_db
from app.config.settings import settings
from app.core.security import verify_token
from app.crud.alumno import CRUDAlumno, alumno

security = HTTPBearer(auto_error=False)  # auto_error=False permite requests sin token


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
):
    """
    Obtener usuario actual desde el token JWT
    Si disable_auth está activado, devuelve un usuario mock
    """
    from app.models.user import User  # Importar aquí para evitar ciclos

    # Si la autenticación está deshabilitada globalmente
    if settings.disable_auth:
        mock_user = type("MockUser", (), {"id": 0, "ivd_id": "DEV001"})()
        return mock_user

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="No se pudo validar las credenciales",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not credentials:
        raise credentials_exception

    ivd_id = verify_token(credentials.credentials)
    if ivd_id is None:
        raise credentials_exception

    result = await db.execute(select(User).where(User.ivd_id == ivd_id))
    user = result.scalar_one_or_none()

    if user is None:
        raise credentials_exception

    return user


async def get_current_active_user(current_user=Depends(get_current_user)):
    """
    Obtener usuario activo (se puede extender para verificar si está activo)
    """
    return current_user


def get_alumno_service() -> CRUDAlumno:
    """Servicio de alumnos compartido; las pruebas lo sustituyen por uno propio"""
    return alumno
