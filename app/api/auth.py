import logging
from datetime import timedelta
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.api.deps import get_current_active_user
from app.config.database import get_db
from app.config.settings import settings
from app.core.security import verify_password, create_access_token
from app.models.user import User
from app.schemas.auth import UserLogin, Token

logger = logging.getLogger(__name__)

router = APIRouter()


async def authenticate_user(db: AsyncSession, ivd_id: str, password: str):
    """Autenticar usuario por ivd_id y contraseña"""
    try:
        result = await db.execute(select(User).where(User.ivd_id == ivd_id))
        user = result.scalar_one_or_none()

        if not user:
            return None
        if not verify_password(password, user.password):
            return None
        return user
    except Exception as e:
        logger.error(f"❌ Error en autenticación: {e}")
        return None


@router.post("/login", response_model=Token)
async def login_for_access_token(
    user_data: UserLogin, db: AsyncSession = Depends(get_db)
):
    """
    Endpoint de login que devuelve un JWT token
    """
    user = await authenticate_user(db, user_data.ivd_id, user_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Usuario o contraseña incorrectos",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token_expires = timedelta(minutes=settings.access_token_expire_minutes)
    access_token = create_access_token(
        subject=user.ivd_id, expires_delta=access_token_expires
    )

    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me")
async def get_current_user_info(current_user=Depends(get_current_active_user)):
    """
    Obtener información del usuario actual
    """
    return {"id": current_user.id, "ivd_id": current_user.ivd_id}
