import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_active_user
from app.config.database import get_db
from app.crud.profesor import profesor
from app.schemas.profesor import Professor, ProfessorClassesUpdate, ProfessorUpdateResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/professors", response_model=List[Professor])
async def read_professors(db: AsyncSession = Depends(get_db)):
    try:
        return await profesor.get_professors(db)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post(
    "/professors", response_model=ProfessorUpdateResponse, response_model_exclude_none=True
)
async def update_professor_classes(
    update_in: ProfessorClassesUpdate,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_active_user),
):
    """Guardar las materias del profesor como texto separado por comas"""
    try:
        db_obj = await profesor.update_classes(
            db, id_profesor=update_in.professor_id, classes=update_in.classes
        )
    except Exception as e:
        logger.error(f"❌ Error actualizando materias de {update_in.professor_id}: {e}")
        return ProfessorUpdateResponse(success=False, error=str(e))

    if db_obj is None:
        return ProfessorUpdateResponse(success=False, error="Profesor no encontrado")

    logger.info(f"📚 Materias actualizadas para el profesor {update_in.professor_id}")
    return ProfessorUpdateResponse(success=True)
