import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.database import get_db
from app.crud.carrera import carrera
from app.crud.materia import materia
from app.schemas.materia import CourseDetailsResponse, DegreesResponse, Subject

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/getDegrees", response_model=DegreesResponse)
async def read_degrees(db: AsyncSession = Depends(get_db)):
    """Carreras disponibles para filtrar materias"""
    try:
        return DegreesResponse(degrees=await carrera.get_degrees(db))
    except Exception as e:
        logger.error(f"❌ Error obteniendo carreras: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/course-details", response_model=CourseDetailsResponse)
async def read_course_details(db: AsyncSession = Depends(get_db)):
    """Materias con sus planes de estudio y la carrera de cada plan"""
    try:
        return CourseDetailsResponse(success=True, data=await materia.get_course_details(db))
    except Exception as e:
        logger.error(f"❌ Error obteniendo detalle de materias: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/subjects", response_model=List[Subject])
async def read_subjects(db: AsyncSession = Depends(get_db)):
    try:
        return await materia.get_subjects(db)
    except Exception as e:
        logger.error(f"❌ Error obteniendo materias: {e}")
        raise HTTPException(status_code=500, detail=str(e))
