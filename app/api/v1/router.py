from fastapi import APIRouter

from app.api.v1 import alumnos, catalogo, profesores

api_router = APIRouter()

# Endpoints consumidos por el formulario de asignación de materias
api_router.include_router(catalogo.router, tags=["📚 Catálogo"])
api_router.include_router(profesores.router, tags=["👨‍🏫 Profesores"])

# Servicio de registros de alumnos
api_router.include_router(alumnos.router, prefix="/students", tags=["👨‍🎓 Alumnos"])
