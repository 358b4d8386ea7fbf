from typing import List
from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_alumno_service, get_current_active_user
from app.crud.alumno import CRUDAlumno
from app.schemas.alumno import (
    Alumno,
    AlumnoCreate,
    AlumnoUpdate,
    AlumnoWithRequest,
    AlumnoWithUser,
    AsignacionHorario,
    EstadoAlumno,
    ResultadoConfirmacion,
    SemestreIn,
)
from app.utils.helpers import ResponseFormatter

router = APIRouter()


@router.get("/", response_model=dict)
async def read_alumnos(service: CRUDAlumno = Depends(get_alumno_service)):
    """Obtener todos los alumnos"""
    try:
        alumnos = await service.find_all()
        data = [Alumno.model_validate(a).model_dump() for a in alumnos]
        return {"success": True, "data": data, "total": len(data)}
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/", response_model=dict, status_code=201)
async def create_alumno(
    alumno_in: AlumnoCreate,
    service: CRUDAlumno = Depends(get_alumno_service),
    current_user=Depends(get_current_active_user),
):
    """Crear un alumno con su estado de confirmación"""
    try:
        db_obj = await service.create(alumno_in)
        return ResponseFormatter.success(
            Alumno.model_validate(db_obj).model_dump(), "Alumno creado"
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/confirm-all", response_model=dict)
async def confirm_all_alumnos(
    service: CRUDAlumno = Depends(get_alumno_service),
    current_user=Depends(get_current_active_user),
):
    """Marcar el horario de todos los alumnos como confirmado"""
    try:
        alumnos = await service.confirm_all_schedules()
        data = [Alumno.model_validate(a).model_dump() for a in alumnos]
        return ResponseFormatter.success(data, f"{len(data)} alumnos confirmados")
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{id_alumno}", response_model=Alumno)
async def read_alumno(id_alumno: str, service: CRUDAlumno = Depends(get_alumno_service)):
    try:
        db_obj = await service.find_by_id(id_alumno)
        if db_obj is None:
            raise HTTPException(status_code=404, detail="Alumno no encontrado")
        return db_obj
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/{id_alumno}", response_model=Alumno)
async def update_alumno(
    id_alumno: str,
    alumno_in: AlumnoUpdate,
    service: CRUDAlumno = Depends(get_alumno_service),
    current_user=Depends(get_current_active_user),
):
    try:
        db_obj = await service.update(id_alumno, alumno_in)
        if db_obj is None:
            raise HTTPException(status_code=404, detail="Alumno no encontrado")
        return db_obj
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{id_alumno}", response_model=Alumno)
async def delete_alumno(
    id_alumno: str,
    service: CRUDAlumno = Depends(get_alumno_service),
    current_user=Depends(get_current_active_user),
):
    """Eliminar un alumno; falla si aún tiene solicitudes u horario"""
    try:
        db_obj = await service.delete(id_alumno)
        if db_obj is None:
            raise HTTPException(status_code=404, detail="Alumno no encontrado")
        return db_obj
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/{id_alumno}/confirm", response_model=Alumno)
async def confirm_alumno(
    id_alumno: str,
    service: CRUDAlumno = Depends(get_alumno_service),
    current_user=Depends(get_current_active_user),
):
    """Confirmar el horario del alumno y descartar sus solicitudes de cambio"""
    try:
        db_obj = await service.confirm_schedule(id_alumno)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    if db_obj is None:
        raise HTTPException(status_code=404, detail="Alumno no encontrado")
    return db_obj


@router.post("/{id_alumno}/confirm-with-schedule", response_model=ResultadoConfirmacion)
async def confirm_alumno_with_schedule(
    id_alumno: str,
    semestre: SemestreIn,
    service: CRUDAlumno = Depends(get_alumno_service),
    current_user=Depends(get_current_active_user),
):
    """Crear usuario y alumno si hace falta, confirmar y asignar horario del semestre"""
    return await service.confirm_student_with_schedule(id_alumno, semestre.semester)


@router.post("/{id_alumno}/schedule", response_model=AsignacionHorario)
async def assign_alumno_schedule(
    id_alumno: str,
    semestre: SemestreIn,
    service: CRUDAlumno = Depends(get_alumno_service),
    current_user=Depends(get_current_active_user),
):
    return await service.assign_schedule_by_semester(id_alumno, semestre.semester)


@router.get("/{id_alumno}/status", response_model=EstadoAlumno)
async def read_alumno_status(
    id_alumno: str, service: CRUDAlumno = Depends(get_alumno_service)
):
    """Estado de confirmación y si el alumno es irregular"""
    irregular = await service.is_irregular_student(id_alumno)
    if irregular is None:
        raise HTTPException(status_code=404, detail="Alumno no encontrado")
    try:
        confirmacion = await service.query_student_confirmation(id_alumno)
        solicitud = await service.query_student_requests(id_alumno)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return EstadoAlumno(
        id_alumno=id_alumno,
        irregular=irregular,
        confirmacion=confirmacion,
        has_requests=solicitud is not None,
    )


@router.get("/{id_alumno}/requests", response_model=List[AlumnoWithRequest])
async def read_alumno_requests(
    id_alumno: str, service: CRUDAlumno = Depends(get_alumno_service)
):
    rows = await service.find_with_requests(id_alumno)
    if not rows:
        raise HTTPException(status_code=404, detail="Alumno no encontrado")
    return rows


@router.delete("/{id_alumno}/requests", response_model=dict)
async def delete_alumno_requests(
    id_alumno: str,
    service: CRUDAlumno = Depends(get_alumno_service),
    current_user=Depends(get_current_active_user),
):
    try:
        deleted = await service.force_delete_requests(id_alumno)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"success": True, "deleted": deleted}


@router.get("/{id_alumno}/user", response_model=AlumnoWithUser)
async def read_alumno_user(
    id_alumno: str, service: CRUDAlumno = Depends(get_alumno_service)
):
    row = await service.find_with_user(id_alumno)
    if row is None:
        raise HTTPException(status_code=404, detail="Alumno o usuario no encontrado")
    return row
