from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class AlumnoBase(BaseModel):
    id_alumno: str
    confirmacion: bool = False


class AlumnoCreate(AlumnoBase):
    pass


class AlumnoUpdate(BaseModel):
    confirmacion: bool


class Alumno(AlumnoBase):
    model_config = ConfigDict(from_attributes=True)


class AlumnoWithUser(Alumno):
    """Alumno con su usuario de acceso (sin el hash de la contraseña)"""

    id_usuario: int
    ivd_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AlumnoWithRequest(Alumno):
    id_solicitud: Optional[int] = None
    motivo: Optional[str] = None


class AsignacionHorario(BaseModel):
    success: bool
    groups_assigned: int = 0


class ResultadoConfirmacion(BaseModel):
    success: bool
    message: str


class SemestreIn(BaseModel):
    semester: int = Field(ge=1)


class EstadoAlumno(BaseModel):
    id_alumno: str
    irregular: Optional[bool] = None
    confirmacion: Optional[bool] = None
    has_requests: bool = False
