from .base import BaseModel
from .alumno import Alumno
from .solicitud import Solicitud
from .horario import Horario
from .grupo import Grupo
from .materia import Materia
from .plan_estudio import PlanEstudio, materia_plan
from .carrera import Carrera
from .profesor import Profesor
from .user import User

__all__ = [
    "BaseModel",
    "Alumno",
    "Solicitud",
    "Horario",
    "Grupo",
    "Materia",
    "PlanEstudio",
    "materia_plan",
    "Carrera",
    "Profesor",
    "User",
]
