from pydantic import BaseModel, ConfigDict
from typing import Optional, List


class Degree(BaseModel):
    id: int
    name: str
    status: str = "activo"


class Plan(BaseModel):
    id: int
    version: str
    status: str = "activo"
    degree: Degree


class CourseSubject(BaseModel):
    """Materia con sus planes; degree_ids se deriva de los planes para filtrar"""

    id: int
    name: str
    plans: Optional[List[Plan]] = None
    degree_ids: List[int] = []


class Subject(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    semester: Optional[int] = None


class DegreesResponse(BaseModel):
    degrees: List[Degree] = []


class CourseDetailsResponse(BaseModel):
    success: bool
    data: List[CourseSubject] = []
