from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class Professor(BaseModel):
    id: str
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    first_surname: Optional[str] = None
    second_surname: Optional[str] = None
    classes: Optional[str] = None


class ProfessorClassesUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    professor_id: str = Field(alias="professorId")
    classes: str = ""


class ProfessorUpdateResponse(BaseModel):
    success: bool
    error: Optional[str] = None
