from sqlalchemy import Column, String, Integer
from sqlalchemy.orm import relationship
from .base import BaseModel
from .plan_estudio import materia_plan


class Materia(BaseModel):
    __tablename__ = "materia"

    id_materia = Column("idmateria", Integer, primary_key=True, index=True)
    nombre = Column("nombre", String(200), nullable=False)
    semestre = Column("semestre", Integer, nullable=False, index=True)

    # Relationships
    grupos = relationship("Grupo", back_populates="materia")
    planes = relationship("PlanEstudio", secondary=materia_plan, back_populates="materias")
