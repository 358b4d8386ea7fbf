from sqlalchemy import Column, String, Integer
from sqlalchemy.orm import relationship
from .base import BaseModel


class Carrera(BaseModel):
    __tablename__ = "carrera"

    id_carrera = Column("idcarrera", Integer, primary_key=True, index=True)
    nombre = Column("nombre", String(200), nullable=False)
    estatus = Column("estatus", String(20), nullable=False, default="activo")

    # Relationships
    planes_estudio = relationship("PlanEstudio", back_populates="carrera")
