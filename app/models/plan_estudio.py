from sqlalchemy import Column, String, Integer, ForeignKey, Table
from sqlalchemy.orm import relationship
from app.config.database import Base
from .base import BaseModel

# Una materia pertenece a uno o más planes
materia_plan = Table(
    "materiaplan",
    Base.metadata,
    Column("idmateria", Integer, ForeignKey("materia.idmateria"), primary_key=True),
    Column("idplan", Integer, ForeignKey("planestudio.idplan"), primary_key=True),
)


class PlanEstudio(BaseModel):
    __tablename__ = "planestudio"

    id_plan = Column("idplan", Integer, primary_key=True, index=True)
    version = Column("version", String(50), nullable=False)
    estatus = Column("estatus", String(20), nullable=False, default="activo")
    id_carrera = Column("idcarrera", Integer, ForeignKey("carrera.idcarrera"), nullable=False)

    # Relationships
    carrera = relationship("Carrera", back_populates="planes_estudio")
    materias = relationship("Materia", secondary=materia_plan, back_populates="planes")
