from sqlalchemy import Column, String, Integer, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from .base import BaseModel


class Horario(BaseModel):
    """Inscripción de un alumno en un grupo; se reemplaza completa en cada asignación"""

    __tablename__ = "horario"

    fecha = Column("fecha", DateTime(timezone=True), nullable=False)
    id_grupo = Column("idgrupo", Integer, ForeignKey("grupo.idgrupo"), primary_key=True)
    id_alumno = Column(
        "idalumno", String(20), ForeignKey("alumno.idalumno"), primary_key=True, index=True
    )

    # Relationships
    grupo = relationship("Grupo", back_populates="horarios")
    alumno = relationship("Alumno", back_populates="horarios")
