from sqlalchemy import Column, String, Boolean, false
from sqlalchemy.orm import relationship
from .base import BaseModel


class Alumno(BaseModel):
    __tablename__ = "alumno"

    id_alumno = Column("idalumno", String(20), primary_key=True, index=True)
    confirmacion = Column(
        "confirmacion", Boolean, nullable=False, default=False, server_default=false()
    )

    # Relationships
    solicitudes = relationship("Solicitud", back_populates="alumno")
    horarios = relationship("Horario", back_populates="alumno")
