from sqlalchemy import Column, String, Integer, ForeignKey, Text, DateTime, func
from sqlalchemy.orm import relationship
from .base import BaseModel


class Solicitud(BaseModel):
    """Solicitud de cambio de horario pendiente de un alumno"""

    __tablename__ = "solicitud"

    id_solicitud = Column("idsolicitud", Integer, primary_key=True, autoincrement=True)
    id_alumno = Column(
        "idalumno", String(20), ForeignKey("alumno.idalumno"), nullable=False, index=True
    )
    motivo = Column("motivo", Text, nullable=True)
    fecha = Column("fecha", DateTime(timezone=True), server_default=func.now())

    # Relationships
    alumno = relationship("Alumno", back_populates="solicitudes")
