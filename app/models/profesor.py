from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship
from .base import BaseModel


class Profesor(BaseModel):
    __tablename__ = "profesor"

    id_profesor = Column("idprofesor", String(20), primary_key=True, index=True)
    nombre = Column("nombre", String(100), nullable=False)
    primer_apellido = Column("primer_apellido", String(100), nullable=True)
    segundo_apellido = Column("segundo_apellido", String(100), nullable=True)
    # Nombres de materias separados por comas (o ids numéricos en el formato anterior)
    clases = Column("clases", Text, nullable=False, default="")

    # Relationships
    grupos = relationship("Grupo", back_populates="profesor")
