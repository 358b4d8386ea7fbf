from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel


class Grupo(BaseModel):
    __tablename__ = "grupo"

    id_grupo = Column("idgrupo", Integer, primary_key=True, index=True)
    id_materia = Column("idmateria", Integer, ForeignKey("materia.idmateria"), nullable=False)
    id_profesor = Column(
        "idprofesor", String(20), ForeignKey("profesor.idprofesor"), nullable=True
    )
    salon = Column("salon", String(20), nullable=True)

    # Relationships
    materia = relationship("Materia", back_populates="grupos")
    profesor = relationship("Profesor", back_populates="grupos")
    horarios = relationship("Horario", back_populates="grupo")
