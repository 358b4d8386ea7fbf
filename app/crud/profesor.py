from typing import List, Optional
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.profesor import Profesor
from app.schemas.profesor import Professor


class CRUDProfesor(CRUDBase[Profesor, BaseModel]):
    def __init__(self):
        super().__init__(Profesor)

    async def update_classes(
        self, db: AsyncSession, *, id_profesor: str, classes: str
    ) -> Optional[Profesor]:
        db_obj = await self.get(db, code=id_profesor)
        if db_obj is None:
            return None
        return await self.update(db, db_obj=db_obj, obj_in={"clases": classes})

    async def get_professors(self, db: AsyncSession) -> List[Professor]:
        return [to_professor(p) for p in await self.get_all(db)]


def to_professor(db_obj: Profesor) -> Professor:
    """Representación usada por el formulario de asignación de materias"""
    full_name = " ".join(
        part
        for part in (db_obj.nombre, db_obj.primer_apellido, db_obj.segundo_apellido)
        if part
    )
    return Professor(
        id=db_obj.id_profesor,
        name=full_name,
        first_name=db_obj.nombre,
        first_surname=db_obj.primer_apellido,
        second_surname=db_obj.segundo_apellido,
        classes=db_obj.clases,
    )


profesor = CRUDProfesor()
