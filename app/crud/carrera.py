from typing import List
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.base import CRUDBase
from app.models.carrera import Carrera
from app.schemas.materia import Degree


class CRUDCarrera(CRUDBase[Carrera, BaseModel]):
    def __init__(self):
        super().__init__(Carrera)

    async def get_degrees(self, db: AsyncSession) -> List[Degree]:
        result = await db.execute(select(Carrera).order_by(Carrera.nombre))
        return [
            Degree(id=c.id_carrera, name=c.nombre, status=c.estatus)
            for c in result.scalars().all()
        ]


carrera = CRUDCarrera()
