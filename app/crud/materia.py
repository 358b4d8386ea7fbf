from typing import List
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.crud.base import CRUDBase
from app.models.materia import Materia
from app.models.plan_estudio import PlanEstudio
from app.schemas.materia import CourseSubject, Degree, Plan, Subject


class CRUDMateria(CRUDBase[Materia, BaseModel]):
    def __init__(self):
        super().__init__(Materia)

    async def get_course_details(self, db: AsyncSession) -> List[CourseSubject]:
        """Materias con sus planes y la carrera de cada plan"""
        result = await db.execute(
            select(Materia)
            .options(selectinload(Materia.planes).selectinload(PlanEstudio.carrera))
            .order_by(Materia.id_materia)
        )
        courses = []
        for m in result.scalars().all():
            plans = [
                Plan(
                    id=p.id_plan,
                    version=p.version,
                    status=p.estatus,
                    degree=Degree(
                        id=p.carrera.id_carrera,
                        name=p.carrera.nombre,
                        status=p.carrera.estatus,
                    ),
                )
                for p in sorted(m.planes, key=lambda p: p.id_plan)
            ]
            courses.append(
                CourseSubject(
                    id=m.id_materia,
                    name=m.nombre,
                    plans=plans,
                    degree_ids=[p.degree.id for p in plans],
                )
            )
        return courses

    async def get_subjects(self, db: AsyncSession) -> List[Subject]:
        materias = await self.get_all(db)
        return [Subject(id=m.id_materia, name=m.nombre, semester=m.semestre) for m in materias]


materia = CRUDMateria()
