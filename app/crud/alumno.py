import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select, update, delete, insert, func, exists
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config.database import async_session_factory
from app.config.settings import settings
from app.models.alumno import Alumno
from app.models.grupo import Grupo
from app.models.horario import Horario
from app.models.materia import Materia
from app.models.solicitud import Solicitud
from app.models.user import User
from app.schemas.alumno import (
    AlumnoCreate,
    AlumnoUpdate,
    AlumnoWithRequest,
    AlumnoWithUser,
    AsignacionHorario,
    ResultadoConfirmacion,
)

logger = logging.getLogger(__name__)


class CRUDAlumno:
    """
    Servicio de registros de alumnos.

    Cada operación toma su propia sesión del pool y la libera al salir, haya
    terminado bien, con error o antes de tiempo. Las operaciones de varios pasos
    (confirmar horario, asignar horario por semestre) corren en una sola
    transacción; el flujo completo de `confirm_student_with_schedule` no.
    """

    def __init__(self, session_factory: async_sessionmaker = async_session_factory):
        self.session_factory = session_factory

    # CRUD básico

    async def create(self, obj_in: AlumnoCreate) -> Alumno:
        async with self.session_factory() as db:
            db_obj = Alumno(id_alumno=obj_in.id_alumno, confirmacion=obj_in.confirmacion)
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)
            return db_obj

    async def find_all(self) -> List[Alumno]:
        async with self.session_factory() as db:
            result = await db.execute(select(Alumno).order_by(Alumno.id_alumno))
            return result.scalars().all()

    async def find_by_id(self, id_alumno: str) -> Optional[Alumno]:
        async with self.session_factory() as db:
            return await self._get(db, id_alumno)

    async def update(self, id_alumno: str, obj_in: AlumnoUpdate) -> Optional[Alumno]:
        async with self.session_factory() as db:
            db_obj = await self._get(db, id_alumno)
            if db_obj is None:
                return None
            db_obj.confirmacion = obj_in.confirmacion
            await db.commit()
            await db.refresh(db_obj)
            return db_obj

    async def delete(self, id_alumno: str) -> Optional[Alumno]:
        async with self.session_factory() as db:
            db_obj = await self._get(db, id_alumno)
            if db_obj:
                try:
                    await db.delete(db_obj)
                    await db.commit()
                except Exception as e:
                    await db.rollback()
                    logger.error(f"❌ Error eliminando al alumno {id_alumno}: {e}")
                    raise
            return db_obj

    async def _get(self, db: AsyncSession, id_alumno: str) -> Optional[Alumno]:
        result = await db.execute(select(Alumno).where(Alumno.id_alumno == id_alumno))
        return result.scalar_one_or_none()

    # Consultas relacionadas

    async def find_with_user(self, id_alumno: str) -> Optional[AlumnoWithUser]:
        async with self.session_factory() as db:
            result = await db.execute(
                select(Alumno, User)
                .join(User, User.ivd_id == Alumno.id_alumno)
                .where(Alumno.id_alumno == id_alumno)
            )
            row = result.first()
            if row is None:
                return None
            alumno, user = row
            return AlumnoWithUser(
                id_alumno=alumno.id_alumno,
                confirmacion=alumno.confirmacion,
                id_usuario=user.id,
                ivd_id=user.ivd_id,
                created_at=user.created_at,
                updated_at=user.updated_at,
            )

    async def find_with_requests(self, id_alumno: str) -> List[AlumnoWithRequest]:
        async with self.session_factory() as db:
            result = await db.execute(
                select(Alumno, Solicitud)
                .outerjoin(Solicitud, Solicitud.id_alumno == Alumno.id_alumno)
                .where(Alumno.id_alumno == id_alumno)
                .order_by(Solicitud.id_solicitud)
            )
            return [
                AlumnoWithRequest(
                    id_alumno=alumno.id_alumno,
                    confirmacion=alumno.confirmacion,
                    id_solicitud=solicitud.id_solicitud if solicitud else None,
                    motivo=solicitud.motivo if solicitud else None,
                )
                for alumno, solicitud in result.all()
            ]

    # Confirmación de horario

    async def confirm_schedule(self, id_alumno: str) -> Optional[Alumno]:
        """
        Marca el horario del alumno como confirmado y elimina sus solicitudes
        de cambio pendientes. Ambas escrituras se confirman juntas o ninguna.
        """
        async with self.session_factory() as db:
            try:
                logger.info(f"📝 Iniciando confirmación del alumno {id_alumno}")

                request_count = await db.scalar(
                    select(func.count())
                    .select_from(Solicitud)
                    .where(Solicitud.id_alumno == id_alumno)
                )
                logger.info(
                    f"📋 {request_count} solicitudes pendientes para el alumno {id_alumno}"
                )

                await db.execute(
                    update(Alumno)
                    .where(Alumno.id_alumno == id_alumno)
                    .values(confirmacion=True)
                )

                if request_count > 0:
                    deleted = await db.execute(
                        delete(Solicitud).where(Solicitud.id_alumno == id_alumno)
                    )
                    logger.info(
                        f"🧹 {deleted.rowcount} solicitudes eliminadas para el alumno {id_alumno}"
                    )

                alumno = await self._get(db, id_alumno)
                await db.commit()
                logger.info(f"✅ Alumno {id_alumno} confirmado")
                return alumno

            except Exception as e:
                await db.rollback()
                logger.error(f"❌ Error confirmando al alumno {id_alumno}: {e}")
                raise

    async def confirm_all_schedules(self) -> List[Alumno]:
        async with self.session_factory() as db:
            await db.execute(update(Alumno).values(confirmacion=True))
            await db.commit()
            result = await db.execute(select(Alumno).order_by(Alumno.id_alumno))
            return result.scalars().all()

    async def ensure_user_exists(self, student_id: str) -> bool:
        """
        Garantiza que exista una fila en `users` para el alumno, creándola con la
        contraseña por defecto. Nunca lanza: devuelve False si algo falla.
        """
        async with self.session_factory() as db:
            try:
                result = await db.execute(select(User.id).where(User.ivd_id == student_id))
                if result.first() is not None:
                    return True

                await db.execute(
                    insert(User).values(
                        ivd_id=student_id,
                        password=settings.default_user_password_hash,
                        created_at=func.now(),
                        updated_at=func.now(),
                    )
                )
                await db.commit()
                logger.info(f"👤 Usuario creado para {student_id}")
                return True
            except Exception as e:
                await db.rollback()
                logger.error(f"❌ Error asegurando el usuario de {student_id}: {e}")
                return False

    async def assign_schedule_by_semester(
        self, student_id: str, semester: int
    ) -> AsignacionHorario:
        """
        Reemplaza el horario del alumno por un registro por cada grupo cuya
        materia pertenece al semestre indicado.
        """
        async with self.session_factory() as db:
            try:
                await db.execute(delete(Horario).where(Horario.id_alumno == student_id))

                result = await db.execute(
                    select(Grupo.id_grupo)
                    .join(Materia, Grupo.id_materia == Materia.id_materia)
                    .where(Materia.semestre == semester)
                    .order_by(Grupo.id_grupo)
                )
                group_ids = [group_id for group_id in result.scalars().all() if group_id]

                fecha = datetime.now(timezone.utc)
                db.add_all(
                    [
                        Horario(fecha=fecha, id_grupo=group_id, id_alumno=student_id)
                        for group_id in group_ids
                    ]
                )
                await db.commit()
            except Exception as e:
                await db.rollback()
                logger.error(f"❌ Error asignando horario al alumno {student_id}: {e}")
                return AsignacionHorario(success=False, groups_assigned=0)

        logger.info(
            f"🗓️ {len(group_ids)} grupos del semestre {semester} asignados a {student_id}"
        )
        return AsignacionHorario(success=True, groups_assigned=len(group_ids))

    async def confirm_student_with_schedule(
        self, student_id: str, semester: int
    ) -> ResultadoConfirmacion:
        """
        Flujo completo: usuario → alumno confirmado → horario del semestre.

        Cada paso se confirma por separado, así que un fallo tardío deja los
        pasos anteriores aplicados; el mensaje indica qué paso falló.
        """
        try:
            if not await self.ensure_user_exists(student_id):
                return ResultadoConfirmacion(
                    success=False,
                    message=f"No se pudo asegurar el usuario del alumno {student_id}",
                )

            alumno = await self.find_by_id(student_id)
            if alumno is None:
                await self.create(AlumnoCreate(id_alumno=student_id, confirmacion=True))
            else:
                await self.confirm_schedule(student_id)

            asignacion = await self.assign_schedule_by_semester(student_id, semester)
            if not asignacion.success:
                return ResultadoConfirmacion(
                    success=False,
                    message=f"No se pudo asignar el horario del alumno {student_id}",
                )

            return ResultadoConfirmacion(
                success=True,
                message=(
                    f"Alumno {student_id} procesado con "
                    f"{asignacion.groups_assigned} grupos asignados"
                ),
            )
        except Exception as e:
            logger.error(f"❌ Error en confirmación completa de {student_id}: {e}")
            return ResultadoConfirmacion(
                success=False,
                message=str(e) or f"Error desconocido procesando al alumno {student_id}",
            )

    # Consultas auxiliares

    async def check_exists(self, student_id: str) -> Optional[Alumno]:
        async with self.session_factory() as db:
            return await self._get(db, student_id)

    async def create_with_status(self, student_id: str, confirmacion: bool = False) -> Alumno:
        return await self.create(AlumnoCreate(id_alumno=student_id, confirmacion=confirmacion))

    async def is_irregular_student(self, student_id: str) -> Optional[bool]:
        """Un alumno es irregular si tiene al menos una solicitud de cambio"""
        async with self.session_factory() as db:
            try:
                result = await db.execute(
                    select(
                        Alumno.id_alumno,
                        exists()
                        .where(Solicitud.id_alumno == Alumno.id_alumno)
                        .label("irregular"),
                    ).where(Alumno.id_alumno == student_id)
                )
                row = result.first()
                return bool(row.irregular) if row is not None else None
            except Exception as e:
                logger.error(f"❌ Error verificando si {student_id} es irregular: {e}")
                return None

    async def query_student_requests(self, student_id: str) -> Optional[Solicitud]:
        async with self.session_factory() as db:
            result = await db.execute(
                select(Solicitud).where(Solicitud.id_alumno == student_id).limit(1)
            )
            return result.scalars().first()

    async def query_student_confirmation(self, student_id: str) -> Optional[bool]:
        async with self.session_factory() as db:
            result = await db.execute(
                select(Alumno.confirmacion).where(Alumno.id_alumno == student_id).limit(1)
            )
            return result.scalar_one_or_none()

    async def force_delete_requests(self, student_id: str) -> int:
        async with self.session_factory() as db:
            try:
                logger.info(f"🧹 Eliminando todas las solicitudes del alumno {student_id}")
                result = await db.execute(
                    delete(Solicitud).where(Solicitud.id_alumno == student_id)
                )
                await db.commit()
                deleted = result.rowcount or 0
                logger.info(f"✅ {deleted} solicitudes eliminadas para {student_id}")
                return deleted
            except Exception as e:
                await db.rollback()
                logger.error(f"❌ Error eliminando solicitudes de {student_id}: {e}")
                raise


alumno = CRUDAlumno()
