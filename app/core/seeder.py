from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.config.database import async_session_factory
from app.crud.carrera import carrera as crud_carrera
from app.models.alumno import Alumno
from app.models.carrera import Carrera
from app.models.grupo import Grupo
from app.models.materia import Materia
from app.models.plan_estudio import PlanEstudio
from app.models.profesor import Profesor
from app.models.solicitud import Solicitud

CARRERAS = [
    {"id_carrera": 1, "nombre": "Ingeniería en Desarrollo de Software"},
    {"id_carrera": 2, "nombre": "Diseño de Videojuegos"},
]

PLANES = [
    {"id_plan": 1, "version": "2023", "id_carrera": 1},
    {"id_plan": 2, "version": "2023", "id_carrera": 2},
]

# (id, nombre, semestre, planes)
MATERIAS = [
    (1, "Álgebra", 1, [1, 2]),
    (2, "Cálculo", 1, [1]),
    (3, "Física", 1, [1]),
    (4, "Dibujo", 1, [2]),
    (5, "Programación Orientada a Objetos", 2, [1, 2]),
    (6, "Estructuras de Datos", 2, [1]),
    (7, "Modelado 3D", 2, [2]),
    (8, "Bases de Datos", 3, [1]),
]


async def seed_database(session_factory: async_sessionmaker = async_session_factory):
    """Poblar la base de datos con datos iniciales"""

    async with session_factory() as db:
        try:
            print("🌱 Iniciando seeding de la base de datos...")

            print("🎓 Creando carreras y planes...")
            db.add_all([Carrera(**c) for c in CARRERAS])
            await db.flush()
            planes = {p["id_plan"]: PlanEstudio(**p) for p in PLANES}
            db.add_all(planes.values())
            await db.flush()

            print("📖 Creando materias...")
            for id_materia, nombre, semestre, ids_plan in MATERIAS:
                db.add(
                    Materia(
                        id_materia=id_materia,
                        nombre=nombre,
                        semestre=semestre,
                        planes=[planes[i] for i in ids_plan],
                    )
                )
            await db.flush()

            print("👨‍🏫 Creando profesor...")
            db.add(
                Profesor(
                    id_profesor="PROF001",
                    nombre="Laura",
                    primer_apellido="Méndez",
                    segundo_apellido="Ríos",
                    clases="Álgebra,Cálculo",
                )
            )
            await db.flush()

            print("👥 Creando grupos...")
            id_grupo = 1
            for id_materia, _, _, _ in MATERIAS:
                for salon in ("A1", "B2"):
                    db.add(
                        Grupo(
                            id_grupo=id_grupo,
                            id_materia=id_materia,
                            id_profesor="PROF001",
                            salon=salon,
                        )
                    )
                    id_grupo += 1

            print("👨‍🎓 Creando alumnos...")
            db.add_all(
                [
                    Alumno(id_alumno="A001", confirmacion=False),
                    Alumno(id_alumno="A002", confirmacion=False),
                ]
            )
            await db.flush()
            db.add(Solicitud(id_alumno="A002", motivo="Cambio de grupo de Cálculo"))

            await db.commit()

            print("✅ Seeding completado exitosamente!")
            print(f"📖 Materias creadas: {len(MATERIAS)}")
            print(f"👥 Grupos creados: {id_grupo - 1}")

        except Exception as e:
            print(f"❌ Error durante seeding: {e}")
            await db.rollback()
            raise


async def check_if_seeded(db: AsyncSession) -> bool:
    """Verificar si la base de datos ya tiene datos"""
    return await crud_carrera.count(db) > 0


async def run_seeder(session_factory: async_sessionmaker = async_session_factory):
    """Ejecutar seeder solo si no hay datos"""
    async with session_factory() as db:
        if await check_if_seeded(db):
            print("📊 Base de datos ya tiene datos, saltando seeding...")
            return False

    await seed_database(session_factory)
    return True
