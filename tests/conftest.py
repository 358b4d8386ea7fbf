import os

# Configuración de pruebas antes de importar la aplicación
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DISABLE_AUTH"] = "true"
os.environ["SEED_DATABASE"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.api.deps import get_alumno_service
from app.config.database import Base, get_db
from app.core.seeder import seed_database
from app.crud.alumno import CRUDAlumno
from app.main import app as fastapi_app
from app.models.horario import Horario
from app.models.solicitud import Solicitud


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def seeded(session_factory):
    """Carreras, planes, materias (8), grupos (2 por materia), profesor y alumnos A001/A002"""
    await seed_database(session_factory)
    return session_factory


@pytest.fixture
def service(session_factory):
    return CRUDAlumno(session_factory=session_factory)


@pytest.fixture
async def client(seeded, service):
    async def override_get_db():
        async with seeded() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_alumno_service] = lambda: service
    async with AsyncClient(
        transport=ASGITransport(app=fastapi_app), base_url="http://test"
    ) as client:
        yield client
    fastapi_app.dependency_overrides.clear()


async def add_solicitudes(session_factory, id_alumno: str, n: int):
    async with session_factory() as db:
        db.add_all(
            [Solicitud(id_alumno=id_alumno, motivo=f"Solicitud {i}") for i in range(n)]
        )
        await db.commit()


async def count_solicitudes(session_factory, id_alumno: str = None) -> int:
    async with session_factory() as db:
        query = select(func.count()).select_from(Solicitud)
        if id_alumno is not None:
            query = query.where(Solicitud.id_alumno == id_alumno)
        return await db.scalar(query)


async def grupos_en_horario(session_factory, id_alumno: str) -> list:
    async with session_factory() as db:
        result = await db.execute(
            select(Horario.id_grupo)
            .where(Horario.id_alumno == id_alumno)
            .order_by(Horario.id_grupo)
        )
        return list(result.scalars().all())
