import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.config.database import init_db, close_db
from app.config.settings import settings
from app.core.seeder import run_seeder

# Import routers
from app.api.auth import router as auth_router
from app.api.v1.router import api_router

logging.basicConfig(level=logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    print("🚀 Iniciando Vía Alta...")

    # 1. Inicializar base de datos
    print("📊 Inicializando base de datos...")
    try:
        await init_db()
        print("✅ Base de datos inicializada correctamente")
    except Exception as db_error:
        print(f"❌ Error crítico en base de datos: {db_error}")
        raise

    # 2. Ejecutar seeding
    if settings.seed_database:
        print("🌱 Ejecutando seeding...")
        try:
            seeded = await run_seeder()
            if seeded:
                print("✅ Datos iniciales creados")
            else:
                print("ℹ️ Base de datos ya contiene datos")
        except Exception as seed_error:
            print(f"⚠️ Error en seeding (continuando): {seed_error}")

    print("🎉 Sistema listo!")

    yield

    print("🔄 Cerrando sistema...")
    await close_db()


app = FastAPI(
    title="Vía Alta API",
    description="""
    ## Vía Alta 🎓

    - 👨‍🎓 **Alumnos** - confirmación de horario y asignación por semestre
    - 👨‍🏫 **Profesores** - materias asignadas a cada profesor
    - 📚 **Catálogo** - carreras, planes y materias
    """,
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router, prefix="/auth", tags=["🔐 Autenticación"])
app.include_router(api_router, prefix="/api")


@app.get("/", tags=["🏠 General"])
async def root():
    return {
        "message": "Vía Alta API",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health", tags=["🏠 General"])
async def health_check():
    """Verificación de salud del sistema"""
    return {
        "status": "healthy",
        "service": "via-alta-api",
        "version": "1.0.0",
        "environment": settings.environment,
    }
