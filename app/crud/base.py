from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union
from pydantic import BaseModel
from sqlalchemy import select, func, inspect
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.database import Base

ModelType = TypeVar("ModelType", bound=Base)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, UpdateSchemaType]):
    def __init__(self, model: Type[ModelType]):
        """
        Objeto CRUD con métodos por defecto para leer y actualizar tablas de catálogo.
        """
        self.model = model
        self.primary_key_field = self._get_primary_key_field()

    def _get_primary_key_field(self):
        """
        Obtiene el nombre del atributo de clave primaria del modelo.
        Las columnas del esquema heredado no siempre se llaman igual que el atributo.
        """
        mapper = inspect(self.model)
        column = mapper.primary_key[0]
        return mapper.get_property_by_column(column).key

    async def get(self, db: AsyncSession, code: Any) -> Optional[ModelType]:
        primary_key_column = getattr(self.model, self.primary_key_field)
        result = await db.execute(select(self.model).where(primary_key_column == code))
        return result.scalar_one_or_none()

    async def get_all(self, db: AsyncSession) -> List[ModelType]:
        """Todas las filas ordenadas por clave primaria, sin paginar"""
        primary_key_column = getattr(self.model, self.primary_key_field)
        result = await db.execute(select(self.model).order_by(primary_key_column))
        return result.scalars().all()

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def count(self, db: AsyncSession) -> int:
        primary_key_column = getattr(self.model, self.primary_key_field)
        result = await db.execute(select(func.count(primary_key_column)))
        return result.scalar()
