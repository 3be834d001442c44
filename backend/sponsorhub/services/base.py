from typing import Any, Optional, Type, TypeVar
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sponsorhub.core.exceptions import ResourceNotFoundError
from sponsorhub.utils.ids import ensure_valid_id

ModelT = TypeVar("ModelT")


class BaseService:
    """Shared lookup helpers for the per-resource services"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_or_404(self, model: Type[ModelT], obj_id: Any, resource_type: str) -> ModelT:
        """Fetch by id; 400 on a malformed id, 404 when missing"""
        obj_id = ensure_valid_id(obj_id, resource_type.lower())
        result = await self.db.execute(select(model).where(model.id == obj_id))
        obj = result.scalar_one_or_none()
        if obj is None:
            raise ResourceNotFoundError(resource_type, obj_id)
        return obj

    async def reload(self, obj: ModelT) -> Optional[ModelT]:
        """Re-select a freshly written row so its selectin relationships are populated"""
        model = type(obj)
        result = await self.db.execute(
            select(model)
            .where(model.id == obj.id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()
