"""Base repository with company-scoped queries."""

from datetime import datetime
from typing import Any, Generic, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with company-scoped query methods.

    Every write stamps ``updated_at``; creates also stamp ``created_at``.
    There is no concurrency token: the last write wins.
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """Initialize repository with model and session."""
        self.model = model
        self.session = session

    async def get_by_id(self, company_id: int | None, id: int) -> ModelType | None:
        """Get entity by ID, scoped to company."""
        if company_id is None:
            # For operations that already verified ownership
            stmt = select(self.model).where(self.model.id == id)
        else:
            stmt = select(self.model).where(
                self.model.id == id,
                self.model.company_id == company_id
            )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def query(
        self,
        company_id: int,
        *predicates: Any,
        order_by: Any = None,
    ) -> list[ModelType]:
        """Query entities of a company matching arbitrary column predicates."""
        stmt = select(self.model).where(self.model.company_id == company_id, *predicates)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list(
        self,
        company_id: int | None,
        skip: int = 0,
        limit: int | None = None,
        order_by: Any = None,
        **filters
    ) -> list[ModelType]:
        """List entities, scoped to company, with equality filters."""
        stmt = select(self.model)

        if company_id is not None:
            stmt = stmt.where(self.model.company_id == company_id)

        for key, value in filters.items():
            if hasattr(self.model, key):
                stmt = stmt.where(getattr(self.model, key) == value)

        if order_by is not None:
            stmt = stmt.order_by(order_by)
        if skip:
            stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, company_id: int | None, **data) -> ModelType:
        """Create new entity with company_id."""
        if company_id is not None:
            data["company_id"] = company_id
        now = datetime.utcnow()
        data.setdefault("created_at", now)
        data.setdefault("updated_at", now)
        instance = self.model(**data)
        self.session.add(instance)
        await self.session.commit()
        await self.session.refresh(instance)
        return instance

    async def update(self, company_id: int | None, id: int, **data) -> ModelType | None:
        """Update entity, scoped to company."""
        instance = await self.get_by_id(company_id, id)
        if instance is None:
            return None

        for key, value in data.items():
            setattr(instance, key, value)
        instance.updated_at = datetime.utcnow()

        await self.session.commit()
        await self.session.refresh(instance)
        return instance

    async def delete(self, company_id: int | None, id: int) -> bool:
        """Delete entity, scoped to company."""
        instance = await self.get_by_id(company_id, id)
        if instance is None:
            return False

        await self.session.delete(instance)
        await self.session.commit()
        return True


def to_dict(instance: Base) -> dict[str, Any]:
    """Column values of a model instance, keyed by column name."""
    return {column.name: getattr(instance, column.name) for column in instance.__table__.columns}
