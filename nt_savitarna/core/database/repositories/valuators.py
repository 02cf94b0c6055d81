"""
Valuator repository.

Data access for valuators. Active valuators are listed first, then by name.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import local_now
from ..entities.valuators import Valuator
from .base import AsyncBaseRepository, QueryBuilder

VALUATOR_SEARCH_COLUMNS = (Valuator.code, Valuator.first_name, Valuator.last_name, Valuator.email)


class ValuatorRepository(AsyncBaseRepository[Valuator]):
    """Repository for valuators."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Valuator)

    async def create(self, valuator: Valuator) -> Valuator:
        self.session.add(valuator)
        await self.session.commit()
        await self.session.refresh(valuator)
        return valuator

    async def get_by_id(self, valuator_id: int) -> Optional[Valuator]:
        stmt = select(Valuator).where(Valuator.id == valuator_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_code(self, code: str) -> Optional[Valuator]:
        stmt = select(Valuator).where(Valuator.code == code)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_codes(self, codes: List[str]) -> Dict[str, Valuator]:
        """Valuators keyed by code; unknown codes are left out."""
        if not codes:
            return {}
        stmt = select(Valuator).where(Valuator.code.in_(codes))
        result = await self.session.execute(stmt)
        return {valuator.code: valuator for valuator in result.scalars().all()}

    async def update(self, valuator: Valuator) -> Valuator:
        valuator.updated_at = local_now()
        self.session.add(valuator)
        await self.session.commit()
        await self.session.refresh(valuator)
        return valuator

    async def delete(self, valuator_id: int) -> bool:
        valuator = await self.get_by_id(valuator_id)
        if valuator:
            await self.session.delete(valuator)
            await self.session.commit()
            return True
        return False

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[Valuator]:
        stmt = select(Valuator)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, Valuator, filters)
        stmt = stmt.order_by(Valuator.is_active.desc(), Valuator.last_name.asc(), Valuator.first_name.asc())
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search(self, search: Optional[str] = None) -> List[Valuator]:
        """Valuators whose code, name or e-mail contains ``search``."""
        stmt = QueryBuilder.apply_search(select(Valuator), list(VALUATOR_SEARCH_COLUMNS), search)
        stmt = stmt.order_by(Valuator.is_active.desc(), Valuator.last_name.asc(), Valuator.first_name.asc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
