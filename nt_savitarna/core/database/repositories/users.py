"""
User repository.

Data access for portal accounts. E-mail addresses are stored lower-cased and
looked up case-insensitively.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from nt_savitarna.core.models.domain.enums import UserRole

from ..base import local_now
from ..entities.users import User
from .base import AsyncBaseRepository, QueryBuilder

CLIENT_SEARCH_COLUMNS = (User.email, User.first_name, User.last_name, User.company, User.phone)


class UserRepository(AsyncBaseRepository[User]):
    """Repository for portal users."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def create(self, user: User) -> User:
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: int) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(func.lower(User.email) == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, user: User) -> User:
        user.updated_at = local_now()
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def delete(self, user_id: int) -> bool:
        user = await self.get_by_id(user_id)
        if user:
            await self.session.delete(user)
            await self.session.commit()
            return True
        return False

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[User]:
        stmt = select(User)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, User, filters)
        stmt = QueryBuilder.apply_pagination(stmt.order_by(User.created_at.desc()), limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_clients(
        self, search: Optional[str] = None, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> Tuple[List[User], int]:
        """Client accounts, newest first, optionally narrowed by a search term.

        Args:
            search: Substring matched against e-mail, names, company and phone
            limit: Page size
            offset: Number of users to skip

        Returns:
            Page of clients and the total number of matches
        """
        stmt = select(User).where(User.role == UserRole.client.value)
        stmt = QueryBuilder.apply_search(stmt, list(CLIENT_SEARCH_COLUMNS), search)

        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = int((await self.session.execute(count_stmt)).scalar_one())

        stmt = QueryBuilder.apply_pagination(stmt.order_by(User.created_at.desc()), limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total
