"""
Order repository.

Data access for valuation orders: CRUD, the client's own order list, the admin
order search, report row fetching and valuator workload counts. The status
predicates below mirror the rules in ``core.models.domain.services`` so that
filtering in SQL and classifying in Python agree on NULL columns.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import and_, case, func, not_, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from nt_savitarna.core.models.domain.enums import (
    AdminOrderFilter,
    OrderStatus,
    ServiceType,
    ValuatorOrderFilter,
)

from ..entities.orders import Order
from .base import AsyncBaseRepository, QueryBuilder

_PAID_OR_DONE = (OrderStatus.paid.value, OrderStatus.done.value)
ADMIN_SEARCH_COLUMNS = (Order.contact_email, Order.token, Order.contact_name)


def ai_completed_clause():
    """``TYPE_1`` orders with enough data for the automatic valuation."""
    return and_(
        func.coalesce(Order.service_type, "") == ServiceType.type_1.value,
        Order.is_enough_data_for_ai.is_(True),
    )


def completed_clause():
    """Completed from the valuator's point of view: AI result delivered or marked done."""
    return or_(func.coalesce(Order.status, "") == OrderStatus.done.value, ai_completed_clause())


def admin_status_clause(status_filter: AdminOrderFilter):
    """Admin list filter, aligned with the client display status."""
    if status_filter == AdminOrderFilter.completed:
        return ai_completed_clause()
    paid_or_done = func.coalesce(Order.status, "").in_(_PAID_OR_DONE)
    if status_filter == AdminOrderFilter.paid:
        return and_(not_(ai_completed_clause()), paid_or_done)
    if status_filter == AdminOrderFilter.pending:
        return and_(not_(ai_completed_clause()), not_(paid_or_done))
    return None


def valuator_status_clause(status_filter: ValuatorOrderFilter):
    if status_filter == ValuatorOrderFilter.done:
        return completed_clause()
    is_paid = func.coalesce(Order.status, "") == OrderStatus.paid.value
    if status_filter == ValuatorOrderFilter.in_progress:
        return and_(not_(completed_clause()), is_paid)
    return and_(not_(completed_clause()), not_(is_paid))


@dataclass
class WorkloadCounts:
    """Order counts of one valuator."""

    total: int = 0
    completed: int = 0
    this_month: int = 0

    @property
    def in_progress(self) -> int:
        return max(self.total - self.completed, 0)


class OrderRepository(AsyncBaseRepository[Order]):
    """Repository for valuation orders."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Order)

    async def create(self, order: Order) -> Order:
        self.session.add(order)
        await self.session.commit()
        await self.session.refresh(order)
        return order

    async def get_by_id(self, order_id: int) -> Optional[Order]:
        stmt = select(Order).where(Order.id == order_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, order: Order) -> Order:
        self.session.add(order)
        await self.session.commit()
        await self.session.refresh(order)
        return order

    async def delete(self, order_id: int) -> bool:
        order = await self.get_by_id(order_id)
        if order:
            await self.session.delete(order)
            await self.session.commit()
            return True
        return False

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[Order]:
        stmt = select(Order)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, Order, filters)
        stmt = stmt.order_by(Order.created_at.desc())
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_by_email(self, email: str) -> List[Order]:
        """Orders whose contact e-mail matches ``email`` case-insensitively, newest first."""
        stmt = (
            select(Order)
            .where(func.lower(Order.contact_email) == email.strip().lower())
            .order_by(Order.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search_admin(
        self,
        status_filter: AdminOrderFilter = AdminOrderFilter.all,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Tuple[List[Order], int]:
        """Admin order list.

        Args:
            status_filter: Display-status bucket, or ``all``
            search: Substring matched against contact e-mail, token and contact name
            limit: Page size
            offset: Number of orders to skip

        Returns:
            Page of orders (newest first) and the total number of matches
        """
        stmt = select(Order)
        clause = admin_status_clause(status_filter)
        if clause is not None:
            stmt = stmt.where(clause)
        stmt = QueryBuilder.apply_search(stmt, list(ADMIN_SEARCH_COLUMNS), search)

        total = await self._count(stmt)
        stmt = QueryBuilder.apply_pagination(stmt.order_by(Order.created_at.desc()), limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def list_created_between(
        self, date_from: datetime, date_to: datetime, limit: Optional[int] = None, assigned_only: bool = False
    ) -> List[Order]:
        """Orders created within ``[date_from, date_to]``, oldest first."""
        stmt = select(Order).where(Order.created_at >= date_from, Order.created_at <= date_to)
        if assigned_only:
            stmt = stmt.where(Order.priskirta.is_not(None), Order.priskirta != "")
        stmt = QueryBuilder.apply_pagination(stmt.order_by(Order.created_at.asc()), limit, None)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_valuator(
        self,
        code: str,
        status_filter: Optional[ValuatorOrderFilter] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Tuple[List[Order], int]:
        """Orders assigned to the valuator ``code``, newest first, with the filtered total."""
        stmt = select(Order).where(Order.priskirta == code)
        if status_filter is not None:
            stmt = stmt.where(valuator_status_clause(status_filter))
        if date_from is not None:
            stmt = stmt.where(Order.created_at >= date_from)
        if date_to is not None:
            stmt = stmt.where(Order.created_at <= date_to)

        total = await self._count(stmt)
        stmt = QueryBuilder.apply_pagination(stmt.order_by(Order.created_at.desc()), limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def valuator_workload(self, codes: Sequence[str], month_start: datetime) -> Dict[str, WorkloadCounts]:
        """Total, completed and this-month order counts per valuator code."""
        if not codes:
            return {}
        stmt = (
            select(
                Order.priskirta,
                func.count(Order.id),
                func.sum(case((completed_clause(), 1), else_=0)),
                func.sum(case((Order.created_at >= month_start, 1), else_=0)),
            )
            .where(Order.priskirta.in_(list(codes)))
            .group_by(Order.priskirta)
        )
        result = await self.session.execute(stmt)
        workload = {code: WorkloadCounts() for code in codes}
        for code, total, completed, this_month in result.all():
            workload[code] = WorkloadCounts(total=total or 0, completed=completed or 0, this_month=this_month or 0)
        return workload

    async def count_all(self) -> int:
        return await self._count(select(Order))

    async def count_created_since(self, since: datetime) -> int:
        return await self._count(select(Order).where(Order.created_at >= since))

    async def count_by_admin_status(self, status_filter: AdminOrderFilter) -> int:
        stmt = select(Order)
        clause = admin_status_clause(status_filter)
        if clause is not None:
            stmt = stmt.where(clause)
        return await self._count(stmt)

    async def distinct_municipalities(self) -> List[str]:
        stmt = (
            select(Order.address_municipality)
            .where(Order.address_municipality.is_not(None))
            .distinct()
            .order_by(Order.address_municipality.asc())
        )
        result = await self.session.execute(stmt)
        return [row for row in result.scalars().all() if row]

    async def distinct_cities_by_municipality(self) -> List[Tuple[str, str]]:
        stmt = (
            select(Order.address_municipality, Order.address_city)
            .where(Order.address_municipality.is_not(None), Order.address_city.is_not(None))
            .distinct()
            .order_by(Order.address_municipality.asc(), Order.address_city.asc())
        )
        result = await self.session.execute(stmt)
        return [(municipality, city) for municipality, city in result.all() if municipality and city]

    async def distinct_property_types(self) -> List[str]:
        stmt = select(Order.main_property_type).where(Order.main_property_type.is_not(None)).distinct()
        result = await self.session.execute(stmt)
        return sorted(row for row in result.scalars().all() if row)

    async def _count(self, stmt) -> int:
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        result = await self.session.execute(count_stmt)
        return int(result.scalar_one())
