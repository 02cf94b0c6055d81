"""
Development Seed Endpoint.

Creates the demo administrator and client accounts and the demo valuators.
Existing records are left untouched. Disabled in production.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import APIRouter

from nt_savitarna.core.database.entities import User, Valuator
from nt_savitarna.core.logging_config import get_logger
from nt_savitarna.core.models.domain import messages
from nt_savitarna.core.models.domain.enums import UserRole
from nt_savitarna.core.models.io.admin import SeedResult
from nt_savitarna.core.models.io.common import ApiResponse
from nt_savitarna.server.core.config import settings
from nt_savitarna.server.core.security import hash_password
from nt_savitarna.server.exception_handlers import ForbiddenError
from nt_savitarna.server.services.deps import OrderRepoDep, UserRepoDep, ValuatorRepoDep

logger = get_logger(__name__)

router = APIRouter(tags=["dev"])


@dataclass(frozen=True)
class DemoAccount:
    email: str
    password: str
    role: UserRole


DEMO_ADMIN = DemoAccount("admin@1partner.lt", "admin123", UserRole.admin)
DEMO_CLIENT = DemoAccount("test@klientas.lt", "client123", UserRole.client)

DEMO_VALUATORS = (
    {"code": "VAL001", "first_name": "Jonas", "last_name": "Jonaitis", "phone": "+370 612 34567", "email": "jonas@vertintojas.lt"},
    {"code": "VAL002", "first_name": "Petras", "last_name": "Petraitis", "phone": "+370 623 45678", "email": "petras@vertintojas.lt"},
    {"code": "VAL003", "first_name": "Ona", "last_name": "Onaitė", "phone": "+370 634 56789", "email": "ona@vertintojas.lt"},
    {
        "code": "VAL004",
        "first_name": "Marija",
        "last_name": "Marijaitė",
        "phone": "+370 645 67890",
        "email": "marija@vertintojas.lt",
        "is_active": False,
    },
)


async def _ensure_user(users: UserRepoDep, account: DemoAccount) -> User:
    user: Optional[User] = await users.get_by_email(account.email)
    if user is None:
        user = await users.create(
            User(email=account.email, password_hash=hash_password(account.password), role=account.role.value)
        )
        logger.info("Seeded %s account %s", account.role.value, account.email)
    return user


@router.post(
    "",
    response_model=ApiResponse[SeedResult],
    summary="Seed Demo Data",
    description="Create the demo accounts and valuators. Only available outside production.",
    responses={403: {"description": "Production environment"}},
)
async def seed(users: UserRepoDep, valuators: ValuatorRepoDep, orders: OrderRepoDep) -> ApiResponse[SeedResult]:
    if settings.is_production:
        raise ForbiddenError(messages.SEED_DISABLED)

    admin = await _ensure_user(users, DEMO_ADMIN)
    client = await _ensure_user(users, DEMO_CLIENT)

    codes = []
    for data in DEMO_VALUATORS:
        if await valuators.get_by_code(data["code"]) is None:
            await valuators.create(Valuator(**data))
        codes.append(data["code"])

    test_orders = len(await orders.list_by_email(client.email))
    logger.info("Demo data seeded")
    return ApiResponse(
        data=SeedResult(admin=admin.email, client=client.email, valuators=codes, test_orders=test_orders)
    )
