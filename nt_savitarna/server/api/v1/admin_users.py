"""
Admin Client Endpoints.

Paginated list of client accounts. Password hashes never leave the server.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from nt_savitarna.core.models.domain import messages
from nt_savitarna.core.models.io.common import ApiResponse
from nt_savitarna.core.models.io.users import UserList, UserRead
from nt_savitarna.server.core.constant import ADMIN_USERS_PAGE_SIZE
from nt_savitarna.server.exception_handlers import translate_db_errors
from nt_savitarna.server.services.deps import UserRepoDep, get_admin_user

router = APIRouter(tags=["admin-users"], dependencies=[Depends(get_admin_user)])


@router.get(
    "",
    response_model=ApiResponse[UserList],
    summary="List Clients",
    description=f"List client accounts, newest first, {ADMIN_USERS_PAGE_SIZE} per page.",
    response_description="A page of clients.",
)
async def list_clients(
    users: UserRepoDep,
    search: Optional[str] = None,
    page: int = Query(default=1, ge=1),
) -> ApiResponse[UserList]:
    """
    List clients.

    - **search**: Substring of the e-mail, first or last name, company or phone.
    - **page**: 1-based page number.
    """
    offset = (page - 1) * ADMIN_USERS_PAGE_SIZE
    with translate_db_errors(messages.USERS_FETCH_FAILED):
        rows, total = await users.list_clients(search, ADMIN_USERS_PAGE_SIZE, offset)
    return ApiResponse(
        data=UserList(
            users=[UserRead.model_validate(user) for user in rows],
            total=total,
            page=page,
            page_size=ADMIN_USERS_PAGE_SIZE,
        )
    )
