"""
Authentication Endpoints.

Login, registration and logout for portal users. A successful login or
registration sets the ``auth-token`` session cookie. These endpoints answer
with ``{"success", "message", "user"}`` envelopes.
"""

from fastapi import APIRouter, Response
from sqlalchemy.exc import IntegrityError

from nt_savitarna.core.database.entities import User
from nt_savitarna.core.logging_config import get_logger
from nt_savitarna.core.models.domain import messages
from nt_savitarna.core.models.domain.enums import UserRole
from nt_savitarna.core.models.io.auth import AuthResponse, AuthUser, LoginRequest, RegisterRequest
from nt_savitarna.core.validations import (
    format_phone_number,
    is_valid_email,
    is_valid_lithuanian_phone,
    is_valid_password,
    normalize_email,
)
from nt_savitarna.server.core.security import (
    clear_auth_cookie,
    create_access_token,
    hash_password,
    set_auth_cookie,
    verify_password,
)
from nt_savitarna.server.exception_handlers import (
    BadRequestError,
    ConflictError,
    UnauthorizedError,
    translate_db_errors,
)
from nt_savitarna.server.services.deps import CurrentUserDep, UserRepoDep

logger = get_logger(__name__)

router = APIRouter(tags=["auth"])

MESSAGE = "message"


def _clean(value):
    if value is None:
        return None
    value = value.strip()
    return value or None


def _login_cookie(response: Response, user: User) -> None:
    set_auth_cookie(response, create_access_token(user.id, user.email, user.role))


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log In",
    description="Authenticate with e-mail and password and receive the session cookie.",
    response_description="The authenticated user.",
    responses={
        400: {"description": "E-mail or password missing"},
        401: {"description": "Wrong credentials"},
    },
)
async def login(body: LoginRequest, response: Response, users: UserRepoDep) -> AuthResponse:
    if not _clean(body.email) or not body.password:
        raise BadRequestError(messages.LOGIN_FIELDS_REQUIRED, envelope_key=MESSAGE)

    with translate_db_errors(messages.LOGIN_FAILED, envelope_key=MESSAGE):
        user = await users.get_by_email(body.email)

    if user is None or not verify_password(body.password, user.password_hash):
        logger.info("Failed login attempt for %s", normalize_email(body.email))
        raise UnauthorizedError(messages.INVALID_CREDENTIALS, envelope_key=MESSAGE)

    _login_cookie(response, user)
    logger.info("User %s logged in", user.id)
    return AuthResponse(success=True, message=messages.LOGIN_SUCCESS, user=AuthUser.model_validate(user))


@router.post(
    "/register",
    response_model=AuthResponse,
    summary="Register",
    description="Create a client account and log it in.",
    response_description="The newly registered user.",
    responses={
        400: {"description": "Missing fields, invalid e-mail, short password or invalid phone"},
        409: {"description": "An account with this e-mail already exists"},
    },
)
async def register(body: RegisterRequest, response: Response, users: UserRepoDep) -> AuthResponse:
    """
    Register a client account.

    - **email**: Login e-mail, stored lower-cased.
    - **password**: At least 6 characters.
    - **phone**: Optional Lithuanian number, stored as ``+370XXXXXXXX``.
    """
    email = _clean(body.email)
    if not email or not body.password:
        raise BadRequestError(messages.LOGIN_FIELDS_REQUIRED, envelope_key=MESSAGE)
    if not is_valid_email(email):
        raise BadRequestError(messages.INVALID_EMAIL, envelope_key=MESSAGE)
    if not is_valid_password(body.password):
        raise BadRequestError(messages.PASSWORD_TOO_SHORT, envelope_key=MESSAGE)
    phone = _clean(body.phone)
    if phone is not None:
        if not is_valid_lithuanian_phone(phone):
            raise BadRequestError(messages.INVALID_PHONE, envelope_key=MESSAGE)
        phone = format_phone_number(phone)

    email = normalize_email(email)
    with translate_db_errors(messages.REGISTER_FAILED, envelope_key=MESSAGE):
        existing = await users.get_by_email(email)
    if existing is not None:
        raise ConflictError(messages.USER_ALREADY_EXISTS, envelope_key=MESSAGE)

    user = User(
        email=email,
        password_hash=hash_password(body.password),
        role=UserRole.client.value,
        first_name=_clean(body.first_name),
        last_name=_clean(body.last_name),
        phone=phone,
        company=_clean(body.company),
    )
    try:
        user = await users.create(user)
    except IntegrityError:
        await users.session.rollback()
        raise ConflictError(messages.USER_ALREADY_EXISTS, envelope_key=MESSAGE) from None

    _login_cookie(response, user)
    logger.info("Registered client %s", user.id)
    return AuthResponse(success=True, message=messages.REGISTER_SUCCESS, user=AuthUser.model_validate(user))


@router.post(
    "/logout",
    response_model=AuthResponse,
    summary="Log Out",
    description="Clear the session cookie.",
)
async def logout(response: Response) -> AuthResponse:
    clear_auth_cookie(response)
    return AuthResponse(success=True, message=messages.LOGOUT_SUCCESS)


@router.get(
    "/me",
    response_model=AuthResponse,
    summary="Current User",
    description="Return the user of the current session.",
    responses={401: {"description": "Not logged in"}},
)
async def me(current: CurrentUserDep, users: UserRepoDep) -> AuthResponse:
    user = await users.get_by_id(current.user_id)
    if user is None:
        raise UnauthorizedError(messages.NOT_AUTHENTICATED)
    return AuthResponse(success=True, user=AuthUser.model_validate(user))
