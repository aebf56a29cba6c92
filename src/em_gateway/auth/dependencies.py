"""FastAPI dependencies: get_current_user, require_owner.

Usage in any protected router:
    from src.em_gateway.auth.dependencies import get_current_user

    @router.post("/products/{product_id}/purchase")
    async def purchase(user: Annotated[UserModel, Depends(get_current_user)]):
        ...  # user.address is the acting party
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.em_access.access_control import AdminCapability, access_control
from src.em_common.database import get_db_session
from src.em_common.errors import AccountDisabledError, InvalidCredentialsError
from src.em_gateway.auth.jwt_handler import decode_token
from src.em_gateway.user.db_models import UserModel

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> UserModel:
    """Resolve the Bearer token to an active UserModel.

    Raises HTTP 401 if the token is missing, invalid, expired or unknown.
    Raises AccountDisabledError (403) if the account is disabled.
    """
    try:
        payload = decode_token(token)
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None

    address = payload.get("sub")
    if not address:
        raise _CREDENTIALS_EXCEPTION

    result = await db.execute(select(UserModel).where(UserModel.address == address))
    user = result.scalar_one_or_none()
    if user is None:
        raise _CREDENTIALS_EXCEPTION
    if not user.is_active:
        raise AccountDisabledError()
    return user


async def require_owner(
    current_user: Annotated[UserModel, Depends(get_current_user)],
) -> AdminCapability:
    """Issue the owner's AdminCapability, or raise UnauthorizedError (1005)."""
    return access_control.authorize(current_user.address)
