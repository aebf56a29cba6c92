"""User service: register and login for gateway accounts.

A gateway account binds a username/password to one ledger address. The
address is the identity every marketplace operation acts as.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.em_common.database import transactional
from src.em_common.errors import (
    AccountDisabledError,
    AddressExistsError,
    InvalidCredentialsError,
    UsernameExistsError,
)
from src.em_gateway.auth.jwt_handler import create_access_token
from src.em_gateway.auth.password import hash_password, verify_password
from src.em_gateway.user.db_models import UserModel

logger = logging.getLogger(__name__)


class UserService:
    """Stateless service — instantiate once, reuse across requests."""

    async def register(
        self,
        username: str,
        address: str,
        password: str,
        db: AsyncSession,
    ) -> UserModel:
        async with transactional(db):
            # UNIQUE constraints are the final guard
            result = await db.execute(select(UserModel).where(UserModel.username == username))
            if result.scalar_one_or_none() is not None:
                raise UsernameExistsError()

            result = await db.execute(select(UserModel).where(UserModel.address == address))
            if result.scalar_one_or_none() is not None:
                raise AddressExistsError()

            user = UserModel(
                username=username,
                address=address,
                password_hash=hash_password(password),
                is_active=True,
            )
            db.add(user)
            await db.flush()

        logger.info("User registered: %s -> %s", username, address)
        return user

    async def login(
        self,
        username: str,
        password: str,
        db: AsyncSession,
    ) -> tuple[UserModel, str]:
        """Authenticate and return (user, access_token).

        Unknown user and wrong password raise the same error.
        """
        result = await db.execute(select(UserModel).where(UserModel.username == username))
        user = result.scalar_one_or_none()

        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()
        if not user.is_active:
            raise AccountDisabledError()

        return user, create_access_token(user.address)
