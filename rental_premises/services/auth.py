"""
Authentication service for registration, login and token handling.
"""

from typing import Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from rental_premises.database import transaction
from rental_premises.repositories.user import UserRepository
from rental_premises.models.user import User, UserRole
from rental_premises.utils.auth import create_access_token, verify_token
from rental_premises.utils.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    ValidationError,
    DuplicateResourceError
)
from jose import JWTError
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for managing user accounts and bearer tokens.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    async def register(self, username: str, password: str, role: UserRole = UserRole.USER) -> User:
        """
        Create a new account.

        Raises:
            ValidationError: If the username is blank or the password too short
            DuplicateResourceError: If the username is already taken
        """
        if not username or not username.strip():
            raise ValidationError("Username is required")

        if await self.user_repo.find_by_username(username.strip()):
            raise DuplicateResourceError("User", username.strip())

        try:
            async with transaction(self.db):
                user = await self.user_repo.create_user({
                    "username": username,
                    "password": password,
                    "role": role,
                })
        except ValueError as e:
            raise ValidationError(str(e))

        logger.info(f"User registered: {user.username} (ID: {user.id})")
        return user

    async def authenticate_user(self, username: str, password: str) -> User:
        """
        Authenticate user with username and password.

        Raises:
            ValidationError: If input is blank
            InvalidCredentialsError: If credentials are invalid or the account is inactive
        """
        if not username or not username.strip():
            raise ValidationError("Username is required")

        if not password or not password.strip():
            raise ValidationError("Password is required")

        user = await self.user_repo.authenticate_user(username, password)

        if not user:
            logger.warning(f"Failed authentication attempt for username: {username}")
            raise InvalidCredentialsError()

        return user

    async def login(self, username: str, password: str) -> Tuple[User, str]:
        """
        Authenticate user and create an access token.

        Returns:
            Tuple of (user, access_token)
        """
        user = await self.authenticate_user(username, password)
        access_token = create_access_token(username=user.username, role=user.role)
        return user, access_token

    @staticmethod
    def username_from_token(token: Optional[str]) -> Optional[str]:
        """
        Extract the username from a bearer token.

        Returns None for a missing, malformed or expired token.
        """
        if not token:
            return None

        try:
            return verify_token(token).username
        except JWTError as e:
            logger.info(f"Ignoring invalid bearer token: {e}")
            return None

    @staticmethod
    def require_username(token: str) -> str:
        """
        Extract the username from a bearer token, rejecting bad tokens.

        Raises:
            InvalidTokenError: If the token cannot be verified
        """
        try:
            return verify_token(token).username
        except JWTError as e:
            raise InvalidTokenError(str(e))
