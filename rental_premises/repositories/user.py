"""
User repository for authentication and user management operations.
Provides user lookups by username and secure account creation.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from rental_premises.repositories.base import BaseRepository
from rental_premises.models.user import User, UserRole
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """
    Repository for user management with authentication support.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Create a new user with password hashing.

        Args:
            user_data: Dictionary containing user information
                      Must include: username, password
                      Optional: role (defaults to USER), is_active

        Returns:
            Created user instance

        Raises:
            ValueError: If the username is taken or the password is too short
        """
        try:
            username = user_data["username"].strip()

            existing_user = await self.find_by_username(username)
            if existing_user:
                raise ValueError(f"User with username {username} already exists")

            data = dict(user_data)
            password = data.pop("password")

            create_data = {
                **data,
                "username": username,
                "hashed_password": User.hash_password(password),
                "role": data.get("role") or UserRole.USER,
                "is_active": data.get("is_active", True),
            }

            created_user = await self.create(create_data)
            logger.info(f"Created user: {created_user.username} (ID: {created_user.id})")
            return created_user
        except ValueError as e:
            logger.error(f"User validation failed: {e}")
            raise
        except Exception as e:
            logger.error(f"Failed to create user: {e}")
            raise

    async def find_by_username(self, username: str) -> Optional[User]:
        """
        Get user by username.

        Args:
            username: Exact username to search for

        Returns:
            User instance if found, None otherwise
        """
        try:
            result = await self.db.execute(select(User).where(User.username == username))
            user = result.scalar_one_or_none()

            if user:
                logger.debug(f"Retrieved user by username: {username}")
            else:
                logger.debug(f"User with username {username} not found")

            return user
        except Exception as e:
            logger.error(f"Failed to get user by username {username}: {e}")
            raise

    async def authenticate_user(self, username: str, password: str) -> Optional[User]:
        """
        Authenticate user with username and password.

        Returns:
            User instance if authentication successful, None otherwise
        """
        user = await self.find_by_username(username)

        if not user:
            logger.debug(f"Authentication failed: user {username} not found")
            return None

        if not user.is_active:
            logger.debug(f"Authentication failed: user {username} is inactive")
            return None

        if not user.verify_password(password):
            logger.debug(f"Authentication failed: invalid password for {username}")
            return None

        logger.info(f"User authenticated successfully: {username}")
        return user
