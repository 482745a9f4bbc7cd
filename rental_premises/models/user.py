"""
User model with authentication, role management and the per-user audit log.
Handles accounts of premises owners and administrators.
"""

from sqlalchemy import String, Text, Boolean, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from rental_premises.database import Base
from passlib.context import CryptContext
import enum
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from rental_premises.models.building import Building

# Password hashing context
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class UserRole(str, enum.Enum):
    """User role enumeration for role-based access control."""
    USER = "user"
    ADMIN = "admin"


class AuditLogEntry(Base):
    """
    A single human-readable action description in a user's audit log.
    Entries are only ever appended; their order is the insertion order.
    """

    __tablename__ = "user_logs"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the user who performed the action"
    )

    message: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Action description"
    )

    user: Mapped["User"] = relationship("User", back_populates="logs")

    def __repr__(self) -> str:
        return f"<AuditLogEntry(id={self.id}, user_id={self.user_id}, message={self.message!r})>"


class User(Base):
    """
    User model for authentication and authorization.

    A fresh ``User()`` that was never persisted stands for an anonymous
    caller: it has no id, no username and an empty audit log.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
        comment="Login name - must be unique"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Hashed password"
    )

    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole),
        nullable=False,
        default=UserRole.USER,
        index=True,
        comment="User role for access control"
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Whether the user account is active"
    )

    # Relationships
    buildings: Mapped[List["Building"]] = relationship(
        "Building",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
        # Listings are queried through BuildingRepository, never through the owner
        lazy="noload"
    )

    logs: Mapped[List[AuditLogEntry]] = relationship(
        AuditLogEntry,
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by=AuditLogEntry.id
    )

    def __init__(self, **kwargs):
        # Start with loaded collections so async code never lazy-loads them
        kwargs.setdefault("buildings", [])
        kwargs.setdefault("logs", [])
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        """String representation of the user."""
        return f"<User(id={self.id}, username={self.username}, role={self.role})>"

    @classmethod
    def hash_password(cls, password: str) -> str:
        """
        Hash a password.

        Args:
            password: Plain text password

        Returns:
            Hashed password string
        """
        if not password or len(password) < 8:
            raise ValueError("Password must be at least 8 characters long")

        return pwd_context.hash(password)

    def verify_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""
        if not self.hashed_password:
            return False
        return pwd_context.verify(password, self.hashed_password)

    def set_password(self, password: str) -> None:
        self.hashed_password = self.hash_password(password)

    @property
    def is_admin(self) -> bool:
        """Check if user has admin role."""
        return self.role == UserRole.ADMIN

    @property
    def is_anonymous(self) -> bool:
        """True for the default placeholder user that has never been persisted."""
        return self.id is None

    @property
    def audit_log(self) -> List[str]:
        """Audit log messages in the order they were written."""
        return [entry.message for entry in self.logs]

    def add_log(self, message: str) -> AuditLogEntry:
        """
        Append an entry to the audit log.

        The entry is written together with whatever transaction the user
        is currently part of.
        """
        entry = AuditLogEntry(message=message)
        self.logs.append(entry)
        return entry

    def to_dict(self, include_logs: bool = False) -> dict:
        """
        Convert user to dictionary (excluding sensitive data).

        Args:
            include_logs: Whether to include the audit log

        Returns:
            Dictionary representation of user
        """
        role: Optional[UserRole] = self.role
        result = {
            "id": self.id,
            "username": self.username,
            "role": role.value if role else None,
            "is_active": bool(self.is_active) if self.is_active is not None else True,
        }

        if include_logs:
            result["logs"] = [
                {"message": entry.message, "created_at": entry.created_at}
                for entry in self.logs
            ]

        return result
