"""SQLAlchemy model for the users table.

Email addresses are unique across all users; the constraint lives in the
database so concurrent registrations cannot both succeed.
"""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from userbase.infrastructure.persistence.database import Base


class UserModel(Base):
    """SQLAlchemy model for the users table.

    Attributes:
        id: Auto-incrementing primary key.
        first_name: Given name.
        last_name: Family name.
        email: Email address, unique across users.
        password: bcrypt digest of the password (never plaintext).
        birth_date: Optional date of birth.
        phone_number: Optional phone number.
        role_id: Foreign key to roles table.
        created_at: Timestamp when the user was created.
        updated_at: Timestamp when the user was last updated.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt password digest",
    )
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    role_id: Mapped[int] = mapped_column(
        ForeignKey("roles.id"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    role: Mapped["RoleModel"] = relationship(  # noqa: F821
        "RoleModel",
        back_populates="users",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role_id={self.role_id})>"
