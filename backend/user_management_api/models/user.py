"""User ORM — the single persisted entity.

Invariants:
    - id is an integer surrogate key assigned by the database
    - normalized_email == email.strip().lower() and is unique
    - password_hash holds a bcrypt hash, never the clear password
    - created_at is set to UTC now on insert

Design Decisions:
    - Separate normalized_email column: the unique index makes the
      case-insensitive email rule hold even when two writers pass the pre-check
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from user_management_api.db.base import Base


def normalize_email(email: str) -> str:
    return email.strip().lower()


class User(Base):
    """User record — name, email, hashed password, creation time."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    normalized_email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def set_email(self, email: str) -> None:
        """Store the trimmed address and its normalized form together."""
        self.email = email.strip()
        self.normalized_email = normalize_email(email)
