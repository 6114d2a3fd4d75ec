"""
User ORM model.

Identity owned by the external auth provider; this core only reads the
public profile and updates points/level.

Dependencies: sqlalchemy, skillswap.boundary.db.base
System role: User persistence for matching and gamification
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from skillswap.boundary.db.base import Base, IntIDMixin, TimestampMixin


class UserModel(Base, IntIDMixin, TimestampMixin):
    """
    User ORM model.

    Attributes:
        id: Integer primary key
        username: Unique handle
        name: Display name
        email: Contact address
        university: Optional institution
        avatar: Optional avatar URL
        points: Accrued points; only ever increased through activities
        level: points // 500 + 1, recomputed on every award
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    university: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    avatar: Mapped[str | None] = mapped_column(String(1024), nullable=True, default=None)

    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    def public_profile(self) -> dict:
        """Profile safe to share with other users (no contact details beyond the card)."""
        return {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "university": self.university,
            "avatar": self.avatar,
            "points": self.points,
            "level": self.level,
        }
