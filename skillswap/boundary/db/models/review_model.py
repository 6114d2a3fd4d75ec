"""
Review ORM model.

Dependencies: sqlalchemy, skillswap.boundary.db.base
System role: Peer ratings feeding the rating aggregator
"""

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from skillswap.boundary.db.base import Base, IntIDMixin, TimestampMixin


class ReviewModel(Base, IntIDMixin, TimestampMixin):
    """
    Review left by one exchange participant about the other.

    Attributes:
        id: Integer primary key
        exchange_id: Exchange the review refers to
        reviewer_id: Author
        reviewed_user_id: Rated user
        rating: 1..5
        comment: Optional text
    """

    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating_range"),
    )

    exchange_id: Mapped[int] = mapped_column(ForeignKey("exchanges.id"), nullable=False)
    reviewer_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    reviewed_user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
