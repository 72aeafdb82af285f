from sqlalchemy import DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from datetime import datetime
from enum import Enum as PyEnum
from club_api.database.base import Base


class SubscriptionType(str, PyEnum):
    """How the member trains in the sport."""
    GROUP = "group"
    PRIVATE = "private"


class Subscription(Base):
    """
    Association between a member and a sport.

    There is no update path: changing the type means unsubscribing and
    subscribing again.
    """
    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("member_id", "sport_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # No ON DELETE cascade: deleting a subscribed member or sport is a reference error
    member_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("members.id"),
        nullable=False,
        index=True
    )

    sport_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("sports.id"),
        nullable=False,
        index=True
    )

    type: Mapped[SubscriptionType] = mapped_column(
        SQLEnum(
            SubscriptionType,
            name="subscription_type",
            native_enum=False,
            create_constraint=True,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<Subscription(member_id={self.member_id!r}, sport_id={self.sport_id!r}, type={self.type.value!r})>"
