from sqlalchemy import CheckConstraint, Integer, Numeric, String
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
from enum import Enum as PyEnum
from club_api.database.base import Base


class AllowedGender(str, PyEnum):
    """Which members a sport accepts."""
    MALE = "male"
    FEMALE = "female"
    BOTH = "both"
    ALL = "all"


class Sport(Base):
    """
    SQLAlchemy model for a sport offered by the club.

    Every sport mutation invalidates the cached sports list
    (see services.sport_service.SportService).
    """
    __tablename__ = "sports"
    __table_args__ = (
        CheckConstraint("subscription_price >= 0", name="non_negative_price"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Unique: a duplicate name surfaces as a Conflict
    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False
    )

    subscription_price: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False),
        nullable=False
    )

    allowed_gender: Mapped[AllowedGender] = mapped_column(
        SQLEnum(
            AllowedGender,
            name="allowed_gender",
            native_enum=False,
            create_constraint=True,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<Sport(id={self.id!r}, name={self.name!r})>"
