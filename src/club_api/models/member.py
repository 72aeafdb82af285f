from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from datetime import date
from enum import Enum as PyEnum
from club_api.database.base import Base


class Gender(str, PyEnum):
    """Gender recorded on a member."""
    MALE = "male"
    FEMALE = "female"


class Member(Base):
    """
    SQLAlchemy model for a club member.

    A member may point at a "central" member (the family account holder);
    the reference is optional and must exist when set.
    """
    __tablename__ = "members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)

    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    birthdate: Mapped[date] = mapped_column(Date, nullable=False)

    # Optional at creation; the store stamps the current date.
    subscription_date: Mapped[date] = mapped_column(
        Date,
        server_default=func.current_date(),
        nullable=False
    )

    # Stored as VARCHAR + CHECK so the same constraint exists on SQLite and PostgreSQL
    gender: Mapped[Gender] = mapped_column(
        SQLEnum(
            Gender,
            name="gender",
            native_enum=False,
            create_constraint=True,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False
    )

    central_member_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("members.id"),
        nullable=True,
        index=True
    )

    def __repr__(self) -> str:
        return f"<Member(id={self.id!r}, first_name={self.first_name!r}, last_name={self.last_name!r})>"
