"""SQLAlchemy ORM models — maps to PostgreSQL tables.

Supporters, teams, leaders and coordinators all carry the same address and
location columns; only those columns are mapped here.
"""

from datetime import datetime

from sqlalchemy import DateTime, Float, Index, Integer, String, func
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from geo_resolver.adapters.persistence.database import Base
from geo_resolver.domain.value_objects.enums import RecordKind


class AddressColumnsMixin:
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    postal_code: Mapped[str | None] = mapped_column(String(9), nullable=True)
    street: Mapped[str | None] = mapped_column(String(200), nullable=True)
    number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    neighborhood: Mapped[str | None] = mapped_column(String(120), nullable=True)
    city: Mapped[str | None] = mapped_column(String(120), nullable=True)
    state: Mapped[str | None] = mapped_column(String(2), nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True, onupdate=func.now()
    )

    @declared_attr.directive
    def __table_args__(cls):
        return (Index(f"idx_{cls.__tablename__}_city", "city"),)


class SupporterModel(AddressColumnsMixin, Base):
    __tablename__ = "supporters"


class TeamModel(AddressColumnsMixin, Base):
    __tablename__ = "teams"


class LeaderModel(AddressColumnsMixin, Base):
    __tablename__ = "leaders"


class CoordinatorModel(AddressColumnsMixin, Base):
    __tablename__ = "coordinators"


MODEL_BY_KIND: dict[RecordKind, type[AddressColumnsMixin]] = {
    RecordKind.SUPPORTER: SupporterModel,
    RecordKind.TEAM: TeamModel,
    RecordKind.LEADER: LeaderModel,
    RecordKind.COORDINATOR: CoordinatorModel,
}
