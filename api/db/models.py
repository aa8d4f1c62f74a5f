"""SQLAlchemy models for persisted person records."""
from __future__ import annotations

from sqlalchemy import JSON, Column, Date, String, Text, UniqueConstraint, Uuid

from .session import Base


class PersonRecord(Base):
    __tablename__ = "people"
    __table_args__ = (UniqueConstraint("nick", name="uq_people_nick"),)

    id = Column(Uuid, primary_key=True)
    name = Column(String(100), nullable=False)
    nick = Column(String(32), nullable=False)
    birth_date = Column(Date, nullable=False)
    # NULL = stack desconhecida; [] = nenhuma tecnologia
    stack = Column(JSON(none_as_null=True), nullable=True)
    searchable = Column(Text, nullable=False)
