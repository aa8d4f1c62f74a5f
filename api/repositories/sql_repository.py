"""Person storage backed by SQLAlchemy (asyncio)."""
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from api.db.models import PersonRecord
from api.db.session import create_sessionmaker, get_session
from api.domain.people import NewPerson, Person, new_person_id, normalize_term, searchable_text
from api.repositories.base import DuplicateNickError, PersonRepository, RepositoryUnavailableError

# Falhas de conexao do driver (recusa, DNS, timeout) chegam sem o wrapper do SQLAlchemy
STORAGE_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)


@asynccontextmanager
async def _storage_errors(operation: str) -> AsyncIterator[None]:
    try:
        yield
    except STORAGE_ERRORS as exc:
        raise RepositoryUnavailableError(operation, str(exc)) from exc


class SQLPersonRepository(PersonRepository):
    """Stores people in the ``people`` table.

    Nick uniqueness is enforced by the ``uq_people_nick`` constraint, so the
    check and the insert happen in the same statement even with several
    processes writing. Every call borrows a pooled connection through its own
    session and gives it back when the ``async with`` block exits.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._sessions = create_sessionmaker(engine)

    async def create(self, new_person: NewPerson) -> Person:
        person = Person.from_new(new_person_id(), new_person)
        record = _to_record(person)
        async with _storage_errors("create"):
            async with get_session(self._sessions) as session:
                session.add(record)
                try:
                    await session.commit()
                except IntegrityError:
                    await session.rollback()
                    raise DuplicateNickError(new_person.nick) from None
        return person

    async def find_by_id(self, person_id: UUID) -> Optional[Person]:
        async with _storage_errors("find_by_id"):
            async with get_session(self._sessions) as session:
                record = await session.get(PersonRecord, person_id)
                return _to_entity(record) if record else None

    async def search(self, term: str) -> list[Person]:
        needle = normalize_term(term)
        if needle is None:
            return []
        stmt = (
            select(PersonRecord)
            .where(PersonRecord.searchable.contains(needle, autoescape=True))
            .order_by(PersonRecord.id)
        )
        async with _storage_errors("search"):
            async with get_session(self._sessions) as session:
                records = (await session.execute(stmt)).scalars().all()
                return [_to_entity(record) for record in records]

    async def count(self) -> int:
        async with _storage_errors("count"):
            async with get_session(self._sessions) as session:
                total = await session.scalar(select(func.count(PersonRecord.id)))
                return int(total or 0)

    async def close(self) -> None:
        await self.engine.dispose()


def _to_record(person: Person) -> PersonRecord:
    return PersonRecord(
        id=person.id,
        name=person.name,
        nick=person.nick,
        birth_date=person.birth_date,
        stack=list(person.stack) if person.stack is not None else None,
        searchable=searchable_text(person.name, person.nick, person.stack),
    )


def _to_entity(record: PersonRecord) -> Person:
    return Person(
        id=record.id,
        name=record.name,
        nick=record.nick,
        birth_date=record.birth_date,
        stack=tuple(record.stack) if record.stack is not None else None,
    )
