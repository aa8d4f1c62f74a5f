"""
In-process person storage.

Keeps everything in a dict guarded by a reader/writer lock. Meant for local
runs, tests and benchmarks; nothing survives a restart.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional
from uuid import UUID

from api.core.locks import ReadWriteLock
from api.domain.people import NewPerson, Person, matches, new_person_id, normalize_term
from api.repositories.base import DuplicateNickError, PersonRepository


class InMemoryPersonRepository(PersonRepository):
    def __init__(self, seed: Iterable[Person] = ()) -> None:
        self._people: Dict[UUID, Person] = {}
        self._ids_by_nick: Dict[str, UUID] = {}
        self._lock = ReadWriteLock()
        for person in seed:
            if person.id in self._people:
                raise ValueError(f"id repetido na carga inicial: {person.id}")
            if person.nick in self._ids_by_nick:
                raise DuplicateNickError(person.nick)
            self._people[person.id] = person
            self._ids_by_nick[person.nick] = person.id

    async def create(self, new_person: NewPerson) -> Person:
        async with self._lock.write():
            if new_person.nick in self._ids_by_nick:
                raise DuplicateNickError(new_person.nick)
            person = Person.from_new(new_person_id(), new_person)
            self._people[person.id] = person
            self._ids_by_nick[person.nick] = person.id
            return person

    async def find_by_id(self, person_id: UUID) -> Optional[Person]:
        async with self._lock.read():
            return self._people.get(person_id)

    async def search(self, term: str) -> list[Person]:
        if normalize_term(term) is None:
            return []
        async with self._lock.read():
            return [person for person in self._people.values() if matches(person, term)]

    async def count(self) -> int:
        async with self._lock.read():
            return len(self._people)
