"""Repository contract shared by every person storage backend."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from api.domain.people import NewPerson, Person, PersonDirectoryError


class DuplicateNickError(PersonDirectoryError):
    """Raised when another person already owns the nick."""

    def __init__(self, nick: str):
        super().__init__(f"apelido ja utilizado: {nick}")
        self.nick = nick


class PersonNotFoundError(PersonDirectoryError):
    """Raised by callers that need an exception for a missing person."""

    def __init__(self, person_id: UUID | str):
        super().__init__(f"pessoa nao encontrada: {person_id}")
        self.person_id = person_id


class RepositoryUnavailableError(PersonDirectoryError):
    """Raised when the storage engine could not complete the operation."""

    def __init__(self, operation: str, reason: str | None = None):
        message = f"Falha ao executar {operation}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.operation = operation
        self.reason = reason


class PersonRepository(ABC):
    """Create/find/search/count over person records.

    Implementations must be safe to call from many concurrent tasks and must
    make a successful ``create`` visible to every read issued after it returns.
    """

    @abstractmethod
    async def create(self, new_person: NewPerson) -> Person:
        """Assign an id and store the person, rejecting duplicate nicks atomically."""

    @abstractmethod
    async def find_by_id(self, person_id: UUID) -> Optional[Person]:
        """Return the person or ``None`` when the id is unknown."""

    @abstractmethod
    async def search(self, term: str) -> list[Person]:
        """Case-insensitive substring match on name, nick and stack tags; empty term yields ``[]``."""

    @abstractmethod
    async def count(self) -> int:
        ...

    async def close(self) -> None:
        return None
