"""Domain model for person records (validation, identifiers, search predicate)."""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional
from uuid import UUID

from uuid6 import uuid7

NAME_MAX_LENGTH = 100
NICK_MAX_LENGTH = 32
TAG_MAX_LENGTH = 32

# Separa os campos na projecao pesquisavel; termos que o contem nunca casam.
SEARCH_SEPARATOR = "\x1f"

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


class PersonDirectoryError(Exception):
    """Base exception for the person directory."""


class InvalidPersonError(PersonDirectoryError):
    """Raised when input fails length/shape validation."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


class TooLongError(InvalidPersonError):
    """Raised when a bounded text field exceeds its maximum length."""

    def __init__(self, field: str, max_len: int, length: int):
        super().__init__(f"{field} excede {max_len} caracteres ({length})", field)
        self.max_len = max_len
        self.length = length


def validate(raw: Any, max_len: int, *, field: str = "value", allow_empty: bool = True) -> str:
    """Return ``raw`` unchanged when it is a string of at most ``max_len`` characters."""
    if not isinstance(raw, str):
        raise InvalidPersonError(f"{field} deve ser texto", field)
    if len(raw) > max_len:
        raise TooLongError(field, max_len, len(raw))
    if not raw and not allow_empty:
        raise InvalidPersonError(f"{field} nao pode ser vazio", field)
    return raw


def validate_name(raw: Any) -> str:
    return validate(raw, NAME_MAX_LENGTH, field="name", allow_empty=False)


def validate_nick(raw: Any) -> str:
    return validate(raw, NICK_MAX_LENGTH, field="nick")


def validate_tag(raw: Any) -> str:
    return validate(raw, TAG_MAX_LENGTH, field="stack")


def parse_birth_date(raw: Any) -> date:
    """Accept a ``date`` or a strict ``YYYY-MM-DD`` string."""
    if isinstance(raw, datetime):
        raise InvalidPersonError("birth_date deve ser uma data, nao data/hora", "birth_date")
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str) or not _DATE_PATTERN.fullmatch(raw):
        raise InvalidPersonError("birth_date deve estar no formato YYYY-MM-DD", "birth_date")
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidPersonError(f"birth_date invalida: {raw}", "birth_date") from None


def validate_stack(raw: Any) -> Optional[tuple[str, ...]]:
    if raw is None:
        return None
    if isinstance(raw, (str, bytes)) or not isinstance(raw, (list, tuple)):
        raise InvalidPersonError("stack deve ser uma lista de textos", "stack")
    return tuple(validate_tag(tag) for tag in raw)


def new_person_id() -> UUID:
    """Generate a time-ordered (version 7) identifier."""
    return UUID(uuid7().hex)


@dataclass(frozen=True)
class NewPerson:
    """Validated creation request. Building one is the validation step."""

    name: str
    nick: str
    birth_date: date
    stack: Optional[tuple[str, ...]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", validate_name(self.name))
        object.__setattr__(self, "nick", validate_nick(self.nick))
        object.__setattr__(self, "birth_date", parse_birth_date(self.birth_date))
        object.__setattr__(self, "stack", validate_stack(self.stack))


@dataclass(frozen=True)
class Person:
    id: UUID
    name: str
    nick: str
    birth_date: date
    stack: Optional[tuple[str, ...]] = None

    @classmethod
    def from_new(cls, person_id: UUID, new_person: NewPerson) -> "Person":
        return cls(
            id=person_id,
            name=new_person.name,
            nick=new_person.nick,
            birth_date=new_person.birth_date,
            stack=new_person.stack,
        )


_REQUIRED_FIELDS = {"nome": "name", "apelido": "nick", "nascimento": "birth_date"}


def parse_new_person(payload: Any) -> NewPerson:
    """Build a ``NewPerson`` from a decoded JSON body (``nome``, ``apelido``, ``nascimento``, ``stack``)."""
    if not isinstance(payload, Mapping):
        raise InvalidPersonError("corpo da requisicao deve ser um objeto JSON")
    for wire_name, field in _REQUIRED_FIELDS.items():
        if payload.get(wire_name) is None:
            raise InvalidPersonError(f"{wire_name} e obrigatorio", field)
    return NewPerson(
        name=payload["nome"],
        nick=payload["apelido"],
        birth_date=payload["nascimento"],
        stack=payload.get("stack"),
    )


def normalize_term(term: str | None) -> str | None:
    """Lower-case a search term; ``None`` when the term can match nothing."""
    if not term or SEARCH_SEPARATOR in term:
        return None
    return term.lower()


def search_fields(name: str, nick: str, stack: Iterable[str] | None) -> list[str]:
    return [name, nick, *(stack or ())]


def searchable_text(name: str, nick: str, stack: Iterable[str] | None) -> str:
    """Lower-cased projection of the searchable fields, as stored by the SQL backend."""
    return SEARCH_SEPARATOR.join(value.lower() for value in search_fields(name, nick, stack))


def matches(person: Person, term: str | None) -> bool:
    needle = normalize_term(term)
    if needle is None:
        return False
    return any(needle in value.lower() for value in search_fields(person.name, person.nick, person.stack))
