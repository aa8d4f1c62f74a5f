from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import date
from uuid import UUID

import pytest

from api.domain.people import (
    InvalidPersonError,
    NewPerson,
    Person,
    SEARCH_SEPARATOR,
    TooLongError,
    matches,
    new_person_id,
    normalize_term,
    parse_birth_date,
    parse_new_person,
    searchable_text,
    validate,
)


def test_validate_accepts_boundary_and_empty():
    assert validate("a" * 32, 32) == "a" * 32
    assert validate("", 32) == ""


def test_validate_rejects_too_long():
    with pytest.raises(TooLongError) as info:
        validate("a" * 33, 32, field="nick")
    assert info.value.field == "nick"
    assert info.value.max_len == 32
    assert info.value.length == 33


def test_validate_rejects_non_string():
    with pytest.raises(InvalidPersonError):
        validate(123, 32)


def test_new_person_enforces_lengths():
    NewPerson(name="n" * 100, nick="k" * 32, birth_date="2000-01-01", stack=["t" * 32])
    with pytest.raises(TooLongError):
        NewPerson(name="n" * 101, nick="k", birth_date="2000-01-01")
    with pytest.raises(TooLongError):
        NewPerson(name="n", nick="k" * 33, birth_date="2000-01-01")
    with pytest.raises(TooLongError):
        NewPerson(name="n", nick="k", birth_date="2000-01-01", stack=["ok", "t" * 33])


def test_new_person_requires_non_empty_name():
    with pytest.raises(InvalidPersonError):
        NewPerson(name="", nick="k", birth_date="2000-01-01")


def test_new_person_keeps_absent_stack_distinct_from_empty():
    assert NewPerson(name="n", nick="a", birth_date="2000-01-01").stack is None
    assert NewPerson(name="n", nick="b", birth_date="2000-01-01", stack=[]).stack == ()


def test_new_person_is_immutable():
    person = NewPerson(name="n", nick="k", birth_date="2000-01-01")
    with pytest.raises(FrozenInstanceError):
        person.name = "other"  # type: ignore[misc]


@pytest.mark.parametrize("raw", ["2001-13-01", "2001-02-30", "2001-8-18", "18/08/2001", "20010818", "", 20010818])
def test_parse_birth_date_rejects_malformed(raw):
    with pytest.raises(InvalidPersonError):
        parse_birth_date(raw)


def test_parse_birth_date_accepts_iso_and_date():
    assert parse_birth_date("2001-08-18") == date(2001, 8, 18)
    assert parse_birth_date(date(1999, 12, 31)) == date(1999, 12, 31)


def test_parse_new_person_from_wire_names():
    new_person = parse_new_person(
        {"nome": "Luiz Souza", "apelido": "Souz", "nascimento": "2001-08-18", "stack": ["Rust", "Go"]}
    )
    assert new_person == NewPerson(name="Luiz Souza", nick="Souz", birth_date=date(2001, 8, 18), stack=("Rust", "Go"))


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"apelido": "x", "nascimento": "2000-01-01"},
        {"nome": None, "apelido": "x", "nascimento": "2000-01-01"},
        {"nome": 1, "apelido": "x", "nascimento": "2000-01-01"},
        {"nome": "n", "apelido": None, "nascimento": "2000-01-01"},
        {"nome": "n", "apelido": "x", "nascimento": None},
        {"nome": "n", "apelido": "x", "nascimento": "2000-01-01", "stack": "Rust"},
        {"nome": "n", "apelido": "x", "nascimento": "2000-01-01", "stack": [1]},
    ],
)
def test_parse_new_person_rejects_bad_shapes(payload):
    with pytest.raises(InvalidPersonError):
        parse_new_person(payload)


def test_new_person_id_is_time_ordered_uuid7():
    ids = [new_person_id() for _ in range(50)]
    assert all(isinstance(i, UUID) and i.version == 7 for i in ids)
    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)


def test_matches_is_case_insensitive_across_fields():
    person = Person.from_new(new_person_id(), NewPerson(name="Luiz Souza", nick="Souz", birth_date="2001-08-18", stack=["Rust", "Go"]))
    assert matches(person, "rust")
    assert matches(person, "SOUZ")
    assert matches(person, "iz so")
    assert not matches(person, "java")
    assert not matches(person, "")


def test_normalize_term_rejects_empty_and_separator():
    assert normalize_term("") is None
    assert normalize_term(None) is None
    assert normalize_term(f"a{SEARCH_SEPARATOR}b") is None
    assert normalize_term("RuSt") == "rust"


def test_searchable_text_keeps_fields_apart():
    text = searchable_text("Ana", "Bia", ("Go",))
    assert text == SEARCH_SEPARATOR.join(["ana", "bia", "go"])
    assert "anabia" not in text
