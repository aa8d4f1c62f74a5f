from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from api.domain.people import Person, parse_new_person
from api.repositories.base import PersonNotFoundError, PersonRepository

router = APIRouter(tags=["pessoas"])


def get_repository(request: Request) -> PersonRepository:
    repo = getattr(getattr(request.app, "state", None), "person_repository", None)
    if not repo:
        raise RuntimeError("PersonRepository nao configurado")
    return repo


def person_to_json(person: Person) -> dict:
    return {
        "id": str(person.id),
        "nome": person.name,
        "apelido": person.nick,
        "nascimento": person.birth_date.isoformat(),
        "stack": list(person.stack) if person.stack is not None else None,
    }


@router.post("/pessoas", status_code=201)
async def create_person(request: Request, repo: PersonRepository = Depends(get_repository)):
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(400, "JSON invalido")
    new_person = parse_new_person(payload)
    person = await repo.create(new_person)
    return JSONResponse(
        person_to_json(person),
        status_code=201,
        headers={"Location": f"/pessoas/{person.id}"},
    )


@router.get("/pessoas/{person_id}")
async def find_person(person_id: str, repo: PersonRepository = Depends(get_repository)):
    try:
        parsed = UUID(person_id)
    except ValueError:
        raise PersonNotFoundError(person_id) from None
    person = await repo.find_by_id(parsed)
    if person is None:
        raise PersonNotFoundError(parsed)
    return person_to_json(person)


@router.get("/pessoas")
async def search_people(t: str | None = None, repo: PersonRepository = Depends(get_repository)):
    if t is None:
        raise HTTPException(400, "Parametro 't' obrigatorio")
    return [person_to_json(person) for person in await repo.search(t)]


@router.get("/contagem-pessoas")
async def count_people(repo: PersonRepository = Depends(get_repository)):
    return await repo.count()
