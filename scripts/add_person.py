#!/usr/bin/env python3
"""
Cadastrar uma pessoa diretamente no banco configurado em DATABASE_URL.

Uso:
  python scripts/add_person.py --nome "Luiz Souza" --apelido Souz --nascimento 2001-08-18 [--stack Rust --stack Go]
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

# Garantir que o pacote api seja importável quando rodado diretamente
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from api.core.config import get_settings
from api.db.create_tables import create_all
from api.db.session import create_engine_from_settings
from api.domain.people import parse_new_person
from api.repositories.sql_repository import SQLPersonRepository


async def add_person(payload: dict) -> None:
    new_person = parse_new_person(payload)
    repo = SQLPersonRepository(create_engine_from_settings(get_settings()))
    try:
        await create_all(repo.engine)
        person = await repo.create(new_person)
    finally:
        await repo.close()
    print("OK: pessoa cadastrada")
    print(f"  ID: {person.id}")
    print(f"  Apelido: {person.nick}")


def main() -> None:
    ap = argparse.ArgumentParser(description="Cadastrar pessoa no banco")
    ap.add_argument("--nome", required=True, help="Nome completo (ate 100 caracteres)")
    ap.add_argument("--apelido", required=True, help="Apelido unico (ate 32 caracteres)")
    ap.add_argument("--nascimento", required=True, help="Data no formato YYYY-MM-DD")
    ap.add_argument("--stack", action="append", help="Tecnologia (repita para varias)")
    args = ap.parse_args()

    payload = {
        "nome": args.nome,
        "apelido": args.apelido,
        "nascimento": args.nascimento,
        "stack": args.stack,
    }
    asyncio.run(add_person(payload))


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - uso CLI
        sys.stderr.write(f"Erro: {exc}\n")
        raise SystemExit(1)
