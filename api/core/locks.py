"""Asyncio reader/writer lock."""
from __future__ import annotations

import asyncio
from collections import deque
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Deque


class ReadWriteLock:
    """Many concurrent readers or a single writer.

    Waiting writers block new readers so a steady stream of reads cannot
    starve ``create``. Releasing never awaits, so a cancelled holder always
    gives the lock back.
    """

    def __init__(self) -> None:
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0
        self._waiters: Deque[asyncio.Future] = deque()

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def writing(self) -> bool:
        return self._writer

    def _wake_all(self) -> None:
        while self._waiters:
            waiter = self._waiters.popleft()
            if not waiter.done():
                waiter.set_result(None)

    async def _wait_until(self, ready: Callable[[], bool]) -> None:
        loop = asyncio.get_running_loop()
        while not ready():
            waiter = loop.create_future()
            self._waiters.append(waiter)
            await waiter

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        await self._wait_until(lambda: not self._writer and not self._waiting_writers)
        self._readers += 1
        try:
            yield
        finally:
            self._readers -= 1
            if not self._readers:
                self._wake_all()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        self._waiting_writers += 1
        try:
            await self._wait_until(lambda: not self._writer and not self._readers)
        finally:
            self._waiting_writers -= 1
            # leitores bloqueados pelo escritor em espera precisam reavaliar
            self._wake_all()
        self._writer = True
        try:
            yield
        finally:
            self._writer = False
            self._wake_all()
