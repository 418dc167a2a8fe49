from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Protocol


class TransactionManager(Protocol):
    """Delimita una unidad de trabajo; el adaptador SQL hace commit o rollback al salir."""

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        yield
