"""Per-entity asyncio locks.

One logical operation per entity at a time within the process. Keys are
acquired in sorted order so two operations touching overlapping entities
(e.g. a product and its seller) can never deadlock each other.
"""

import asyncio
from collections import defaultdict
from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager


def product_key(product_id: int) -> str:
    return f"product:{product_id}"


def seller_key(address: str) -> str:
    return f"seller:{address}"


CATALOG_KEY = "catalog"
TREASURY_KEY = "treasury"


class EntityLocks:
    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def get(self, key: str) -> asyncio.Lock:
        return self._locks[key]

    @asynccontextmanager
    async def hold(self, *keys: str) -> AsyncIterator[None]:
        async with AsyncExitStack() as stack:
            for key in sorted(set(keys)):
                await stack.enter_async_context(self._locks[key])
            yield


entity_locks = EntityLocks()
