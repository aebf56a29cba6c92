"""Unit tests for per-entity asyncio locks."""

import asyncio

from src.em_common.locks import EntityLocks, product_key, seller_key


def test_key_format() -> None:
    assert product_key(7) == "product:7"
    assert seller_key("0xabc") == "seller:0xabc"


async def test_same_key_serializes() -> None:
    locks = EntityLocks()
    order: list[str] = []

    async def worker(name: str) -> None:
        async with locks.hold("product:1"):
            order.append(f"{name}-in")
            await asyncio.sleep(0.01)
            order.append(f"{name}-out")

    await asyncio.gather(worker("a"), worker("b"))
    assert order == ["a-in", "a-out", "b-in", "b-out"]


async def test_opposite_acquisition_order_does_not_deadlock() -> None:
    locks = EntityLocks()

    async def worker(*keys: str) -> None:
        async with locks.hold(*keys):
            await asyncio.sleep(0.01)

    await asyncio.wait_for(
        asyncio.gather(worker("seller:x", "product:1"), worker("product:1", "seller:x")),
        timeout=2,
    )


async def test_duplicate_keys_acquired_once() -> None:
    locks = EntityLocks()
    async with locks.hold("catalog", "catalog"):
        assert locks.get("catalog").locked()
    assert not locks.get("catalog").locked()
