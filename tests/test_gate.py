# File: tests/test_gate.py
import asyncio

import pytest

from archive_scout.gate import DEFAULT_CAPACITY, ConcurrencyGate


async def settle(rounds: int = 5) -> None:
    for _ in range(rounds):
        await asyncio.sleep(0)


def test_default_capacity():
    gate = ConcurrencyGate()
    assert gate.capacity == DEFAULT_CAPACITY == 50
    assert gate.in_use == 0
    assert gate.available == 50


@pytest.mark.parametrize("capacity", [0, -1])
def test_invalid_capacity(capacity):
    with pytest.raises(ValueError):
        ConcurrencyGate(capacity)


@pytest.mark.asyncio()
async def test_acquire_release_accounting():
    gate = ConcurrencyGate(3)
    await gate.acquire()
    await gate.acquire(2)
    assert gate.in_use == 3 and gate.available == 0
    gate.release(2)
    assert gate.in_use == 1
    gate.release()
    assert gate.in_use == 0


@pytest.mark.asyncio()
async def test_invalid_amounts():
    gate = ConcurrencyGate(2)
    with pytest.raises(ValueError):
        await gate.acquire(0)
    with pytest.raises(ValueError):
        await gate.acquire(3)
    with pytest.raises(ValueError):
        gate.release()


@pytest.mark.asyncio()
async def test_acquire_blocks_until_release():
    gate = ConcurrencyGate(1)
    await gate.acquire()
    waiter = asyncio.create_task(gate.acquire())
    await settle()
    assert not waiter.done()
    gate.release()
    await asyncio.wait_for(waiter, timeout=1)
    assert gate.in_use == 1


@pytest.mark.asyncio()
async def test_waiters_served_in_arrival_order():
    gate = ConcurrencyGate(2)
    await gate.acquire(2)
    order: list[str] = []

    async def take(n: int, tag: str) -> None:
        await gate.acquire(n)
        order.append(tag)

    big = asyncio.create_task(take(2, "big"))
    await settle()
    small = asyncio.create_task(take(1, "small"))
    await settle()

    gate.release(1)
    await settle()
    # one free permit must not let the later, smaller request jump the queue
    assert order == []

    gate.release(1)
    await settle()
    assert order == ["big"]
    assert gate.in_use == 2

    gate.release(2)
    await asyncio.wait_for(asyncio.gather(big, small), timeout=1)
    assert order == ["big", "small"]
    assert gate.in_use == 1


@pytest.mark.asyncio()
async def test_cancelled_waiter_leaves_no_trace():
    gate = ConcurrencyGate(1)
    await gate.acquire()
    waiter = asyncio.create_task(gate.acquire())
    await settle()
    waiter.cancel()
    with pytest.raises(asyncio.CancelledError):
        await waiter
    gate.release()
    assert gate.in_use == 0
    await asyncio.wait_for(gate.acquire(), timeout=1)
    assert gate.in_use == 1


@pytest.mark.asyncio()
async def test_permit_released_on_error():
    gate = ConcurrencyGate(1)
    with pytest.raises(RuntimeError):
        async with gate.permit():
            assert gate.in_use == 1
            raise RuntimeError("boom")
    assert gate.in_use == 0


@pytest.mark.asyncio()
async def test_permit_never_exceeds_capacity():
    gate = ConcurrencyGate(5)
    peak = 0

    async def session() -> None:
        nonlocal peak
        async with gate.permit():
            peak = max(peak, gate.in_use)
            await asyncio.sleep(0.01)

    await asyncio.gather(*(session() for _ in range(40)))
    assert peak == 5
    assert gate.in_use == 0
