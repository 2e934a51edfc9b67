"""Test helpers (small, reusable doubles).

Keep this file tiny: one fault type with value equality, and async
operations that settle after a short delay.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Iterator
from dataclasses import dataclass, field


class BoomError(Exception):
    """Fault raised by test operations; equal when codes match."""

    def __init__(self, code: int = 0) -> None:
        super().__init__(f"boom {code}")
        self.code = code

    def __eq__(self, other: object) -> bool:
        return isinstance(other, BoomError) and other.code == self.code

    def __hash__(self) -> int:
        return hash(("BoomError", self.code))


@dataclass
class DelayedRequests:
    """Async operations that settle after a short delay.

    Records every evaluation so tests can assert an operation ran exactly once.
    """

    delay_s: float = 0.01
    calls: list[str] = field(default_factory=list)

    async def succeed(self, value: str = "Successful Response") -> str:
        self.calls.append("succeed")
        await asyncio.sleep(self.delay_s)
        return value

    async def fail(self, code: int = 0) -> str:
        self.calls.append("fail")
        await asyncio.sleep(self.delay_s)
        raise BoomError(code)


@dataclass
class Producer:
    """Sync and async sequences that fault after ``fail_after`` items."""

    items: tuple[int, ...] = (1, 2, 3)
    fail_after: int | None = None
    produced: list[int] = field(default_factory=list)
    closed: bool = False

    def _should_fail(self, index: int) -> bool:
        return self.fail_after is not None and index >= self.fail_after

    def sync(self) -> Iterator[int]:
        try:
            for index, item in enumerate(self.items):
                if self._should_fail(index):
                    raise BoomError(index)
                self.produced.append(item)
                yield item
        finally:
            self.closed = True

    async def stream(self) -> AsyncIterator[int]:
        try:
            for index, item in enumerate(self.items):
                await asyncio.sleep(0)
                if self._should_fail(index):
                    raise BoomError(index)
                self.produced.append(item)
                yield item
        finally:
            self.closed = True
