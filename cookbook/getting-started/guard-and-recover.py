#!/usr/bin/env python3
"""Recipe: Replace try/except control flow with guarded outcomes.

Problem:
    A lookup can fail (bad index, slow upstream, flaky stream). Callers want
    a value or a reason, not an exception to catch at every call site.

Walkthrough:
    1. Guard an out-of-range lookup and map its fault to a domain error.
    2. Recover the failure into an empty list and keep processing.
    3. Await a delayed operation and consume a stream that faults midway.
"""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import AsyncIterator
import logging

from outcomekit import guard_async, guard_stream, guard_sync


def print_section(title: str) -> None:
    """Print a named section heading."""
    print(f"\n{title}")
    print("-" * len(title))


def lookup_demo(index: int) -> list[str]:
    outcome = guard_sync(
        lambda: [[1, 2, 3][index]],
        on_failure=lambda fault, _tb: f"lookup failed: {type(fault).__name__}",
    )
    print(f"- guarded: {outcome!r}")

    values = (
        outcome.map_failure(lambda reason: reason.upper())
        .when_failure(lambda reason: print(f"- reason: {reason}"))
        .recover(lambda _reason: [])
        .value_or_default([])
    )
    rendered = [f"my {value}" for value in values if value != 0]
    for line in rendered:
        print(f"- {line}")
    return rendered


async def delayed_greeting(delay_s: float) -> str:
    await asyncio.sleep(delay_s)
    return "ok"


async def ticker(fail_at: int) -> AsyncIterator[int]:
    for tick in range(5):
        if tick == fail_at:
            raise ConnectionError(f"stream dropped at tick {tick}")
        yield tick


async def async_demo(delay_s: float, fail_at: int) -> None:
    outcome = await guard_async(lambda: delayed_greeting(delay_s))
    print(f"- awaited: {outcome!r}")

    async for event in guard_stream(lambda: ticker(fail_at)):
        print(
            "- "
            + event.when(
                on_success=lambda tick: f"tick {tick}",
                on_failure=lambda fault: f"stopped: {fault}",
            )
        )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Guard and recover walkthrough")
    parser.add_argument("--index", type=int, default=10, help="List index to look up")
    parser.add_argument("--delay", type=float, default=0.05, help="Async delay (s)")
    parser.add_argument("--fail-at", type=int, default=3, help="Tick that faults")
    parser.add_argument(
        "--verbose", action="store_true", help="Show captured faults as log records"
    )
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="  [%(name)s] %(message)s")

    print_section("Synchronous lookup")
    lookup_demo(args.index)

    print_section("Async and streaming")
    asyncio.run(async_demo(args.delay, args.fail_at))


if __name__ == "__main__":
    main()
