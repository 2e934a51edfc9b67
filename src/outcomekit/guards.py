"""Guard constructors: run fallible code and return an Outcome.

Every guard shares one contract. A zero-argument ``operation`` is called;
its result becomes a ``Success``. If it raises an ``Exception``, the fault
becomes a ``Failure``:

- with ``on_failure``, the payload is ``on_failure(fault, traceback)``;
- without it, the payload is the fault itself. Passing ``expect`` narrows
  the accepted fault types; any other fault raises ``FaultCoercionError``.

Faults outside ``Exception`` (``KeyboardInterrupt``, ``SystemExit``,
``asyncio.CancelledError``) are never captured.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
from types import TracebackType
from typing import TYPE_CHECKING, Any

from outcomekit.config import Settings, current_settings
from outcomekit.errors import ConfigurationError, FaultCoercionError
from outcomekit.outcome import Failure, Outcome, Success

if TYPE_CHECKING:
    from collections.abc import (
        AsyncIterable,
        AsyncIterator,
        Awaitable,
        Iterable,
        Iterator,
    )

__all__ = [
    "ExpectedFaults",
    "FaultMapper",
    "capture",
    "guard_async",
    "guard_iter",
    "guard_stream",
    "guard_sync",
]

log = logging.getLogger(__name__)

type FaultMapper[F] = Callable[[Exception, TracebackType | None], F]
type ExpectedFaults = type[BaseException] | tuple[type[BaseException], ...]

_warned_bad_settings = False


def _fault_settings() -> Settings:
    global _warned_bad_settings
    try:
        return current_settings()
    except ConfigurationError as exc:
        # Settings errors never replace the Failure being built.
        if not _warned_bad_settings:
            _warned_bad_settings = True
            log.warning("Ignoring invalid outcomekit settings, using defaults: %s", exc)
        return Settings()


def _report(fault: Exception, origin: str) -> None:
    settings = _fault_settings()
    if not settings.log_captured_faults:
        return
    log.log(
        settings.fault_log_level,
        "%s captured %s: %s",
        origin,
        type(fault).__name__,
        fault,
        exc_info=fault if settings.log_tracebacks else None,
    )


def _to_failure(
    fault: Exception,
    *,
    on_failure: FaultMapper[Any] | None,
    expect: ExpectedFaults | None,
    origin: str,
) -> Failure[Any, Any]:
    _report(fault, origin)
    if on_failure is not None:
        return Failure(on_failure(fault, fault.__traceback__))
    if expect is not None and not isinstance(fault, expect):
        raise FaultCoercionError(fault, expect) from fault
    return Failure(fault)


def capture[V, F](
    operation: Callable[[], V],
    *,
    on_failure: FaultMapper[F] | None = None,
    expect: ExpectedFaults | None = None,
    origin: str = "guard_sync",
) -> Outcome[V, F]:
    """Synchronous guard with an explicit ``origin`` label for log records.

    The ``guard_*`` combinators on ``Outcome`` call this directly so that
    captured faults are attributed to the combinator, not to ``guard_sync``.
    """
    try:
        value = operation()
    except Exception as exc:
        return _to_failure(exc, on_failure=on_failure, expect=expect, origin=origin)
    return Success(value)


def guard_sync[V, F](
    operation: Callable[[], V],
    *,
    on_failure: FaultMapper[F] | None = None,
    expect: ExpectedFaults | None = None,
) -> Outcome[V, F]:
    """Run ``operation`` and wrap its result or fault in an Outcome.

    Args:
        operation: Zero-argument callable to run.
        on_failure: Optional mapper from ``(fault, traceback)`` to the error
            payload. A fault raised by the mapper itself propagates.
        expect: Exception class (or tuple of classes) the unmapped fault must
            match. Ignored when ``on_failure`` is given.

    Returns:
        ``Success(result)`` or ``Failure(error)``.

    Raises:
        FaultCoercionError: If ``expect`` is set, ``on_failure`` is not, and
            the captured fault is not an instance of ``expect``.

    Example:
        outcome = guard_sync(lambda: [1, 2, 3][10])
        assert isinstance(outcome.error_or_none, IndexError)
    """
    return capture(operation, on_failure=on_failure, expect=expect, origin="guard_sync")


async def guard_async[V, F](
    operation: Callable[[], Awaitable[V]],
    *,
    on_failure: FaultMapper[F] | None = None,
    expect: ExpectedFaults | None = None,
) -> Outcome[V, F]:
    """Await ``operation()`` once and wrap its result or fault in an Outcome.

    No timeout or cancellation is applied; cancelling the awaiting task
    cancels the operation and propagates ``CancelledError``.
    """
    try:
        value = await operation()
    except Exception as exc:
        return _to_failure(
            exc, on_failure=on_failure, expect=expect, origin="guard_async"
        )
    return Success(value)


def guard_iter[V, F](
    operation: Callable[[], Iterable[V]],
    *,
    on_failure: FaultMapper[F] | None = None,
    expect: ExpectedFaults | None = None,
) -> Iterator[Outcome[V, F]]:
    """Lazily yield a Success per produced item, then one Failure on the first fault.

    ``operation`` runs on the first pull. Production stops after a fault.
    Faults raised by the consumer between pulls are not captured.
    """
    try:
        iterator = iter(operation())
    except Exception as exc:
        yield _to_failure(exc, on_failure=on_failure, expect=expect, origin="guard_iter")
        return

    try:
        while True:
            try:
                item = next(iterator)
            except StopIteration:
                return
            except Exception as exc:
                yield _to_failure(
                    exc, on_failure=on_failure, expect=expect, origin="guard_iter"
                )
                return
            yield Success(item)
    finally:
        close = getattr(iterator, "close", None)
        if callable(close):
            close()


async def guard_stream[V, F](
    operation: Callable[[], AsyncIterable[V]],
    *,
    on_failure: FaultMapper[F] | None = None,
    expect: ExpectedFaults | None = None,
) -> AsyncIterator[Outcome[V, F]]:
    """Async counterpart of ``guard_iter`` for async iterables.

    Example:
        async for outcome in guard_stream(lambda: ticker()):
            outcome.when_failure(report)
    """
    try:
        iterator = aiter(operation())
    except Exception as exc:
        yield _to_failure(
            exc, on_failure=on_failure, expect=expect, origin="guard_stream"
        )
        return

    try:
        while True:
            try:
                item = await anext(iterator)
            except StopAsyncIteration:
                return
            except Exception as exc:
                yield _to_failure(
                    exc, on_failure=on_failure, expect=expect, origin="guard_stream"
                )
                return
            yield Success(item)
    finally:
        aclose = getattr(iterator, "aclose", None)
        if callable(aclose):
            await aclose()
