"""The two-variant Outcome container and its transformation algebra.

An ``Outcome`` is exactly one of:

- ``Success(value)``: the operation produced a value.
- ``Failure(error)``: the operation failed; ``error`` describes why.

Both variants are frozen dataclasses, so equality and hashing follow the
payload and no instance changes after construction. Every transformation
returns a new ``Outcome``.

Transformations come in two flavours. ``map``, ``map_failure`` and
``recover`` assume the transformer cannot fail and let any fault escape to
the caller. Their ``guard_*`` counterparts run the transformer inside a
guard, so a fault raised by the transformer becomes a ``Failure`` instead.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, NoReturn

from outcomekit.errors import InvalidErrorPayloadError

if TYPE_CHECKING:
    from collections.abc import Callable

    from outcomekit.guards import FaultMapper

__all__ = ["Failure", "Outcome", "Success", "failure", "success"]


class Outcome[S, F]:
    """Base of the ``Success`` / ``Failure`` variants.

    Not instantiated directly; use ``success()``, ``failure()`` or one of the
    guard functions in ``outcomekit.guards``.
    """

    __slots__ = ()

    def __new__(cls, *args: Any, **kwargs: Any) -> Outcome[S, F]:
        if cls is Outcome:
            raise TypeError(
                "Outcome cannot be instantiated directly; use success() or failure()"
            )
        return object.__new__(cls)

    @classmethod
    def success(cls, value: S) -> Outcome[S, F]:
        """Return an Outcome that holds ``value`` as a success."""
        return Success(value)

    @classmethod
    def failure(cls, error: F) -> Outcome[S, F]:
        """Return an Outcome that holds ``error`` as a failure."""
        return Failure(error)

    # --- Status ---

    @property
    def is_success(self) -> bool:
        """Whether this instance represents a success."""
        match self:
            case Success():
                return True
            case Failure():
                return False
            case _:
                _unknown_variant(self)

    @property
    def is_failure(self) -> bool:
        """Whether this instance represents a failure."""
        match self:
            case Success():
                return False
            case Failure():
                return True
            case _:
                _unknown_variant(self)

    # --- Values and errors ---

    @property
    def value_or_none(self) -> S | None:
        """The held value for a success, ``None`` for a failure.

        ``None`` doubles as the absent marker. If ``S`` itself admits
        ``None``, check ``is_success`` or ``match`` on the variant instead.
        """
        match self:
            case Success(value):
                return value
            case Failure():
                return None
            case _:
                _unknown_variant(self)

    @property
    def error_or_none(self) -> F | None:
        """The held error for a failure, ``None`` for a success."""
        match self:
            case Success():
                return None
            case Failure(error):
                return error
            case _:
                _unknown_variant(self)

    def value_or_default(self, default: S) -> S:
        """Return the held value, or ``default`` for a failure."""
        match self:
            case Success(value):
                return value
            case Failure():
                return default
            case _:
                _unknown_variant(self)

    def value_or_else(self, or_else: Callable[[F], S]) -> S:
        """Return the held value, or ``or_else(error)`` for a failure.

        A fault raised by ``or_else`` propagates to the caller.
        """
        match self:
            case Success(value):
                return value
            case Failure(error):
                return or_else(error)
            case _:
                _unknown_variant(self)

    def value_or_raise(self) -> S:
        """Return the held value, or raise the held error for a failure.

        Raises:
            InvalidErrorPayloadError: If the held error is not an exception
                instance and so cannot be raised as itself.
        """
        match self:
            case Success(value):
                return value
            case Failure(BaseException() as error):
                raise error
            case Failure(error):
                raise InvalidErrorPayloadError(error)
            case _:
                _unknown_variant(self)

    # --- Branching ---

    def when[T](
        self,
        *,
        on_success: Callable[[S], T],
        on_failure: Callable[[F], T],
    ) -> T:
        """Return ``on_success(value)`` or ``on_failure(error)``."""
        match self:
            case Success(value):
                return on_success(value)
            case Failure(error):
                return on_failure(error)
            case _:
                _unknown_variant(self)

    def when_success(self, on_success: Callable[[S], object]) -> Outcome[S, F]:
        """Call ``on_success(value)`` for a success; return ``self`` either way."""
        match self:
            case Success(value):
                on_success(value)
            case Failure():
                pass
            case _:
                _unknown_variant(self)
        return self

    def when_failure(self, on_failure: Callable[[F], object]) -> Outcome[S, F]:
        """Call ``on_failure(error)`` for a failure; return ``self`` either way."""
        match self:
            case Success():
                pass
            case Failure(error):
                on_failure(error)
            case _:
                _unknown_variant(self)
        return self

    # --- Transformations ---

    def map[T](self, transform: Callable[[S], T]) -> Outcome[T, F]:
        """Transform the success value; a failure passes through untouched."""
        match self:
            case Success(value):
                return Success(transform(value))
            case Failure(error):
                return Failure(error)
            case _:
                _unknown_variant(self)

    def guard_map[T, G](
        self,
        transform: Callable[[S], T],
        *,
        on_failure: FaultMapper[G] | None = None,
    ) -> Outcome[T, F | G]:
        """Like ``map``, but a fault raised by ``transform`` becomes a Failure."""
        from outcomekit.guards import capture

        match self:
            case Success(value):
                return capture(
                    lambda: transform(value), on_failure=on_failure, origin="guard_map"
                )
            case Failure(error):
                return Failure(error)
            case _:
                _unknown_variant(self)

    def map_failure[G](self, transform: Callable[[F], G]) -> Outcome[S, G]:
        """Transform the failure error; a success passes through untouched."""
        match self:
            case Success(value):
                return Success(value)
            case Failure(error):
                return Failure(transform(error))
            case _:
                _unknown_variant(self)

    def guard_map_failure[G, H](
        self,
        transform: Callable[[F], G],
        *,
        on_failure: FaultMapper[H] | None = None,
    ) -> Outcome[S, G | H]:
        """Like ``map_failure``, but a fault raised by ``transform`` is captured.

        The captured fault, not the original error, becomes the new payload.
        """
        from outcomekit.guards import capture

        match self:
            case Success(value):
                return Success(value)
            case Failure(error):
                mapped = capture(
                    lambda: transform(error),
                    on_failure=on_failure,
                    origin="guard_map_failure",
                )
                # A transformed error is still a failure.
                return mapped if isinstance(mapped, Failure) else Failure(mapped.value)
            case _:
                _unknown_variant(self)

    def recover(self, transform: Callable[[F], S]) -> Outcome[S, F]:
        """Turn a failure into a success holding ``transform(error)``."""
        match self:
            case Success(value):
                return Success(value)
            case Failure(error):
                return Success(transform(error))
            case _:
                _unknown_variant(self)

    def guard_recover[G](
        self,
        transform: Callable[[F], S],
        *,
        on_failure: FaultMapper[G] | None = None,
    ) -> Outcome[S, G]:
        """Like ``recover``, but a fault raised by ``transform`` stays a Failure."""
        from outcomekit.guards import capture

        match self:
            case Success(value):
                return Success(value)
            case Failure(error):
                return capture(
                    lambda: transform(error),
                    on_failure=on_failure,
                    origin="guard_recover",
                )
            case _:
                _unknown_variant(self)


@dataclasses.dataclass(frozen=True, slots=True, repr=False)
class Success[S, F](Outcome[S, F]):
    """A successful outcome holding ``value``."""

    value: S

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


@dataclasses.dataclass(frozen=True, slots=True, repr=False)
class Failure[S, F](Outcome[S, F]):
    """A failed outcome holding ``error``."""

    error: F

    def __repr__(self) -> str:
        return f"Failure({self.error!r})"


def success[S](value: S) -> Success[S, Any]:
    """Return an Outcome that holds ``value`` as a success."""
    return Success(value)


def failure[F](error: F) -> Failure[Any, F]:
    """Return an Outcome that holds ``error`` as a failure."""
    return Failure(error)


def _unknown_variant(outcome: object) -> NoReturn:
    raise TypeError(
        f"{type(outcome).__name__} is not a Success or Failure; "
        "Outcome has exactly two variants"
    )
