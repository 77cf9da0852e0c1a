"""Validation contract shared by scalar and sequence validators."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any, Protocol, TypeVar, runtime_checkable

from validchain.exceptions import ValidatorUsageError

T = TypeVar("T")

OnFail = Callable[[T], None]
OnException = Callable[[T, Exception], None]


@runtime_checkable
class Validated(Protocol[T]):
    """Fluent validation chain over a value or over each element of a sequence.

    Every mutating method returns the validator itself so calls can be
    chained. A step is skipped (nothing is called, validity is unchanged) when
    force-skipping is engaged, or when skip-if-invalid is enabled and the
    validator is already invalid.

    Exception policy for every step: a fault (an ``Exception`` raised by the
    predicate or action) always marks the validator invalid. It is then passed
    to ``on_exception`` and swallowed when a handler was supplied, and
    re-raised unchanged otherwise.

    Implementations:
    - ScalarValidator: validates one target value
    - SequenceValidator: validates every element of a sequence

    Example:
        ```python
        from validchain import wrap_for_validation

        ok = (
            wrap_for_validation(user, skip_if_already_invalid=True)
            .validate(lambda u: u.email, on_fail=lambda u: errors.append("email"))
            .validate_action(check_quota, on_exception=lambda u, e: log(e))
            .is_valid()
        )
        ```
    """

    def validate(
        self,
        predicate: Callable[[T], Any],
        on_fail: OnFail[T] | None = None,
        on_exception: OnException[T] | None = None,
    ) -> Validated[T]:
        """Run a predicate; a falsy result calls ``on_fail`` and marks invalid."""
        ...

    def validate_action(
        self,
        action: Callable[[T], Any],
        on_exception: OnException[T] | None = None,
    ) -> Validated[T]:
        """Run an action; only a raised exception can mark invalid."""
        ...

    async def validate_async(
        self,
        predicate: Callable[[T], Any],
        on_fail: OnFail[T] | None = None,
        on_exception: OnException[T] | None = None,
    ) -> Validated[T]:
        """Async form of ``validate``; the predicate's result is awaited."""
        ...

    async def validate_action_async(
        self,
        action: Callable[[T], Any],
        on_exception: OnException[T] | None = None,
    ) -> Validated[T]:
        """Async form of ``validate_action``."""
        ...

    def is_valid(self) -> bool:
        """Return True unless some step failed or faulted."""
        ...

    def ensure_valid(self) -> Validated[T]:
        """Return the validator, or raise InvalidTargetError if it is invalid."""
        ...

    def skip_if_already_invalid(self, enable: bool = True) -> Validated[T]:
        """Set the skip-on-invalid policy for future steps."""
        ...

    def force_skip_if(self, predicate: Callable[[T], Any]) -> Validated[T]:
        """Engage force-skipping when the predicate holds."""
        ...

    def stop_force_skipping(self) -> Validated[T]:
        """Restore normal processing."""
        ...


def require_callable(value: Any, argument: str) -> None:
    """Raise ValidatorUsageError unless ``value`` is callable."""
    if not callable(value):
        raise ValidatorUsageError(
            f"{argument} must be callable, got {type(value).__name__}",
            context={"argument": argument, "received": type(value).__name__},
        )


def reject_awaitable(result: Any, argument: str, hint: str) -> None:
    """Raise ValidatorUsageError if a synchronous callback returned an awaitable.

    A coroutine is always truthy, so accepting one would let the step pass
    without ever running the check. Coroutines are closed before raising so
    they are not reported as never awaited.
    """
    if not inspect.isawaitable(result):
        return
    close = getattr(result, "close", None)
    if close is not None:
        close()
    raise ValidatorUsageError(
        f"{argument} returned an awaitable; {hint}",
        context={"argument": argument, "received": type(result).__name__},
    )


__all__ = [
    "Validated",
    "OnFail",
    "OnException",
    "require_callable",
    "reject_awaitable",
]
