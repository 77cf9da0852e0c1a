"""Callback adapters for callers that do not need the validated value.

The core contract passes the validated value to ``on_fail`` and the value
plus the exception to ``on_exception``. These helpers accept a zero-argument
``on_fail`` and an exception-only ``on_exception`` instead, and otherwise
behave exactly like the validator methods they call. Omitting
``on_exception`` still lets faults propagate.

Example:
    ```python
    from validchain import adapters, wrap_for_validation

    validator = wrap_for_validation(payload)
    adapters.validate(
        validator,
        lambda p: "id" in p,
        on_fail=lambda: metrics.incr("payload.missing_id"),
        on_exception=lambda e: logger.warning("check crashed: %s", e),
    )
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from validchain.protocol import OnException, OnFail, Validated

T = TypeVar("T")
V = TypeVar("V", bound=Validated)


def ignore_target(callback: Callable[[], None] | None) -> OnFail[Any] | None:
    """Lift a zero-argument callback to an ``on_fail`` callback."""
    if callback is None:
        return None

    def on_fail(_: Any) -> None:
        callback()

    return on_fail


def ignore_exception_target(
    callback: Callable[[Exception], None] | None,
) -> OnException[Any] | None:
    """Lift an exception-only callback to an ``on_exception`` callback."""
    if callback is None:
        return None

    def on_exception(_: Any, error: Exception) -> None:
        callback(error)

    return on_exception


def validate(
    validator: V,
    predicate: Callable[[Any], Any],
    on_fail: Callable[[], None] | None = None,
    on_exception: Callable[[Exception], None] | None = None,
) -> V:
    """``validator.validate`` with value-less callbacks."""
    return validator.validate(
        predicate, ignore_target(on_fail), ignore_exception_target(on_exception)
    )


def validate_action(
    validator: V,
    action: Callable[[Any], Any],
    on_exception: Callable[[Exception], None] | None = None,
) -> V:
    """``validator.validate_action`` with an exception-only handler."""
    return validator.validate_action(action, ignore_exception_target(on_exception))


async def validate_async(
    validator: V,
    predicate: Callable[[Any], Any],
    on_fail: Callable[[], None] | None = None,
    on_exception: Callable[[Exception], None] | None = None,
) -> V:
    """``validator.validate_async`` with value-less callbacks."""
    return await validator.validate_async(
        predicate, ignore_target(on_fail), ignore_exception_target(on_exception)
    )


async def validate_action_async(
    validator: V,
    action: Callable[[Any], Any],
    on_exception: Callable[[Exception], None] | None = None,
) -> V:
    """``validator.validate_action_async`` with an exception-only handler."""
    return await validator.validate_action_async(action, ignore_exception_target(on_exception))


__all__ = [
    "ignore_target",
    "ignore_exception_target",
    "validate",
    "validate_action",
    "validate_async",
    "validate_action_async",
]
