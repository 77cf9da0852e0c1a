"""Fluent chains over a validator that is still being computed.

``validate_async`` returns a coroutine, which would otherwise break a fluent
chain after the first async step. ``PendingValidation`` wraps the validator
(or any awaitable yielding one) and mirrors the validator methods; each call
returns a new stage that, when awaited, awaits the previous stage and then
delegates to the real validator.

Nothing runs until the chain is awaited. Each stage runs at most once; awaiting
it again returns the same validator.

Example:
    ```python
    from validchain import pending, wrap_for_validation

    ok = await (
        pending(wrap_for_validation(user))
        .validate_async(email_is_deliverable)
        .validate(lambda u: u.age >= 18)
        .validate_action_async(check_not_banned, on_exception=report)
        .is_valid()
    )
    ```
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Generator
from typing import Any, Generic, TypeVar

from validchain.exceptions import ValidatorUsageError
from validchain.protocol import Validated

logger = logging.getLogger(__name__)

T = TypeVar("T")

Step = Callable[[Validated[T]], Awaitable[Validated[T]]]


class PendingValidation(Generic[T]):
    """An awaitable stage of a validation chain.

    Args:
        source: A validator, or an awaitable (coroutine, task, another
            PendingValidation) that yields one.

    Raises:
        ValidatorUsageError: If ``source`` is neither.
    """

    def __init__(self, source: Validated[T] | Awaitable[Validated[T]]) -> None:
        if not inspect.isawaitable(source) and not isinstance(source, Validated):
            raise ValidatorUsageError(
                "source must be a validator or an awaitable yielding one",
                context={"received": type(source).__name__},
            )
        self._source = source
        self._step: Step[T] | None = None
        self._resolved: Validated[T] | None = None

    def __await__(self) -> Generator[Any, None, Validated[T]]:
        return self._resolve().__await__()

    async def _resolve(self) -> Validated[T]:
        if self._resolved is None:
            source = self._source
            validator = await source if inspect.isawaitable(source) else source
            if self._step is not None:
                validator = await self._step(validator)
            self._resolved = validator
        return self._resolved

    def _then(self, step: Step[T]) -> PendingValidation[T]:
        stage: PendingValidation[T] = PendingValidation(self)
        stage._step = step
        return stage

    def validate(
        self,
        predicate: Callable[[T], Any],
        on_fail: Callable[[T], None] | None = None,
        on_exception: Callable[[T, Exception], None] | None = None,
    ) -> PendingValidation[T]:
        """Chain a ``validate`` step."""

        async def step(validator: Validated[T]) -> Validated[T]:
            return validator.validate(predicate, on_fail, on_exception)

        return self._then(step)

    def validate_action(
        self,
        action: Callable[[T], Any],
        on_exception: Callable[[T, Exception], None] | None = None,
    ) -> PendingValidation[T]:
        """Chain a ``validate_action`` step."""

        async def step(validator: Validated[T]) -> Validated[T]:
            return validator.validate_action(action, on_exception)

        return self._then(step)

    def validate_async(
        self,
        predicate: Callable[[T], Any],
        on_fail: Callable[[T], None] | None = None,
        on_exception: Callable[[T, Exception], None] | None = None,
    ) -> PendingValidation[T]:
        """Chain a ``validate_async`` step."""

        async def step(validator: Validated[T]) -> Validated[T]:
            return await validator.validate_async(predicate, on_fail, on_exception)

        return self._then(step)

    def validate_action_async(
        self,
        action: Callable[[T], Any],
        on_exception: Callable[[T, Exception], None] | None = None,
    ) -> PendingValidation[T]:
        """Chain a ``validate_action_async`` step."""

        async def step(validator: Validated[T]) -> Validated[T]:
            return await validator.validate_action_async(action, on_exception)

        return self._then(step)

    def skip_if_already_invalid(self, enable: bool = True) -> PendingValidation[T]:
        """Chain a ``skip_if_already_invalid`` call."""

        async def step(validator: Validated[T]) -> Validated[T]:
            return validator.skip_if_already_invalid(enable)

        return self._then(step)

    def force_skip_if(self, predicate: Callable[[T], Any]) -> PendingValidation[T]:
        """Chain a ``force_skip_if`` call."""

        async def step(validator: Validated[T]) -> Validated[T]:
            return validator.force_skip_if(predicate)

        return self._then(step)

    def stop_force_skipping(self) -> PendingValidation[T]:
        """Chain a ``stop_force_skipping`` call."""

        async def step(validator: Validated[T]) -> Validated[T]:
            return validator.stop_force_skipping()

        return self._then(step)

    async def is_valid(self) -> bool:
        """Await the chain and return the validator's outcome."""
        validator = await self._resolve()
        return validator.is_valid()

    async def ensure_valid(self) -> Validated[T]:
        """Await the chain and raise ``InvalidTargetError`` if it ended invalid."""
        validator = await self._resolve()
        logger.debug("Pending chain resolved to %r", validator)
        return validator.ensure_valid()

    def __repr__(self) -> str:
        state = "resolved" if self._resolved is not None else "pending"
        return f"PendingValidation({state})"


def pending(source: Validated[T] | Awaitable[Validated[T]]) -> PendingValidation[T]:
    """Start a pending chain from a validator or an awaitable yielding one."""
    return PendingValidation(source)


__all__ = [
    "PendingValidation",
    "pending",
]
