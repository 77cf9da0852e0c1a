"""Validation chain over a single value.

``ScalarValidator`` is the base case of the library: it is the only component
that calls user predicates and actions and applies the exception policy.
``SequenceValidator`` reuses it for its bookkeeping.

Example:
    ```python
    from validchain import wrap_for_validation

    errors = []
    validator = (
        wrap_for_validation("alice@example.com")
        .validate(lambda s: "@" in s, on_fail=lambda s: errors.append(f"{s}: no @"))
        .validate(lambda s: len(s) < 64)
    )
    validator.is_valid()
    # True
    ```
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from validchain.config import ValidatorConfig
from validchain.exceptions import InvalidTargetError
from validchain.protocol import reject_awaitable, require_callable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ScalarValidator(Generic[T]):
    """Validation state machine for one target value.

    The invalid flag is sticky: once set it never reverts. Force-skipping and
    skip-if-invalid are caller-controlled toggles checked before every step.

    Args:
        target: The value under validation. Held by reference, never replaced.
        skip_if_already_invalid: Skip steps once the validator is invalid.
            ``True`` here overrides the config value.
        config: Optional configuration (skip policy and name).
    """

    def __init__(
        self,
        target: T,
        skip_if_already_invalid: bool = False,
        *,
        config: ValidatorConfig | None = None,
    ) -> None:
        config = config or ValidatorConfig()
        self._target = target
        self._name = config.name
        self._skip_if_invalid = skip_if_already_invalid or config.skip_if_already_invalid
        self._force_skip = False
        self._is_invalid = False

    @property
    def target(self) -> T:
        """The value under validation."""
        return self._target

    @property
    def name(self) -> str | None:
        """The configured name, if any."""
        return self._name

    def validate(
        self,
        predicate: Callable[[T], Any],
        on_fail: Callable[[T], None] | None = None,
        on_exception: Callable[[T, Exception], None] | None = None,
    ) -> ScalarValidator[T]:
        """Validate the target with a predicate.

        Args:
            predicate: Called with the target; a falsy result fails the step.
            on_fail: Called with the target when the predicate result is falsy.
            on_exception: Called with the target and the exception when the
                predicate (or ``on_fail``) raises. When omitted the exception
                is re-raised.

        Returns:
            This validator.

        Raises:
            ValidatorUsageError: If ``predicate`` is not callable, or returns an
                awaitable (use ``validate_async`` for coroutine functions).
            Exception: Whatever the predicate raised, when no ``on_exception``
                handler was supplied. The validator is already invalid.
        """
        require_callable(predicate, "predicate")
        if self._can_skip():
            return self

        try:
            result = predicate(self._target)
        except Exception as e:
            self._handle_fault(e, on_exception)
            return self

        reject_awaitable(result, "predicate", "use validate_async for coroutine functions")
        try:
            if not result:
                self._fail(on_fail)
        except Exception as e:
            self._handle_fault(e, on_exception)

        return self

    def validate_action(
        self,
        action: Callable[[T], Any],
        on_exception: Callable[[T, Exception], None] | None = None,
    ) -> ScalarValidator[T]:
        """Validate the target with an action that signals failure by raising.

        The action's return value is ignored. Exception policy is the same as
        for ``validate``.
        """
        require_callable(action, "action")
        return self.validate(_always_true(action), None, on_exception)

    async def validate_async(
        self,
        predicate: Callable[[T], Any],
        on_fail: Callable[[T], None] | None = None,
        on_exception: Callable[[T, Exception], None] | None = None,
    ) -> ScalarValidator[T]:
        """Validate the target with an async predicate.

        The predicate's result is awaited when it is awaitable, so coroutine
        functions and plain callables are both accepted. Exceptions raised
        while calling or awaiting follow the ``validate`` policy.
        """
        require_callable(predicate, "predicate")
        if self._can_skip():
            return self

        try:
            result = predicate(self._target)
            if inspect.isawaitable(result):
                result = await result
            if not result:
                self._fail(on_fail)
        except Exception as e:
            self._handle_fault(e, on_exception)

        return self

    async def validate_action_async(
        self,
        action: Callable[[T], Any],
        on_exception: Callable[[T, Exception], None] | None = None,
    ) -> ScalarValidator[T]:
        """Async form of ``validate_action``."""
        require_callable(action, "action")
        return await self.validate_async(_always_true_async(action), None, on_exception)

    def is_valid(self) -> bool:
        """Return True unless some step failed or faulted."""
        return not self._is_invalid

    def ensure_valid(self) -> ScalarValidator[T]:
        """Return this validator, or raise if it is invalid.

        Raises:
            InvalidTargetError: If some step failed or faulted.
        """
        if self._is_invalid:
            raise InvalidTargetError(
                f"Validation failed for {self._describe()}",
                context={"name": self._name, "target": _short_repr(self._target)},
            )
        return self

    def skip_if_already_invalid(self, enable: bool = True) -> ScalarValidator[T]:
        """Set whether future steps are skipped once the validator is invalid."""
        self._skip_if_invalid = enable
        return self

    def force_skip_if(self, predicate: Callable[[T], Any]) -> ScalarValidator[T]:
        """Skip all future steps if ``predicate(target)`` is truthy.

        The predicate is evaluated once, immediately. A falsy result leaves an
        already engaged force-skip in place.
        """
        require_callable(predicate, "predicate")
        result = predicate(self._target)
        reject_awaitable(result, "predicate", "force-skip conditions must be synchronous")
        if result:
            self._force_skip = True
        return self

    def stop_force_skipping(self) -> ScalarValidator[T]:
        """Clear force-skipping."""
        self._force_skip = False
        return self

    def _can_skip(self) -> bool:
        if self._force_skip:
            logger.debug("%s: step skipped (force-skip)", self)
            return True
        if self._skip_if_invalid and self._is_invalid:
            logger.debug("%s: step skipped (already invalid)", self)
            return True
        return False

    def _handle_fault(
        self,
        error: Exception,
        on_exception: Callable[[T, Exception], None] | None,
    ) -> None:
        self._mark_invalid()
        if on_exception is None:
            logger.debug("%s: unhandled fault, re-raising: %r", self, error)
            raise error
        logger.debug("%s: fault handled by on_exception: %r", self, error)
        on_exception(self._target, error)

    def _fail(self, on_fail: Callable[[T], None] | None) -> None:
        logger.debug("%s: step failed", self)
        if on_fail is not None:
            on_fail(self._target)
        self._mark_invalid()

    def _mark_invalid(self) -> None:
        self._is_invalid = True

    def _describe(self) -> str:
        return self._name if self._name else _short_repr(self._target)

    def __repr__(self) -> str:
        state = "valid" if self.is_valid() else "invalid"
        return f"ScalarValidator({self._describe()}, {state})"


def _always_true(action: Callable[[T], Any]) -> Callable[[T], Any]:
    def predicate(value: T) -> Any:
        result = action(value)
        # Hand an awaitable back so the synchronous step rejects it.
        return result if inspect.isawaitable(result) else True

    return predicate


def _always_true_async(action: Callable[[T], Any]) -> Callable[[T], Any]:
    async def predicate(value: T) -> bool:
        result = action(value)
        if inspect.isawaitable(result):
            await result
        return True

    return predicate


def _short_repr(value: Any, limit: int = 60) -> str:
    text = repr(value)
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


def wrap_for_validation(
    target: T,
    skip_if_already_invalid: bool = False,
    *,
    config: ValidatorConfig | None = None,
) -> ScalarValidator[T]:
    """Wrap a value to start a validation chain.

    Args:
        target: The value to validate.
        skip_if_already_invalid: Skip further steps after the first failure.
        config: Optional configuration.

    Returns:
        A new ScalarValidator.
    """
    return ScalarValidator(target, skip_if_already_invalid, config=config)
