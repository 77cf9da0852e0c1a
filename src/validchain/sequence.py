"""Validation chain over every element of a sequence.

``SequenceValidator`` fans each step out over its elements and records the
outcome in one shared invalid flag. The flag and the skip-on-invalid policy
live in an inner ``ScalarValidator`` that wraps the sequence itself; the
sequence's own content is never validated through it.

Elements are always processed one after another, in iteration order. The
async forms await each element's step before starting the next, so
callbacks fire in a deterministic left-to-right order.

Example:
    ```python
    from validchain import wrap_sequence_for_validation

    bad = []
    validator = (
        wrap_sequence_for_validation([3, -1, 7])
        .force_skip_if(lambda n: n == 7)
        .validate(lambda n: n > 0, on_fail=bad.append)
    )
    validator.is_valid(), bad
    # (False, [-1])
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any, Generic, TypeVar

from validchain.config import ValidatorConfig
from validchain.exceptions import InvalidTargetError
from validchain.protocol import reject_awaitable, require_callable
from validchain.scalar import ScalarValidator, _always_true, _always_true_async

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SequenceValidator(Generic[T]):
    """Validation state machine applied to each element of a sequence.

    There is no per-element validity: any element that fails or faults marks
    the whole sequence invalid. Processing does not stop at the first failure
    unless skip-if-invalid is enabled, in which case every later element is
    skipped by the inner validator.

    Force-skipping works per element: ``force_skip_if`` stores a condition
    that is evaluated against each element on every step, and only matching
    elements are skipped.

    Args:
        elements: The elements to validate. Sequences are held by reference;
            other iterables are materialised into a tuple once.
        skip_if_already_invalid: Skip steps once the sequence is invalid.
        config: Optional configuration (skip policy and name).
    """

    def __init__(
        self,
        elements: Iterable[T],
        skip_if_already_invalid: bool = False,
        *,
        config: ValidatorConfig | None = None,
    ) -> None:
        if not isinstance(elements, Sequence):
            elements = tuple(elements)
        self._elements: Sequence[T] = elements
        self._inner: ScalarValidator[Sequence[T]] = ScalarValidator(
            elements, skip_if_already_invalid, config=config
        )
        self._force_skip_condition: Callable[[T], Any] | None = None

    @property
    def elements(self) -> Sequence[T]:
        """The elements under validation."""
        return self._elements

    @property
    def name(self) -> str | None:
        """The configured name, if any."""
        return self._inner.name

    def validate(
        self,
        predicate: Callable[[T], Any],
        on_fail: Callable[[T], None] | None = None,
        on_exception: Callable[[T, Exception], None] | None = None,
    ) -> SequenceValidator[T]:
        """Validate every element with a predicate.

        Args:
            predicate: Called with each element; a falsy result fails it.
            on_fail: Called with each element whose predicate result is falsy.
            on_exception: Called with the element and the exception when the
                predicate raises. When omitted the first fault is re-raised
                and the remaining elements are not processed.

        Returns:
            This validator.
        """
        require_callable(predicate, "predicate")

        for element in self._elements:
            if self._needs_force_skipping(element):
                continue
            self._inner.validate(*_bind_step(element, predicate, on_fail, on_exception))

        return self

    def validate_action(
        self,
        action: Callable[[T], Any],
        on_exception: Callable[[T, Exception], None] | None = None,
    ) -> SequenceValidator[T]:
        """Run an action against every element; raising marks invalid."""
        require_callable(action, "action")
        return self.validate(_always_true(action), None, on_exception)

    async def validate_async(
        self,
        predicate: Callable[[T], Any],
        on_fail: Callable[[T], None] | None = None,
        on_exception: Callable[[T, Exception], None] | None = None,
    ) -> SequenceValidator[T]:
        """Validate every element with an async predicate, one at a time.

        This does not run elements concurrently; it only supports predicates
        that need to await.
        """
        require_callable(predicate, "predicate")

        for element in self._elements:
            if self._needs_force_skipping(element):
                continue
            await self._inner.validate_async(*_bind_step(element, predicate, on_fail, on_exception))

        return self

    async def validate_action_async(
        self,
        action: Callable[[T], Any],
        on_exception: Callable[[T, Exception], None] | None = None,
    ) -> SequenceValidator[T]:
        """Async form of ``validate_action``, one element at a time."""
        require_callable(action, "action")
        return await self.validate_async(_always_true_async(action), None, on_exception)

    def is_valid(self) -> bool:
        """Return True unless some element failed or faulted."""
        return self._inner.is_valid()

    def ensure_valid(self) -> SequenceValidator[T]:
        """Return this validator, or raise if it is invalid.

        Raises:
            InvalidTargetError: If some element failed or faulted.
        """
        try:
            self._inner.ensure_valid()
        except InvalidTargetError as e:
            raise InvalidTargetError(
                f"Validation failed for {self._describe()}",
                context={**e.context, "size": len(self._elements)},
            ) from None
        return self

    def skip_if_already_invalid(self, enable: bool = True) -> SequenceValidator[T]:
        """Set whether remaining elements and steps are skipped once invalid."""
        self._inner.skip_if_already_invalid(enable)
        return self

    def force_skip_if(self, predicate: Callable[[T], Any]) -> SequenceValidator[T]:
        """Skip each element for which ``predicate(element)`` is truthy.

        Replaces any previously stored condition.
        """
        require_callable(predicate, "predicate")
        self._force_skip_condition = predicate
        return self

    def stop_force_skipping(self) -> SequenceValidator[T]:
        """Forget the per-element skip condition."""
        self._force_skip_condition = None
        return self

    def _needs_force_skipping(self, element: T) -> bool:
        # Evaluated on every step: elements may change between steps.
        if self._force_skip_condition is None:
            return False
        result = self._force_skip_condition(element)
        reject_awaitable(result, "predicate", "force-skip conditions must be synchronous")
        if result:
            logger.debug("%s: element skipped (force-skip): %r", self, element)
            return True
        return False

    def _describe(self) -> str:
        if self._inner.name:
            return self._inner.name
        return f"{type(self._elements).__name__} of {len(self._elements)}"

    def __repr__(self) -> str:
        state = "valid" if self.is_valid() else "invalid"
        return f"SequenceValidator({self._describe()}, {state})"


def _bind_step(
    element: T,
    predicate: Callable[[T], Any],
    on_fail: Callable[[T], None] | None,
    on_exception: Callable[[T, Exception], None] | None,
) -> tuple[
    Callable[[Any], Any], Callable[[Any], None], Callable[[Any, Exception], None] | None
]:
    """Rebind step callables so the inner validator calls them with ``element``.

    A missing ``on_exception`` stays missing so the inner validator re-raises.
    """

    def bound_predicate(_: Any) -> Any:
        return predicate(element)

    def bound_on_fail(_: Any) -> None:
        if on_fail is not None:
            on_fail(element)

    if on_exception is None:
        return bound_predicate, bound_on_fail, None

    def bound_on_exception(_: Any, error: Exception) -> None:
        on_exception(element, error)

    return bound_predicate, bound_on_fail, bound_on_exception


def wrap_sequence_for_validation(
    elements: Iterable[T],
    skip_if_already_invalid: bool = False,
    *,
    config: ValidatorConfig | None = None,
) -> SequenceValidator[T]:
    """Wrap a sequence to start a validation chain over its elements.

    Args:
        elements: The elements to validate.
        skip_if_already_invalid: Skip further elements and steps after the
            first failure.
        config: Optional configuration.

    Returns:
        A new SequenceValidator.
    """
    return SequenceValidator(elements, skip_if_already_invalid, config=config)
