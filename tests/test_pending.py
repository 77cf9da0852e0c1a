"""Tests for validchain.pending module."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from validchain import (
    InvalidTargetError,
    PendingValidation,
    ScalarValidator,
    ValidatorUsageError,
    pending,
    wrap_for_validation,
    wrap_sequence_for_validation,
)


class TestConstruction:

    async def test_from_validator(self):
        validator = wrap_for_validation(1)
        assert await pending(validator) is validator

    async def test_from_coroutine(self):
        validator = wrap_for_validation(1)
        assert await pending(validator.validate_async(lambda _: True)) is validator

    async def test_from_task(self):
        validator = wrap_for_validation(1)
        task = asyncio.ensure_future(validator.validate_async(lambda _: True))
        assert await pending(task) is validator

    def test_rejects_other_sources(self):
        with pytest.raises(ValidatorUsageError):
            PendingValidation(42)


class TestChaining:

    async def test_steps_run_in_chain_order(self):
        order = []

        async def first(n):
            order.append("first")
            return True

        def second(n):
            order.append("second")
            return True

        async def third(n):
            order.append("third")

        validator = await (
            pending(wrap_for_validation(1))
            .validate_async(first)
            .validate(second)
            .validate_action_async(third)
            .validate_action(lambda n: order.append("fourth"))
        )
        assert order == ["first", "second", "third", "fourth"]
        assert isinstance(validator, ScalarValidator)
        assert validator.is_valid()

    async def test_nothing_runs_until_awaited(self):
        predicate = Mock(return_value=True)
        chain = pending(wrap_for_validation(1)).validate(predicate)
        predicate.assert_not_called()
        await chain
        predicate.assert_called_once_with(1)

    async def test_stage_runs_once(self):
        predicate = Mock(return_value=True)
        chain = pending(wrap_for_validation(1)).validate(predicate)
        first = await chain
        second = await chain
        assert first is second
        predicate.assert_called_once()

    async def test_is_valid(self):
        chain = pending(wrap_for_validation(1)).validate_async(AsyncMock(return_value=False))
        assert await chain.is_valid() is False

    async def test_skip_and_force_skip_calls(self):
        predicate = Mock(return_value=True)
        validator = await (
            pending(wrap_for_validation(1))
            .skip_if_already_invalid()
            .validate(lambda _: False)
            .validate(predicate)
            .skip_if_already_invalid(False)
            .force_skip_if(lambda _: True)
            .validate(predicate)
            .stop_force_skipping()
            .validate(predicate)
        )
        predicate.assert_called_once_with(1)
        assert not validator.is_valid()

    async def test_sequence_validator(self):
        on_fail = Mock()
        validator = await (
            pending(wrap_sequence_for_validation([1, 2, 3]))
            .force_skip_if(lambda n: n == 3)
            .validate_async(AsyncMock(return_value=False), on_fail)
        )
        assert [c.args[0] for c in on_fail.call_args_list] == [1, 2]
        assert not validator.is_valid()

    async def test_unhandled_fault_propagates(self, boom):
        chain = pending(wrap_for_validation(1)).validate_async(AsyncMock(side_effect=boom))
        with pytest.raises(RuntimeError) as exc_info:
            await chain
        assert exc_info.value is boom

    async def test_ensure_valid(self):
        chain = pending(wrap_for_validation(1)).validate(lambda _: False)
        with pytest.raises(InvalidTargetError):
            await chain.ensure_valid()

    async def test_ensure_valid_returns_validator(self):
        validator = wrap_for_validation(1)
        assert await pending(validator).ensure_valid() is validator
