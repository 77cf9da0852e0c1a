"""Shared fixtures for validchain tests."""

import pytest


class CallLog:
    """Records callback invocations in order."""

    def __init__(self):
        self.calls = []

    def predicate(self, result=True, name="predicate"):
        def check(value):
            self.calls.append((name, value))
            return result(value) if callable(result) else result

        return check

    def async_predicate(self, result=True, name="predicate"):
        async def check(value):
            self.calls.append((name, value))
            return result(value) if callable(result) else result

        return check

    def on_fail(self, value):
        self.calls.append(("on_fail", value))

    def on_exception(self, value, error):
        self.calls.append(("on_exception", value, error))

    def names(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def log():
    return CallLog()


@pytest.fixture
def boom():
    return RuntimeError("boom")
