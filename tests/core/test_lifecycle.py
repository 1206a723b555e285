import pytest

from iFilter.core.lifecycle import OnReadyHook


def test_on_ready_hook_runs_once():
    calls = []
    hook = OnReadyHook(lambda: calls.append("ready"))

    assert hook.fire() is True
    assert hook.fire() is False
    assert hook.fired
    assert calls == ["ready"]


def test_on_ready_hook_does_not_retry_after_failure():
    calls = []

    def boom():
        calls.append("boom")
        raise RuntimeError("boom")

    hook = OnReadyHook(boom)

    with pytest.raises(RuntimeError):
        hook.fire()
    assert hook.fire() is False
    assert calls == ["boom"]
